from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ViewComponentsAppConfig(AppConfig):
    name = "viewcomponents"
    label = "viewcomponents"
    verbose_name = _("View components")

    def ready(self):
        from viewcomponents import checks  # NOQA: F401
