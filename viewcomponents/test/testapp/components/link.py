from viewcomponents.components import Component
from viewcomponents.validation import Format, Presence


class ProductLink(Component):
    template_file = "templates/product_link.html"

    validation_rules = [
        Presence("label"),
        Format("slug", regex=r"^[-a-z0-9]+$"),
    ]

    def __init__(self, slug, label):
        self.slug = slug
        self.label = label

    def get_context_data(self, parent_context=None):
        context = super().get_context_data(parent_context)
        context["href"] = self.urls.reverse("shop:product", slug=self.slug)
        return context
