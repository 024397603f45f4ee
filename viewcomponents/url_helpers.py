from django.urls import reverse

from viewcomponents.utils.context import get_context_request


class URLHelper:
    """
    URL building handed to a component for the duration of a render.

    ``current_app`` and ``urlconf`` are taken from the request in the calling
    template's context, the same way Django's ``{% url %}`` tag resolves namespaced
    URLs, so components reverse URLs relative to the page they are rendered in.
    """

    def __init__(self, current_app=None, urlconf=None):
        self.current_app = current_app
        self.urlconf = urlconf

    @classmethod
    def from_request(cls, request):
        if request is None:
            return cls()

        current_app = getattr(request, "current_app", None)
        if current_app is None:
            resolver_match = getattr(request, "resolver_match", None)
            if resolver_match is not None:
                current_app = resolver_match.namespace or None

        return cls(current_app=current_app, urlconf=getattr(request, "urlconf", None))

    @classmethod
    def from_context(cls, parent_context):
        return cls.from_request(get_context_request(parent_context))

    def reverse(self, viewname, *args, **kwargs):
        return reverse(
            viewname,
            urlconf=self.urlconf,
            args=args or None,
            kwargs=kwargs or None,
            current_app=self.current_app,
        )

    def __repr__(self):
        return "<URLHelper current_app=%r urlconf=%r>" % (self.current_app, self.urlconf)
