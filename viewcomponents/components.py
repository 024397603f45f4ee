from typing import Any, MutableMapping, Optional
from weakref import WeakSet

from django.core.exceptions import ValidationError
from django.utils.safestring import SafeString

from viewcomponents.compiler import ensure_compiled
from viewcomponents.exceptions import ComponentValidationError
from viewcomponents.url_helpers import URLHelper
from viewcomponents.validation import collect_rules, merge_clean_error, run_rules

# classes drop out once nothing else references them
COMPONENT_CLASSES = WeakSet()


def get_component_classes(include_abstract=False):
    """
    Returns every Component subclass that is still referenced, ordered by module and name.
    """
    component_classes = sorted(
        COMPONENT_CLASSES, key=lambda cls: (cls.__module__, cls.__qualname__)
    )
    if include_abstract:
        return component_classes
    return [cls for cls in component_classes if not cls.__dict__.get("abstract", False)]


class Component:
    """
    An object that renders itself through one template.

    Subclasses set their attributes in ``__init__`` and provide exactly one template:

    - a sidecar file next to the module defining ``__init__`` and sharing its base
      name (``state.py`` -> ``state.html``); the extension selects the template handler
    - ``template_file``, a path relative to the module defining the class
    - ``template``, an inline template string (or an override of
      ``get_template_source``), rendered with ``template_kind``

    Example::

        # components/greeting.py
        class Greeting(Component):
            validation_rules = [Presence("content")]

            def __init__(self, title):
                self.title = title

        # components/greeting.html
        <span title="{{ title }}">Hello, {{ content }}!</span>

        {% load viewcomponents_tags %}
        {% component_block greeting %}world{% endcomponent_block %}

    renders ``<span title="greeting">Hello, world!</span>``.
    """

    abstract = True

    template: Optional[str] = None
    template_kind: Optional[str] = None
    template_file: Optional[str] = None

    validation_rules = []

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._validation_rules = collect_rules(cls)
        COMPONENT_CLASSES.add(cls)

    def __init__(self, *args, **kwargs):
        pass

    @classmethod
    def get_template_source(cls) -> Optional[str]:
        """
        Return the inline template source, or None to look for a template file.
        """
        return cls.template

    @property
    def content(self):
        return getattr(self, "_content", None)

    @property
    def urls(self) -> Optional[URLHelper]:
        return getattr(self, "_urls", None)

    def get_context_data(
        self, parent_context: Optional[MutableMapping[str, Any]] = None
    ) -> MutableMapping[str, Any]:
        context = {
            name: value
            for name, value in vars(self).items()
            if not name.startswith("_")
        }
        context.update(
            {
                "component": self,
                "content": self.content,
                "urls": self.urls,
            }
        )
        return context

    def clean(self):
        """
        Hook for validation that does not belong to a single attribute. Raise
        ValidationError to fail the render.
        """
        pass

    def get_validation_errors(self):
        errors = run_rules(self, self._validation_rules)
        try:
            self.clean()
        except ValidationError as e:
            merge_clean_error(errors, e)
        return errors

    def full_clean(self):
        errors = self.get_validation_errors()
        if errors:
            raise ComponentValidationError(errors, component=self)

    @property
    def errors(self):
        return self.get_validation_errors()

    def is_valid(self):
        return not self.get_validation_errors()

    def capture_content(self, content, parent_context):
        if callable(content):
            return content(parent_context)
        return content

    def render_in(
        self,
        parent_context: Optional[MutableMapping[str, Any]] = None,
        content=None,
        url_helper: Optional[URLHelper] = None,
    ) -> SafeString:
        """
        Render the component and return its markup.

        ``parent_context`` is the context of the calling template (a
        ``django.template.Context`` or a plain dict). ``content`` is either a string
        or a callable taking ``parent_context`` (such as a template nodelist's
        ``render``); its result is available to the template as ``content`` for this
        render only. ``url_helper`` defaults to one built from the request in
        ``parent_context``.

        Raises ComponentValidationError, producing no output, if validation fails.
        """
        render_routine = ensure_compiled(type(self))

        try:
            if content is not None:
                self._content = self.capture_content(content, parent_context)
            self._urls = url_helper or URLHelper.from_context(parent_context)
            self.full_clean()
            return render_routine(self, parent_context)
        finally:
            self._content = None
            self._urls = None

    def render_html(
        self, parent_context: Optional[MutableMapping[str, Any]] = None
    ) -> SafeString:
        return self.render_in(parent_context)
