import functools
import inspect
import logging
from contextlib import ContextDecorator

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.template import engines
from django.utils.module_loading import import_string

from viewcomponents.exceptions import HandlerInvocationMismatch, HandlerNotFound

logger = logging.getLogger("viewcomponents")

DEFAULT_TEMPLATE_HANDLERS = {
    "html": "viewcomponents.handlers.DjangoTemplateHandler",
    "django": "viewcomponents.handlers.DjangoTemplateHandler",
    "jinja": "viewcomponents.handlers.Jinja2TemplateHandler",
    "jinja2": "viewcomponents.handlers.Jinja2TemplateHandler",
}


class DummyTemplate:
    """
    The minimal template object handed to a template handler. It carries the
    source and kind without any of the loader machinery of a real template.
    Binary handlers receive it with ``source=None`` and get the text separately.
    """

    def __init__(self, source=None, kind=None, origin=None):
        self.source = source
        self.kind = kind
        self.origin = origin

    @property
    def identifier(self):
        return ""

    @property
    def type(self):
        return "text/html"


class BaseHandler:
    """
    A registered template handler, with its calling convention settled at
    registration time. ``invoke`` always takes the source text separately and
    returns an object with a ``render(context, request=None)`` method.
    """

    def __init__(self, handler):
        self.handler = handler

    def call_handler(self, source, kind, origin):
        raise NotImplementedError

    def invoke(self, source, kind=None, origin=None):
        compiled = self.call_handler(source, kind, origin)
        if not callable(getattr(compiled, "render", None)):
            raise HandlerInvocationMismatch(
                "Template handler %r returned %r, which has no render() method."
                % (self.handler, compiled)
            )
        return compiled

    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self.handler)


class UnaryHandler(BaseHandler):
    """Calls ``handler(template)`` with the source embedded in the template."""

    def call_handler(self, source, kind, origin):
        return self.handler(DummyTemplate(source, kind=kind, origin=origin))


class BinaryHandler(BaseHandler):
    """Calls ``handler(template, source)`` with the source passed separately."""

    def call_handler(self, source, kind, origin):
        return self.handler(DummyTemplate(kind=kind, origin=origin), source)


def wrap_handler(handler):
    """
    Wrap ``handler`` as a UnaryHandler or BinaryHandler according to the number of
    positional arguments it accepts.
    """
    if isinstance(handler, BaseHandler):
        return handler

    if not callable(handler):
        raise HandlerInvocationMismatch("Template handler %r is not callable." % (handler,))

    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError) as e:
        raise HandlerInvocationMismatch(
            "Cannot determine the calling convention of template handler %r." % (handler,)
        ) from e

    positional = [
        param
        for param in signature.parameters.values()
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD)
    ]
    required = [param for param in positional if param.default is param.empty]
    accepts_varargs = any(
        param.kind == param.VAR_POSITIONAL for param in signature.parameters.values()
    )

    if len(required) > 2:
        raise HandlerInvocationMismatch(
            "Template handler %r requires %d arguments; expected (template) or "
            "(template, source)." % (handler, len(required))
        )
    if len(positional) >= 2 or (accepts_varargs and positional):
        return BinaryHandler(handler)
    if len(positional) == 1:
        return UnaryHandler(handler)
    if accepts_varargs:
        return BinaryHandler(handler)

    raise HandlerInvocationMismatch(
        "Template handler %r takes no positional arguments; expected (template) or "
        "(template, source)." % (handler,)
    )


class HandlerRegistry:
    """
    Maps template kinds (e.g. ``"html"``, ``"jinja"``) to template handlers.
    """

    def __init__(self):
        self._handlers = {}

    def register(self, kind, handler):
        wrapped = wrap_handler(handler)
        self._handlers[kind] = wrapped
        logger.debug("Registered template handler %r for kind %r", wrapped, kind)
        return wrapped

    def unregister(self, kind):
        self._handlers.pop(kind, None)

    def get(self, kind):
        return self._handlers.get(kind)

    def resolve(self, kind):
        try:
            return self._handlers[kind]
        except KeyError:
            raise HandlerNotFound(
                "No template handler is registered for templates of kind %r. "
                "Registered kinds: %s" % (kind, ", ".join(sorted(self._handlers)) or "none")
            )

    def kinds(self):
        return sorted(self._handlers)

    def __contains__(self, kind):
        return kind in self._handlers


def get_handler_setting():
    handlers = dict(DEFAULT_TEMPLATE_HANDLERS)
    handlers.update(getattr(settings, "VIEWCOMPONENTS_TEMPLATE_HANDLERS", {}))
    return handlers


@functools.lru_cache()
def get_handler_registry():
    """
    Returns the handler registry built from VIEWCOMPONENTS_TEMPLATE_HANDLERS, merged
    over the default handlers. A kind mapped to None is disabled.
    """
    registry = HandlerRegistry()

    for kind, handler in get_handler_setting().items():
        if handler is None:
            continue
        if isinstance(handler, str):
            handler = import_string(handler)
        if isinstance(handler, type):
            handler = handler()
        registry.register(kind, handler)

    return registry


def resolve_handler(kind):
    return get_handler_registry().resolve(kind)


def register_handler(kind, handler):
    return get_handler_registry().register(kind, handler)


class TemporaryHandler(ContextDecorator):
    def __init__(self, kind, handler):
        self.kind = kind
        self.handler = handler
        self.previous = None

    def __enter__(self):
        registry = get_handler_registry()
        self.previous = registry.get(self.kind)
        registry.register(self.kind, self.handler)

    def __exit__(self, exc_type, exc_value, traceback):
        from viewcomponents.compiler import reset_compiled

        registry = get_handler_registry()
        if self.previous is None:
            registry.unregister(self.kind)
        else:
            registry.register(self.kind, self.previous)

        # routines compiled by the temporary handler must not outlive it
        reset_compiled()


def register_handler_temporarily(kind, handler):
    """
    Register a template handler for ``kind`` temporarily. This is useful for testing.

    Can be used as a decorator::

        class TestMyHandler(SimpleTestCase):
            @register_handler_temporarily("txt", my_handler)
            def test_my_handler(self):
                pass

    or as a context manager::

        with register_handler_temporarily("txt", my_handler):
            # Handler is registered here

        # The previous handler for "txt" (if any) is restored here
    """
    return TemporaryHandler(kind, handler)


class EngineTemplateHandler:
    """
    Compiles template source with one of the project's configured template
    backends. Escaping follows that backend's autoescape setting.
    """

    backend_class_path = None

    def __init__(self, using=None):
        self.using = using

    def get_backend_class(self):
        return import_string(self.backend_class_path)

    def get_default_engine(self):
        raise ImproperlyConfigured(
            "No template engine of type %s is configured in TEMPLATES."
            % self.backend_class_path
        )

    def get_engine(self):
        if self.using is not None:
            return engines[self.using]

        backend_class = self.get_backend_class()
        for engine in engines.all():
            if isinstance(engine, backend_class):
                return engine
        return self.get_default_engine()

    def __call__(self, template):
        return self.get_engine().from_string(template.source)

    def __repr__(self):
        return "%s(using=%r)" % (self.__class__.__name__, self.using)


class DjangoTemplateHandler(EngineTemplateHandler):
    backend_class_path = "django.template.backends.django.DjangoTemplates"


class Jinja2TemplateHandler(EngineTemplateHandler):
    backend_class_path = "django.template.backends.jinja2.Jinja2"

    def __init__(self, using=None):
        super().__init__(using=using)
        self._default_engine = None

    def get_default_engine(self):
        # Without a configured Jinja2 backend, fall back to a private one with
        # Django's defaults (autoescape on).
        if self._default_engine is None:
            backend_class = self.get_backend_class()
            self._default_engine = backend_class(
                {"NAME": "viewcomponents", "DIRS": [], "APP_DIRS": False, "OPTIONS": {}}
            )
        return self._default_engine
