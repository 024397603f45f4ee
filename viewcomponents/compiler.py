import enum
import logging
import threading
from weakref import WeakKeyDictionary

from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.safestring import mark_safe

from viewcomponents.handlers import get_handler_registry, resolve_handler
from viewcomponents.locator import locate_template
from viewcomponents.utils.context import get_context_request

logger = logging.getLogger("viewcomponents")


class CompileState(enum.Enum):
    UNCOMPILED = "uncompiled"
    COMPILING = "compiling"
    COMPILED = "compiled"
    FAILED = "failed"


class RenderRoutine:
    """
    The render routine shared by every instance of one component class.
    """

    def __init__(self, component_class, template, template_source):
        self.component_class = component_class
        self.template = template
        self.template_source = template_source

    def __call__(self, component, parent_context=None):
        context_data = component.get_context_data(parent_context)
        if context_data is None:
            raise TypeError("Expected a dict from get_context_data, got None")

        request = get_context_request(parent_context)
        output_buffer = self.template.render(context_data, request=request)
        return mark_safe(output_buffer)

    def __repr__(self):
        return "<RenderRoutine for %s (%s)>" % (
            self.component_class.__qualname__,
            self.template_source.kind,
        )


class CompileResult:
    def __init__(self, routine=None, error=None):
        self.routine = routine
        self.error = error
        # the traceback as of the failed compile; re-raising must not extend it
        self.traceback = error.__traceback__ if error is not None else None

    @property
    def state(self):
        return CompileState.FAILED if self.error is not None else CompileState.COMPILED

    def get(self):
        if self.error is not None:
            raise self.error.with_traceback(self.traceback)
        return self.routine


# component class -> CompileResult
_compiled = WeakKeyDictionary()
# component class -> lock held while that class compiles
_compile_locks = WeakKeyDictionary()
_compiling = WeakKeyDictionary()
_registry_lock = threading.Lock()


def _get_compile_lock(component_class):
    with _registry_lock:
        try:
            return _compile_locks[component_class]
        except KeyError:
            lock = _compile_locks[component_class] = threading.Lock()
            return lock


def compile_component(component_class):
    """
    Compile ``component_class``'s template into a new RenderRoutine, without
    touching the registry.
    """
    template_source = locate_template(component_class)
    handler = resolve_handler(template_source.kind)
    template = handler.invoke(
        template_source.source,
        kind=template_source.kind,
        origin=template_source.origin,
    )
    return RenderRoutine(component_class, template, template_source)


def ensure_compiled(component_class):
    """
    Return the RenderRoutine for ``component_class``, compiling it on first use.

    Compilation happens at most once per class: concurrent first calls wait for
    the one that compiles and all receive the same routine. A failed compilation
    is remembered, and every later call raises the same error until
    ``reset_compiled`` is called.
    """
    result = _compiled.get(component_class)
    if result is not None:
        return result.get()

    with _get_compile_lock(component_class):
        result = _compiled.get(component_class)
        if result is None:
            _compiling[component_class] = True
            try:
                result = CompileResult(routine=compile_component(component_class))
            except Exception as e:
                logger.error(
                    "Failed to compile the template for %s: %s",
                    component_class.__qualname__,
                    e,
                )
                result = CompileResult(error=e)
            else:
                logger.debug("Compiled %r", result.routine)
            finally:
                _compiling.pop(component_class, None)
            _compiled[component_class] = result

    return result.get()


def get_compile_state(component_class):
    result = _compiled.get(component_class)
    if result is not None:
        return result.state
    if _compiling.get(component_class):
        return CompileState.COMPILING
    return CompileState.UNCOMPILED


def reset_compiled(component_class=None):
    """
    Forget compiled routines (and remembered failures) so that the next render
    compiles again. Resets every class when ``component_class`` is None.
    """
    with _registry_lock:
        if component_class is None:
            _compiled.clear()
        else:
            _compiled.pop(component_class, None)


@receiver(setting_changed)
def reset_compiled_components(**kwargs):
    """
    Clear the handler registry and compiled routines when a setting they depend on changes.
    """
    if kwargs["setting"] in (
        "VIEWCOMPONENTS_TEMPLATE_HANDLERS",
        "VIEWCOMPONENTS_DEFAULT_TEMPLATE_KIND",
        "TEMPLATES",
    ):
        get_handler_registry.cache_clear()
        reset_compiled()
