import glob
import inspect
import os
import sys
from importlib.machinery import all_suffixes
from typing import Optional

from django.conf import settings

from viewcomponents.exceptions import (
    AmbiguousTemplate,
    MissingTemplate,
    NotOverriddenConstructor,
)

TEMPLATE_ENCODING = "utf-8"


class TemplateSource:
    """
    The raw text of a component's one template, along with its kind (the symbolic
    extension used to pick a handler) and where it was found. ``origin`` is
    ``None`` for inline templates.
    """

    def __init__(self, source: str, kind: str, origin: Optional[str] = None):
        self.source = source
        self.kind = kind
        self.origin = origin

    @property
    def is_inline(self) -> bool:
        return self.origin is None

    def __repr__(self):
        return "<TemplateSource kind=%r origin=%r>" % (self.kind, self.origin)


def get_default_template_kind() -> str:
    return getattr(settings, "VIEWCOMPONENTS_DEFAULT_TEMPLATE_KIND", "html")


def get_template_kind(path: str) -> str:
    # "badge.html" -> "html", "badge.html.jinja" -> "jinja"
    return os.path.splitext(path)[1].lstrip(".")


def get_inline_template(component_class) -> Optional[str]:
    return component_class.get_template_source()


def has_inline_template(component_class) -> bool:
    return get_inline_template(component_class) is not None


def get_constructor_file(component_class) -> str:
    """
    Return the path of the file defining the component class's own ``__init__``.
    """
    if "__init__" not in component_class.__dict__:
        raise NotOverriddenConstructor(
            "%s must implement __init__ so that its sidecar template can be found "
            "next to the file that defines it." % component_class.__qualname__
        )

    constructor = inspect.unwrap(component_class.__dict__["__init__"])
    filename = inspect.getsourcefile(constructor) or inspect.getfile(constructor)
    return os.path.abspath(filename)


def is_python_file(path: str) -> bool:
    return any(path.endswith(suffix) for suffix in all_suffixes())


def find_sidecar_templates(component_class) -> list:
    """
    Return every file sharing the base name of the file that defines the
    component's constructor, excluding that file and any other Python module files.
    """
    filename = get_constructor_file(component_class)
    filename_without_extension = os.path.splitext(filename)[0]

    candidates = glob.glob(glob.escape(filename_without_extension) + ".*")
    return sorted(
        path
        for path in candidates
        if os.path.isfile(path)
        and os.path.abspath(path) != filename
        and not is_python_file(path)
    )


def find_sidecar_template(component_class) -> str:
    sibling_files = find_sidecar_templates(component_class)

    if len(sibling_files) > 1:
        raise AmbiguousTemplate(
            "More than one template found for %s: %s. There can only be one sidecar "
            "template file per component."
            % (
                component_class.__qualname__,
                ", ".join(os.path.basename(path) for path in sibling_files),
            ),
            candidates=sibling_files,
        )

    if not sibling_files:
        raise MissingTemplate(
            "Could not find a template for %s. Either define a template, set "
            "template_file, or add a sidecar template file."
            % component_class.__qualname__
        )

    return sibling_files[0]


def get_declared_template_file(component_class) -> Optional[str]:
    template_file = getattr(component_class, "template_file", None)
    if template_file is None:
        return None

    if os.path.isabs(template_file):
        path = template_file
    else:
        # relative to the module of the class that declared template_file, which
        # may be a base class defined elsewhere
        declaring_class = next(
            klass for klass in component_class.__mro__ if "template_file" in klass.__dict__
        )
        module = sys.modules[declaring_class.__module__]
        path = os.path.join(os.path.dirname(os.path.abspath(module.__file__)), template_file)

    if not os.path.isfile(path):
        raise MissingTemplate(
            "Template file %r declared by %s does not exist (looked in %s)."
            % (template_file, component_class.__qualname__, path)
        )
    return path


def read_template_file(path: str) -> str:
    with open(path, encoding=TEMPLATE_ENCODING) as f:
        return f.read()


def locate_template(component_class) -> TemplateSource:
    """
    Find the one template belonging to ``component_class``.

    An inline template (the ``template`` attribute, or an overridden
    ``get_template_source`` classmethod) bypasses file lookup entirely and uses
    the class's ``template_kind``, or the default kind. Otherwise a declared
    ``template_file`` is used, and failing that the single sidecar file next to
    the module defining ``__init__``.
    """
    inline_source = get_inline_template(component_class)
    if inline_source is not None:
        if getattr(component_class, "template_file", None) is not None:
            raise AmbiguousTemplate(
                "%s defines both an inline template and template_file. Only one of "
                "the two may be set." % component_class.__qualname__
            )
        kind = getattr(component_class, "template_kind", None) or get_default_template_kind()
        return TemplateSource(inline_source, kind)

    path = get_declared_template_file(component_class)
    if path is None:
        path = find_sidecar_template(component_class)

    return TemplateSource(read_template_file(path), get_template_kind(path), origin=path)
