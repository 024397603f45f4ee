from django.core.checks import Error, Tags, register

from viewcomponents.exceptions import (
    AmbiguousTemplate,
    ComponentConfigurationError,
    HandlerNotFound,
    MissingTemplate,
    NotOverriddenConstructor,
)

ERROR_IDS = [
    (MissingTemplate, "viewcomponents.E001"),
    (AmbiguousTemplate, "viewcomponents.E002"),
    (NotOverriddenConstructor, "viewcomponents.E003"),
    (HandlerNotFound, "viewcomponents.E004"),
    (ComponentConfigurationError, "viewcomponents.E005"),
]

HINTS = {
    "viewcomponents.E001": "Add a template file named after the module defining {name}, "
    "set {name}.template_file, or define {name}.template.",
    "viewcomponents.E002": "Remove or rename all but one of the template files for {name}.",
    "viewcomponents.E003": "Define {name}.__init__, or declare template_file or template "
    "so that no sidecar lookup is needed.",
    "viewcomponents.E004": "Register a template handler for this kind in "
    "VIEWCOMPONENTS_TEMPLATE_HANDLERS, or rename the template file.",
}


def get_error_id(error):
    for error_class, error_id in ERROR_IDS:
        if isinstance(error, error_class):
            return error_id


def check_component_templates(component_classes):
    """
    Resolve the template and template handler of each component class, without
    compiling anything, and return a list of check Errors for those that fail.
    """
    from viewcomponents.handlers import get_handler_registry
    from viewcomponents.locator import locate_template

    errors = []
    registry = get_handler_registry()

    for cls in component_classes:
        try:
            template_source = locate_template(cls)
            registry.resolve(template_source.kind)
        except ComponentConfigurationError as e:
            error_id = get_error_id(e)
            errors.append(
                Error(
                    str(e),
                    hint=HINTS.get(error_id, "").format(name=cls.__qualname__) or None,
                    obj=cls,
                    id=error_id,
                )
            )

    return errors


@register(Tags.templates)
def component_template_check(app_configs, **kwargs):
    from viewcomponents.components import get_component_classes

    component_classes = get_component_classes()
    if app_configs is not None:
        app_modules = [app_config.name for app_config in app_configs]
        component_classes = [
            cls
            for cls in component_classes
            if any(
                cls.__module__ == name or cls.__module__.startswith(name + ".")
                for name in app_modules
            )
        ]

    return check_component_templates(component_classes)
