from django.core.exceptions import ImproperlyConfigured, ValidationError


class ComponentConfigurationError(ImproperlyConfigured):
    """
    Base class for errors caused by how a component class is defined, rather than
    by the data it is rendered with. These are never recoverable without a code change.
    """

    pass


class MissingTemplate(ComponentConfigurationError):
    """
    Raised when a component class has no sidecar template file, no declared
    ``template_file`` and no inline template.
    """

    pass


class AmbiguousTemplate(ComponentConfigurationError):
    """
    Raised when more than one template candidate exists for a component class.
    No candidate is ever preferred over another.
    """

    def __init__(self, message, candidates=None):
        super().__init__(message)
        self.candidates = list(candidates or [])


class NotOverriddenConstructor(ComponentConfigurationError, NotImplementedError):
    """
    Raised when sidecar discovery is needed but the component class does not
    define its own ``__init__``, so there is no defining file to look next to.
    """

    pass


class HandlerNotFound(ComponentConfigurationError, LookupError):
    """
    Raised when no template handler is registered for a template kind.
    """

    pass


class HandlerInvocationMismatch(ComponentConfigurationError):
    """
    Raised when a template handler's calling convention is not one of the
    supported forms, or when it returns something that cannot be rendered.
    """

    pass


class ComponentValidationError(ValidationError):
    """
    Raised by ``Component.full_clean`` when one or more validation rules fail.
    ``error_dict`` maps attribute names (or ``NON_FIELD_ERRORS``) to lists of
    ``ValidationError`` instances.
    """

    def __init__(self, errors, component=None):
        super().__init__(errors)
        self.component = component
