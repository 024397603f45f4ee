from collections.abc import Mapping, Sized

from django.core import validators
from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.utils.translation import gettext_lazy as _


def is_blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Sized, Mapping)):
        return len(value) == 0
    return False


class Rule:
    """
    A declarative validation rule applied to one or more attributes of a component.

    Subclasses implement ``validate_value``, raising ``ValidationError`` for a bad
    value. ``allow_none`` and ``allow_blank`` skip the check for ``None`` and blank
    values respectively.
    """

    default_message = None
    code = "invalid"

    def __init__(self, *attributes, message=None, allow_none=False, allow_blank=False):
        if not attributes:
            raise TypeError("%s requires at least one attribute name" % self.__class__.__name__)
        self.attributes = attributes
        self.message = message
        self.allow_none = allow_none
        self.allow_blank = allow_blank

    def get_message(self):
        return self.message if self.message is not None else self.default_message

    def should_skip(self, value):
        if value is None and self.allow_none:
            return True
        if self.allow_blank and is_blank(value):
            return True
        return False

    def validate_value(self, value):
        raise NotImplementedError

    def validate(self, component):
        """
        Return a dict of attribute name to a list of ValidationErrors.
        """
        errors = {}
        for attribute in self.attributes:
            value = getattr(component, attribute, None)
            if self.should_skip(value):
                continue
            try:
                self.validate_value(value)
            except ValidationError as e:
                errors.setdefault(attribute, []).extend(e.error_list)
        return errors

    def __repr__(self):
        return "%s(%s)" % (
            self.__class__.__name__,
            ", ".join(repr(attribute) for attribute in self.attributes),
        )


class Presence(Rule):
    default_message = _("This value cannot be blank.")
    code = "blank"

    def validate_value(self, value):
        if is_blank(value):
            raise ValidationError(self.get_message(), code=self.code)


class Absence(Rule):
    default_message = _("This value must be blank.")
    code = "present"

    def validate_value(self, value):
        if not is_blank(value):
            raise ValidationError(self.get_message(), code=self.code)


class Inclusion(Rule):
    default_message = _("Value %(value)r is not a valid choice.")
    code = "invalid_choice"

    def __init__(self, *attributes, choices, **kwargs):
        super().__init__(*attributes, **kwargs)
        self.choices = choices

    def contains(self, value):
        try:
            return value in self.choices
        except TypeError:
            # unhashable values are never members of a dict or set of choices
            return False

    def validate_value(self, value):
        if not self.contains(value):
            raise ValidationError(
                self.get_message(), code=self.code, params={"value": value}
            )


class Exclusion(Inclusion):
    default_message = _("Value %(value)r is reserved.")
    code = "reserved"

    def validate_value(self, value):
        if self.contains(value):
            raise ValidationError(
                self.get_message(), code=self.code, params={"value": value}
            )


class Validators(Rule):
    """
    Runs arbitrary Django validator callables (anything that raises
    ValidationError) against each attribute.
    """

    def __init__(self, *attributes, validators=(), **kwargs):
        super().__init__(*attributes, **kwargs)
        self.validators = list(validators)

    def get_validators(self):
        return self.validators

    def validate_value(self, value):
        errors = []
        for validator in self.get_validators():
            try:
                validator(value)
            except ValidationError as e:
                if self.message is not None:
                    e = ValidationError(self.message, code=getattr(e, "code", self.code))
                errors.extend(e.error_list)
        if errors:
            raise ValidationError(errors)


class Length(Validators):
    def __init__(self, *attributes, minimum=None, maximum=None, **kwargs):
        if minimum is None and maximum is None:
            raise TypeError("Length requires minimum, maximum or both")
        super().__init__(*attributes, **kwargs)
        if minimum is not None:
            self.validators.append(validators.MinLengthValidator(minimum))
        if maximum is not None:
            self.validators.append(validators.MaxLengthValidator(maximum))

    def validate_value(self, value):
        if value is None:
            raise ValidationError(_("This value cannot be None."), code="null")
        super().validate_value(value)


class Format(Validators):
    def __init__(self, *attributes, regex, **kwargs):
        super().__init__(*attributes, **kwargs)
        self.validators.append(validators.RegexValidator(regex))

    def validate_value(self, value):
        super().validate_value("" if value is None else value)


def collect_rules(component_class):
    """
    Return the validation rules declared on ``component_class`` and its bases,
    base classes first.
    """
    rules = []
    for klass in reversed(component_class.__mro__):
        rules.extend(klass.__dict__.get("validation_rules", ()))
    return tuple(rules)


def run_rules(component, rules):
    """
    Run ``rules`` against ``component`` and return a dict of attribute name to
    lists of ValidationErrors. The dict is empty if every rule passed.
    """
    errors = {}
    for rule in rules:
        for attribute, attribute_errors in rule.validate(component).items():
            errors.setdefault(attribute, []).extend(attribute_errors)
    return errors


def merge_clean_error(errors, error):
    """
    Merge a ValidationError raised by a component's clean() into ``errors``.
    """
    if hasattr(error, "error_dict"):
        for attribute, attribute_errors in error.error_dict.items():
            errors.setdefault(attribute, []).extend(attribute_errors)
    else:
        errors.setdefault(NON_FIELD_ERRORS, []).extend(error.error_list)
    return errors
