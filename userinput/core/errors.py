"""Exception hierarchy for userinput.

Library code raises these; the reader and engine catch them at the
per-field seam so one broken field never aborts a whole panel.
"""


class UserInputError(Exception):
    """Base class for all userinput errors."""

    pass


class SpecError(UserInputError):
    """Raised when a spec document cannot be loaded or parsed."""

    pass


class FieldConfigurationError(UserInputError):
    """Raised when a field node is misconfigured (missing spec, unknown type, ...)."""

    def __init__(self, message: str, field_type: str | None = None):
        super().__init__(message)
        self.field_type = field_type


class LayoutError(FieldConfigurationError):
    """Raised when a rule field's layout/set attributes cannot be reconciled."""

    pass


class FactoryError(UserInputError):
    """Raised when a class identifier cannot be resolved to a capability."""

    pass


class ConditionError(UserInputError):
    """Raised when a condition id is unknown or its expression fails."""

    pass
