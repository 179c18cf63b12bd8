"""
Enum attribute exception classes.

Every error derives from EnumError and from the closest builtin exception,
so callers may catch either the package error or the builtin they expect
(ValueError/TypeError).
"""


class EnumError(Exception):
    """Base class for all enum attribute errors.
    """


class EnumConfigurationError(EnumError, ValueError):
    """Declared enum type is missing or does not implement Enumerable.
    """


class NotNullableError(EnumError, ValueError):
    """Non-nullable enum field resolved to None.
    """


class InvalidEnumError(EnumError, TypeError):
    """Value assigned to an enum field is not an instance of its enum class.
    """

    def __init__(self, model: str, key: str, expected: type, actual: type) -> None:
        self.model = model
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'Expected {model}.{key} to be instance of {expected.__name__}, '
            f'instead got {actual.__name__}')


class NoSuchEnumField(EnumError, ValueError):
    """Query scope referenced a field that is not enum-mapped.
    """

    def __init__(self, key: str, model: str) -> None:
        self.key = key
        self.model = model
        super().__init__(f'{model} has no enum field named {key!r}')


class EnumValidationError(EnumError, ValueError):
    """Value failed an enum validation rule.
    """

    def __init__(self, attribute: str, message: str) -> None:
        self.attribute = attribute
        super().__init__(message)

