"""Custom exceptions for the context entity model."""


class NgsiError(Exception):
    """Base class for all model errors."""

    pass


class FieldSyntaxError(NgsiError, ValueError):
    """Raised when an id, type or attribute name violates field syntax rules."""

    def __init__(self, field: str):
        self.field: str = field
        super().__init__(f"'{field}': syntax error for field")


class AttributeNameError(NgsiError, ValueError):
    """Raised when an attribute name is syntactically valid but reserved."""

    def __init__(self, name: str):
        self.name: str = name
        super().__init__(f"'{name}' is not a valid attribute name")


class InvalidValueError(NgsiError, ValueError):
    """Raised when a value cannot be admitted by a setter or builder."""

    pass


class NotFoundError(NgsiError, KeyError):
    """Raised when an entity has no attribute with the requested name."""

    def __init__(self, name: str):
        self.name: str = name
        super().__init__(f"Entity has no attribute '{name}'")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class TypeMismatchError(NgsiError, TypeError):
    """Raised when a typed getter is used on an attribute with another tag."""

    def __init__(self, expected: str, actual: str):
        self.expected: str = expected
        self.actual: str = actual
        super().__init__(f"Attribute is not {expected}, but '{actual}'")


class CastError(NgsiError, TypeError):
    """Raised when the tag matches but the value has the wrong representation."""

    def __init__(self, detail: str = "could not cast the attribute of the entity"):
        super().__init__(detail)


class DecodeError(NgsiError, ValueError):
    """Raised when a document cannot be decoded into the model."""

    pass
