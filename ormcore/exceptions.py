"""Exceptions raised by ormcore."""


class OrmError(Exception):
    """Base exception for ormcore errors."""

    pass


class InvalidOperandError(OrmError):
    """Raised when an operator receives a value of the wrong shape."""

    pass


class UnsupportedOperatorError(OrmError):
    """Raised when a condition names an operator token that is not registered."""

    pass


class UnknownFieldError(OrmError):
    """Raised when a condition references a field the entity does not declare."""

    pass


class ParameterCountError(OrmError):
    """Raised when raw SQL placeholders and supplied parameters disagree."""

    pass


class MetadataValidationError(OrmError):
    """Raised when entity field or index metadata is inconsistent."""

    pass


class MigrationFailedError(OrmError):
    """Raised when a statement of a migration plan fails.

    Statements before ``index`` have already been applied and are not
    rolled back.
    """

    def __init__(self, index: int, statement: str, reason: str = "") -> None:
        self.index = index
        self.statement = statement
        self.reason = reason
        message = f"Migration statement #{index} failed: {statement}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
