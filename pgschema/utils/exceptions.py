# pgschema/utils/exceptions.py
"""Exception classes for pg-schema-provider."""

from pgschema.utils.constants import ErrorCode, ERROR_MESSAGES


class SchemaProviderError(Exception):
    """Base exception class for pg-schema-provider."""

    def __init__(
        self,
        code: ErrorCode,
        message: str | None = None,
        details: dict | None = None
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, "Unknown error")
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert the exception to a dictionary format.

        Returns:
            A dictionary representation of the error.
        """
        return {
            "status": "error",
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details
            }
        }


class UnsupportedOperationError(SchemaProviderError):
    """The catalog cannot perform the requested operation."""

    def __init__(self, operation: str):
        super().__init__(
            code=ErrorCode.UNSUPPORTED_OPERATION,
            message=f"Unsupported operation: {operation}",
            details={"operation": operation}
        )


class UnresolvedReferenceError(SchemaProviderError):
    """A referenced table or column is missing from the schema model."""

    def __init__(self, kind: str, name: str, referenced_by: str):
        super().__init__(
            code=ErrorCode.UNRESOLVED_REFERENCE,
            message=f"Unresolved {kind} '{name}' referenced by '{referenced_by}'",
            details={"kind": kind, "name": name, "referenced_by": referenced_by}
        )


class ObjectNotFoundError(SchemaProviderError):
    """Schema object not found in the catalog."""

    def __init__(self, kind: str, name: str):
        super().__init__(
            code=ErrorCode.OBJECT_NOT_FOUND,
            message=f"{kind.capitalize()} not found: {name}",
            details={"kind": kind, "name": name}
        )
