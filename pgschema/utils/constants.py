# pgschema/utils/constants.py
"""Constants for pg-schema-provider."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error code enumeration."""

    CATALOG_QUERY_FAILED = "ERR_001"
    UNSUPPORTED_OPERATION = "ERR_002"
    UNRESOLVED_REFERENCE = "ERR_003"
    OBJECT_NOT_FOUND = "ERR_004"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.CATALOG_QUERY_FAILED: "Catalog query failed",
    ErrorCode.UNSUPPORTED_OPERATION: "Operation is not supported by the PostgreSQL catalog",
    ErrorCode.UNRESOLVED_REFERENCE: "Referenced object is not present in the schema model",
    ErrorCode.OBJECT_NOT_FOUND: "Schema object not found",
}

# Schemas never reported as user objects.
SYSTEM_SCHEMAS: tuple[str, ...] = ("pg_catalog", "information_schema")

# Table used by code-generation hosts to persist extended properties.
EXTENDED_PROPERTIES_TABLE = "CODESMITH_EXTENDED_PROPERTIES"

# Extended property keys.
PROP_DEFAULT = "CS_Default"
PROP_IS_IDENTITY = "CS_IsIdentity"
PROP_SYSTEM_TYPE = "CS_SystemType"
PROP_USER_DEFINED_TYPE = "CS_UserDefinedType"
PROP_CASCADE_DELETE = "CS_CascadeDelete"
PROP_CASCADE_UPDATE = "CS_CascadeUpdate"
PROP_IS_SCALAR_FUNCTION = "CS_IsScalarFunction"
PROP_IS_PROCEDURE = "CS_IsProcedure"
PROP_SPECIFIC_NAME = "specific_name"
PROP_SPECIFIC_SCHEMA = "specific_schema"

# pg_constraint confupdtype / confdeltype code for CASCADE.
FK_ACTION_CASCADE = "c"
