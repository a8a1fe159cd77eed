"""Query predicate compilation and schema migration core."""

from .config import Settings, settings
from .database import DatabaseConnection, create_connection
from .exceptions import (
    InvalidOperandError,
    MetadataValidationError,
    MigrationFailedError,
    OrmError,
    ParameterCountError,
    UnknownFieldError,
    UnsupportedOperatorError,
)
from .log import (
    get_logger,
    setup_logging,
    setup_logging_from_settings,
    setup_test_logging,
)
from .migration import MigrationExecutor, MigrationPlan, diff
from .query import Operator, compile_predicate
from .resolver import Resolver
from .schema import EntityMetadata, FieldDefinition, FieldType, build_schema
from .types import Dialect, Environment, ParamStyle

__all__ = [
    "DatabaseConnection",
    "Dialect",
    "EntityMetadata",
    "Environment",
    "FieldDefinition",
    "FieldType",
    "InvalidOperandError",
    "MetadataValidationError",
    "MigrationExecutor",
    "MigrationFailedError",
    "MigrationPlan",
    "Operator",
    "OrmError",
    "ParamStyle",
    "ParameterCountError",
    "Resolver",
    "Settings",
    "UnknownFieldError",
    "UnsupportedOperatorError",
    "build_schema",
    "compile_predicate",
    "create_connection",
    "diff",
    "get_logger",
    "settings",
    "setup_logging",
    "setup_logging_from_settings",
    "setup_test_logging",
]
