"""Schema-driven extraction of structured objects from markdown documents"""

from mdschema.config import Settings, load_config
from mdschema.core.normalize import normalize
from mdschema.core.parser import MarkdownParser, parse, parse_to_object
from mdschema.core.result import SectionMap
from mdschema.core.schema import SchemaFragment
from mdschema.core.validate import Violation, validate
from mdschema.errors import (
    ConfigError,
    DocumentSyntaxError,
    ExtractionError,
    MdSchemaError,
    MergeConflictError,
    NumericParseError,
    SchemaDefinitionError,
    SchemaMismatchError,
    UnexpectedArrayTypeError,
    UnknownContentTypeError,
    ValidationError,
)


__all__ = [
    "ConfigError",
    "DocumentSyntaxError",
    "ExtractionError",
    "MarkdownParser",
    "MdSchemaError",
    "MergeConflictError",
    "NumericParseError",
    "SchemaDefinitionError",
    "SchemaFragment",
    "SchemaMismatchError",
    "SectionMap",
    "Settings",
    "UnexpectedArrayTypeError",
    "UnknownContentTypeError",
    "ValidationError",
    "Violation",
    "load_config",
    "normalize",
    "parse",
    "parse_to_object",
    "validate",
]
