"""Exception hierarchy for document extraction and validation"""

from typing import Sequence


def format_path(path: Sequence[str]) -> str:
    """Render a result path for messages ('Items.0.Name'); '<root>' when empty."""
    return '.'.join(str(p) for p in path) or '<root>'


class MdSchemaError(Exception):
    """Base exception for all mdschema errors."""


class ConfigError(MdSchemaError, ValueError):
    """Raised when settings cannot be loaded or fail validation."""


class DocumentSyntaxError(MdSchemaError):
    """Raised when the markdown tokenizer cannot produce a structural tree."""


class ExtractionError(MdSchemaError):
    """Base for failures of the extraction pass; always carries the result path."""

    def __init__(self, message: str, path: Sequence[str] = ()) -> None:
        self.path = tuple(path)
        super().__init__(f"{message} (at {format_path(self.path)})")


class SchemaMismatchError(ExtractionError):
    """A heading names a section the schema does not describe at the current path."""

    def __init__(self, label: str, path: Sequence[str] = ()) -> None:
        self.label = label
        super().__init__(f"Heading {label!r} has no schema definition", path)


class UnknownContentTypeError(ExtractionError):
    """A node kind cannot be converted for the requested schema kind."""

    def __init__(self, node_kind: str, path: Sequence[str] = (), target: str = 'string') -> None:
        self.node_kind = node_kind
        self.target = target
        super().__init__(f"Unexpected content type {node_kind!r} for {target} value", path)


class UnexpectedArrayTypeError(ExtractionError):
    """Content under an array-typed section is not a list."""

    def __init__(self, node_kind: str, path: Sequence[str] = ()) -> None:
        self.node_kind = node_kind
        super().__init__(f"Unexpected array type {node_kind!r}; only lists map to arrays", path)


class NumericParseError(ExtractionError):
    """Text under a number-typed section is not a numeric literal."""

    def __init__(self, text: str, path: Sequence[str] = ()) -> None:
        self.text = text
        super().__init__(f"Cannot parse {text!r} as a number", path)


class MergeConflictError(ExtractionError):
    """Content and sub-sections were both placed at the same result path."""

    def __init__(self, existing: object, incoming: object, path: Sequence[str] = ()) -> None:
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Cannot merge {type(incoming).__name__} into existing {type(existing).__name__}", path
        )


class ValidationError(MdSchemaError):
    """The normalized object does not conform to the schema.

    Attributes:
        violations: every violation reported by the validator, in path order
    """

    def __init__(self, violations: list) -> None:
        self.violations = list(violations)
        details = '\n'.join(f"  {v.path or '<root>'}: {v.message}" for v in self.violations)
        super().__init__(f"Result validation failed with {len(self.violations)} violation(s):\n{details}")


class SchemaDefinitionError(MdSchemaError, ValueError):
    """Raised when a schema fragment cannot be interpreted."""
