"""Schema conformance checks for normalized results, backed by jsonschema"""

from typing import Any, Mapping, Union

from jsonschema import Draft202012Validator
from pydantic import BaseModel

from mdschema.core.schema import SchemaFragment


class Violation(BaseModel):
    """A single schema violation: dotted path ('' for the root) and message."""
    path: str
    message: str


def validate(value: Any, schema: Union[SchemaFragment, Mapping[str, Any]]) -> list[Violation]:
    """Return all violations of value against schema; an empty list means it conforms."""
    fragment = SchemaFragment.coerce(schema)
    validator = Draft202012Validator(fragment.to_json_schema())
    errors = sorted(validator.iter_errors(value), key=lambda e: [str(p) for p in e.absolute_path])
    return [
        Violation(path='.'.join(str(p) for p in e.absolute_path), message=e.message)
        for e in errors
    ]
