"""Facade: tokenize -> assemble -> normalize -> validate"""

import logging
from typing import Any, Mapping, Optional, Union

from mdschema.config import Settings
from mdschema.core.assemble import assemble
from mdschema.core.nodes import Node
from mdschema.core.normalize import normalize
from mdschema.core.schema import SchemaFragment
from mdschema.core.tokenize import tokenize
from mdschema.core.validate import validate
from mdschema.errors import ValidationError


logger = logging.getLogger(__name__)

SchemaLike = Union[SchemaFragment, Mapping[str, Any]]


class MarkdownParser:
    """Extracts objects shaped by a schema from markdown documents.

    Each call owns its own context stack and result tree; a parser instance only
    holds settings and can be shared.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()

    def tokenize(self, content: str) -> Node:
        return tokenize(content, self.settings.parser_config, self.settings.strip_front_matter)

    def parse_to_object(self, content: str, schema: SchemaLike) -> Any:
        """Return the raw result tree; arrays of sections are SectionMaps keyed by heading label."""
        tree = self.tokenize(content)
        return assemble(tree, SchemaFragment.coerce(schema), self.settings.heading_key_casing)

    def parse(self, content: str, schema: SchemaLike) -> Any:
        """Return the normalized object, raising ValidationError if it does not conform."""
        fragment = SchemaFragment.coerce(schema)
        result = normalize(self.parse_to_object(content, fragment), fragment)
        if self.settings.validate_result:
            self.validate(result, fragment)
        return result

    def validate(self, obj: Any, schema: SchemaLike) -> None:
        violations = validate(obj, schema)
        if violations:
            logger.warning("Result validation failed with %d violation(s)", len(violations))
            raise ValidationError(violations)


def parse_to_object(content: str, schema: SchemaLike, settings: Optional[Settings] = None) -> Any:
    return MarkdownParser(settings).parse_to_object(content, schema)


def parse(content: str, schema: SchemaLike, settings: Optional[Settings] = None) -> Any:
    return MarkdownParser(settings).parse(content, schema)
