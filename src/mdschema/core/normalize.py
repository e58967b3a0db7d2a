"""Array normalization: turn section maps into ordered lists and prune undeclared keys"""

import logging
from typing import Any, Mapping, Union

from mdschema.core.result import SectionMap
from mdschema.core.schema import SchemaFragment


logger = logging.getLogger(__name__)


def _normalize(value: Any, schema: SchemaFragment) -> Any:
    if value is None:
        return None

    if schema.kind == 'array':
        if isinstance(value, SectionMap):
            elements = value.values()
        elif isinstance(value, Mapping):
            elements = list(value.values())
        elif isinstance(value, list):
            elements = value
        else:
            return value
        if schema.items is None:
            return list(elements)
        return [_normalize(v, schema.items) for v in elements]

    if schema.kind == 'object' and isinstance(value, Mapping):
        return {
            name: _normalize(value[name], prop)
            for name, prop in schema.properties.items()
            if name in value
        }

    return value


def normalize(value: Any, schema: Union[SchemaFragment, Mapping[str, Any]]) -> Any:
    """Reshape a raw result to the schema: label-keyed arrays become lists in insertion order,
    objects keep only declared properties (in declaration order). Idempotent.
    """
    fragment = SchemaFragment.coerce(schema)
    logger.debug("Normalizing %s result", fragment.kind)
    return _normalize(value, fragment)
