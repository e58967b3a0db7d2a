"""Schema fragment model: the declarative shape extracted documents are mapped onto"""

from typing import Any, Literal, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from mdschema.errors import SchemaDefinitionError


SchemaKind = Literal['string', 'number', 'boolean', 'null', 'array', 'object']

HEADING_KEY_CASINGS = ('exact', 'lower_first')


def heading_key(label: str, casing: str = 'exact') -> str:
    """Apply the heading casing rule to a label before property lookup."""
    if casing == 'lower_first':
        return label[:1].lower() + label[1:]
    if casing != 'exact':
        raise SchemaDefinitionError(f"Unknown heading key casing {casing!r}")
    return label


class SchemaFragment(BaseModel):
    """A node of the schema: `type` (or `kind`) plus `properties`/`required` or `items`.

    `type` may be a single kind or a list such as ["array", "null"]; the first
    non-null entry is the primary kind used for extraction.
    """
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    type:       Union[SchemaKind, list[SchemaKind]] = Field(validation_alias=AliasChoices('type', 'kind'))
    properties: dict[str, "SchemaFragment"] = Field(default_factory=dict)
    required:   list[str] = Field(default_factory=list)
    items:      Optional["SchemaFragment"] = None

    @field_validator('type')
    @classmethod
    def _non_empty_type(cls, v):
        if isinstance(v, list) and not v:
            raise ValueError("type list must not be empty")
        return v

    @classmethod
    def coerce(cls, schema: Union["SchemaFragment", Mapping[str, Any]]) -> "SchemaFragment":
        """Return schema as a SchemaFragment, validating plain mappings."""
        if isinstance(schema, cls):
            return schema
        try:
            return cls.model_validate(schema)
        except PydanticValidationError as e:
            raise SchemaDefinitionError(f"Invalid schema: {e}") from e

    @property
    def kinds(self) -> tuple[str, ...]:
        return tuple(self.type) if isinstance(self.type, list) else (self.type,)

    @property
    def kind(self) -> str:
        """Primary kind: the first non-null kind, or 'null'."""
        return next((k for k in self.kinds if k != 'null'), 'null')

    @property
    def nullable(self) -> bool:
        return 'null' in self.kinds

    def property_for(self, label: str, casing: str = 'exact') -> tuple[str, "SchemaFragment"] | None:
        """Return (property_name, fragment) matching a heading label, if this is an object declaring it."""
        if 'object' not in self.kinds:
            return None
        name = heading_key(label, casing)
        if name in self.properties:
            return name, self.properties[name]
        return None

    def to_json_schema(self) -> dict[str, Any]:
        """Render the minimal JSON Schema equivalent of this fragment."""
        out: dict[str, Any] = {"type": list(self.type) if isinstance(self.type, list) else self.type}
        if self.properties:
            out["properties"] = {k: v.to_json_schema() for k, v in self.properties.items()}
        if self.required:
            out["required"] = list(self.required)
        if self.items is not None:
            out["items"] = self.items.to_json_schema()
        return out
