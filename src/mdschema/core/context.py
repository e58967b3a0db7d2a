"""Heading context stack: maps heading nesting onto schema nesting during assembly"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from mdschema.core.result import SectionMap, Slot, merge_values
from mdschema.core.schema import SchemaFragment
from mdschema.errors import MergeConflictError, SchemaMismatchError


logger = logging.getLogger(__name__)

ROOT_SEGMENT = 'root'


@dataclass
class ContextFrame:
    """One open heading: its path segment, heading level, schema, and result slot."""
    path_segment:  str
    heading_level: int
    schema:        SchemaFragment
    slot:          Slot
    element_index: Optional[int] = None     # implicit array element holding this field


def _placeholder(schema: SchemaFragment) -> Any:
    """Initial value for a newly opened section: objects open with nullable fields seeded."""
    if schema.kind != 'object':
        return None
    return {name: None for name, prop in schema.properties.items() if prop.nullable}


class ContextStack:
    """Exclusively owned stack of frames for a single assembly pass.

    The bottom frame is the document root (level 0) and is never popped. Heading
    levels strictly increase from bottom to top.
    """

    def __init__(self, schema: SchemaFragment, casing: str = 'exact') -> None:
        self.casing = casing
        self._holder: dict[str, Any] = {ROOT_SEGMENT: _placeholder(schema)}
        self.frames: list[ContextFrame] = [
            ContextFrame(ROOT_SEGMENT, 0, schema, Slot(self._holder, ROOT_SEGMENT))
        ]

    @property
    def result(self) -> Any:
        """The raw result tree built so far."""
        return self._holder[ROOT_SEGMENT]

    @property
    def top(self) -> ContextFrame:
        return self.frames[-1]

    def current_schema(self) -> SchemaFragment:
        return self.top.schema

    def current_path(self) -> tuple[str, ...]:
        """Path segments of the open frames, excluding the root."""
        path: list[str] = []
        for frame in self.frames[1:]:
            if frame.element_index is not None:
                path.append(str(frame.element_index))
            path.append(frame.path_segment)
        return tuple(path)

    def pop_to_level(self, level: int) -> None:
        """Pop frames while the top frame's heading level is >= level; never pops the root."""
        while len(self.frames) > 1 and self.top.heading_level >= level:
            frame = self.frames.pop()
            logger.debug("Closed section %r (h%d)", frame.path_segment, frame.heading_level)

    def push_frame(self, label: str, level: int, schema: SchemaFragment) -> ContextFrame:
        """Open an object property of the top frame."""
        slot = Slot(self._object(self.top), label)
        return self._push(ContextFrame(label, level, schema, slot), reset=True)

    def push_element(self, label: str, level: int, schema: SchemaFragment) -> ContextFrame:
        """Open a new array element of the top frame, keyed by its heading label."""
        sections = self._sections(self.top)
        slot = Slot(sections, sections.append(label))
        return self._push(ContextFrame(label, level, schema, slot))

    def push_element_field(self, name: str, level: int, schema: SchemaFragment) -> ContextFrame:
        """Open a property of the latest implicit array element, starting a new element when needed."""
        parent = self.top
        sections = self._sections(parent)
        section = sections.last()
        if section is None or not section.implicit or name in section.fields:
            sections.append(name, _placeholder(parent.schema.items) or {}, implicit=True)
            section = sections.last()
        section.fields.add(name)
        index = len(sections) - 1
        return self._push(ContextFrame(name, level, schema, Slot(section.value, name), element_index=index))

    def resolve_heading(self, label: str, level: int) -> ContextFrame:
        """Pop to the heading's level, then open the section its label names.

        A declared property of the current object wins over array-item interpretation.
        """
        self.pop_to_level(level)
        schema = self.current_schema()

        match = schema.property_for(label, self.casing)
        if match is not None:
            name, fragment = match
            return self.push_frame(name, level, fragment)

        if schema.kind == 'array' and schema.items is not None:
            match = schema.items.property_for(label, self.casing)
            if match is not None:
                name, fragment = match
                return self.push_element_field(name, level, fragment)
            return self.push_element(label, level, schema.items)

        raise SchemaMismatchError(label, self.current_path())

    def add_value(self, value: Any) -> None:
        """Merge extracted content into the top frame's slot."""
        slot = self.top.slot
        slot.set(merge_values(slot.get(), value, self.current_path()))

    def _push(self, frame: ContextFrame, reset: bool = False) -> ContextFrame:
        # A re-opened property starts over; implicit element fields keep their slot.
        if reset or frame.slot.get() is None:
            frame.slot.set(_placeholder(frame.schema))
        self.frames.append(frame)
        logger.debug("Opened section %r (h%d) as %s", frame.path_segment, frame.heading_level, frame.schema.kind)
        return frame

    def _object(self, frame: ContextFrame) -> dict:
        value = frame.slot.get()
        if value is None:
            value = {}
            frame.slot.set(value)
        elif not isinstance(value, dict):
            raise MergeConflictError(value, {}, self.current_path())
        return value

    def _sections(self, frame: ContextFrame) -> SectionMap:
        value = frame.slot.get()
        if value is None:
            value = SectionMap()
            frame.slot.set(value)
        elif not isinstance(value, SectionMap):
            raise MergeConflictError(value, SectionMap(), self.current_path())
        return value
