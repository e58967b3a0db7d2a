"""Raw result tree building blocks: slots, section maps, and the content merge rule"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence, Union

from mdschema.errors import MergeConflictError


@dataclass
class Section:
    """One array element opened by a heading: its label and its extracted value."""
    label:    str
    value:    Any = None
    implicit: bool = False           # opened by a heading that names an item property
    fields:   set[str] = field(default_factory=set)


class SectionMap:
    """Insertion-ordered label -> value entries for array elements written as sections.

    Unlike a dict, repeated labels open separate entries, so the number of entries
    always equals the number of headings that opened them.
    """

    def __init__(self, sections: Optional[list[Section]] = None) -> None:
        self.sections: list[Section] = list(sections or [])

    def append(self, label: str, value: Any = None, implicit: bool = False) -> int:
        """Add an entry and return its index."""
        self.sections.append(Section(label=label, value=value, implicit=implicit))
        return len(self.sections) - 1

    def last(self) -> Optional[Section]:
        return self.sections[-1] if self.sections else None

    def labels(self) -> list[str]:
        return [s.label for s in self.sections]

    def values(self) -> list[Any]:
        return [s.value for s in self.sections]

    def items(self) -> list[tuple[str, Any]]:
        return [(s.label, s.value) for s in self.sections]

    def to_dict(self) -> dict[str, Any]:
        """Label-keyed view for display; repeated labels get a ' (n)' suffix."""
        out: dict[str, Any] = {}
        for label, value in self.items():
            key, n = label, 1
            while key in out:
                n += 1
                key = f"{label} ({n})"
            out[key] = value
        return out

    def __getitem__(self, index: int) -> Any:
        return self.sections[index].value

    def __setitem__(self, index: int, value: Any) -> None:
        self.sections[index].value = value

    def __len__(self) -> int:
        return len(self.sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SectionMap):
            return self.items() == other.items()
        return NotImplemented

    def __repr__(self) -> str:
        return f"SectionMap({self.items()!r})"


@dataclass
class Slot:
    """A typed reference to one value in the raw result tree (a dict key or a section index)."""
    container: Union[dict, SectionMap]
    key:       Union[str, int]

    def get(self) -> Any:
        if isinstance(self.container, dict):
            return self.container.get(self.key)
        return self.container[self.key]

    def set(self, value: Any) -> None:
        self.container[self.key] = value


def merge_values(existing: Any, value: Any, path: Sequence[str] = ()) -> Any:
    """Fold newly extracted content into the value already stored at a path.

    None is the identity; lists concatenate; strings join with a blank line.
    Numbers and booleans hold a single value, so a second one is a conflict.
    """
    if existing is None:
        return value
    if value is None:
        return existing
    if isinstance(existing, (dict, SectionMap)) or isinstance(value, (dict, SectionMap)):
        raise MergeConflictError(existing, value, path)
    if isinstance(existing, list) and isinstance(value, list):
        return existing + value
    if not (isinstance(existing, str) and isinstance(value, str)):
        raise MergeConflictError(existing, value, path)
    return f"{existing}\n\n{value}"
