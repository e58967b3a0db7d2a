"""Structural tree node types produced by the tokenizer"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


class NodeKind(str, Enum):
    root           = "root"
    heading        = "heading"
    paragraph      = "paragraph"
    text           = "text"
    strong         = "strong"
    emphasis       = "emphasis"
    inline_code    = "inline-code"
    code_block     = "code-block"
    raw_html       = "raw-html"
    front_matter   = "front-matter"
    link           = "link"
    list           = "list"
    list_item      = "list-item"
    line_break     = "line-break"
    thematic_break = "thematic-break"
    strikethrough  = "strikethrough"
    # Represented so they can be rejected explicitly during extraction.
    blockquote     = "blockquote"
    table          = "table"
    image          = "image"


LITERAL_KINDS = frozenset({
    NodeKind.text, NodeKind.inline_code, NodeKind.code_block, NodeKind.raw_html, NodeKind.front_matter,
})


@dataclass
class Node:
    """A typed node of the structural tree.

    Literal kinds carry `value`; container kinds carry `children`. Headings carry
    `level` (1 = outermost), lists carry `ordered` and `start`, links carry `href`.
    """
    kind:     NodeKind
    children: list["Node"] = field(default_factory=list)
    value:    Optional[str] = None
    level:    Optional[int] = None
    ordered:  bool = False
    start:    int = 1
    href:     Optional[str] = None

    def walk(self, depth: int = 0) -> Iterator[tuple[int, "Node"]]:
        """Yield (depth, node) pairs in document order, starting with self."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)
