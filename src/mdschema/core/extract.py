"""Value extraction: convert a content node into the scalar or list a schema kind expects"""

import re
from typing import Any, Optional, Sequence

from mdschema.core.nodes import LITERAL_KINDS, Node, NodeKind
from mdschema.errors import NumericParseError, UnexpectedArrayTypeError, UnknownContentTypeError


NUMBER_RE = re.compile(r'^[+-]?(?:\d+(?P<frac>\.\d*)?|(?P<bare>\.\d+))(?P<exp>[eE][+-]?\d+)?$')

# Containers whose text is the concatenation of their children's text.
JOINED_KINDS = frozenset({
    NodeKind.paragraph, NodeKind.strong, NodeKind.emphasis, NodeKind.link, NodeKind.list, NodeKind.heading,
})
EMPTY_KINDS = frozenset({NodeKind.strikethrough, NodeKind.thematic_break})


def _join(node: Node, path: Sequence[str]) -> str:
    return ''.join(extract_text(child, i, node, path) for i, child in enumerate(node.children))


def extract_text(node: Node, index: int = 0, parent: Optional[Node] = None, path: Sequence[str] = ()) -> str:
    """Return the string value of a node.

    List items reproduce their markup ("- text" or "2. text") so list content
    stored in a string field can be rendered again.
    """
    if node.kind in LITERAL_KINDS:
        return node.value or ''
    if node.kind in JOINED_KINDS:
        return _join(node, path)
    if node.kind in EMPTY_KINDS:
        return ''
    if node.kind is NodeKind.line_break:
        return '\n'
    if node.kind is NodeKind.list_item:
        ordered = parent is not None and parent.ordered
        prefix = f"{index + 1}." if ordered else '-'
        return f"{prefix} {_join(node, path)}\n"
    raise UnknownContentTypeError(node.kind.value, path)


def extract_list(node: Node, path: Sequence[str] = ()) -> list[str]:
    """Return one string per item of a list node."""
    if node.kind is not NodeKind.list:
        raise UnexpectedArrayTypeError(node.kind.value, path)
    values = []
    for item in node.children:
        if item.kind is not NodeKind.list_item:
            raise UnknownContentTypeError(item.kind.value, path, target='array item')
        values.append(_join(item, path))
    return values


def extract_number(node: Node, path: Sequence[str] = ()) -> int | float:
    text = extract_text(node, path=path).strip()
    m = NUMBER_RE.match(text)
    if not m:
        raise NumericParseError(text, path)
    if m.group('frac') is None and m.group('bare') is None and m.group('exp') is None:
        return int(text)
    return float(text)


def extract_boolean(node: Node, path: Sequence[str] = ()) -> bool:
    """True only for the token "true" (any case); every other text is False."""
    return extract_text(node, path=path).strip().lower() == 'true'


def extract_value(node: Node, kind: str, path: Sequence[str] = ()) -> Any:
    """Extract a node's value for the given schema kind."""
    if kind == 'array':
        return extract_list(node, path)
    if kind == 'string':
        return extract_text(node, path=path)
    if kind == 'number':
        return extract_number(node, path)
    if kind == 'boolean':
        return extract_boolean(node, path)
    if kind == 'null':
        return None
    raise UnknownContentTypeError(node.kind.value, path, target=kind)
