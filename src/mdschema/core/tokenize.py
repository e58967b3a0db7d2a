"""Markdown tokenization: fold the markdown-it token stream into a structural tree"""

import logging
import re

import yaml
from markdown_it import MarkdownIt

from mdschema.core.nodes import Node, NodeKind
from mdschema.errors import DocumentSyntaxError


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)

CONTAINER_MAP: dict[str, NodeKind] = {
    'heading_open':      NodeKind.heading,
    'paragraph_open':    NodeKind.paragraph,
    'bullet_list_open':  NodeKind.list,
    'ordered_list_open': NodeKind.list,
    'list_item_open':    NodeKind.list_item,
    'blockquote_open':   NodeKind.blockquote,
    'strong_open':       NodeKind.strong,
    'em_open':           NodeKind.emphasis,
    's_open':            NodeKind.strikethrough,
    'link_open':         NodeKind.link,
}

LEAF_MAP: dict[str, NodeKind] = {
    'text':        NodeKind.text,
    'code_inline': NodeKind.inline_code,
    'fence':       NodeKind.code_block,
    'code_block':  NodeKind.code_block,
    'html_block':  NodeKind.raw_html,
    'html_inline': NodeKind.raw_html,
    'hr':          NodeKind.thematic_break,
    'hardbreak':   NodeKind.line_break,
    'image':       NodeKind.image,
}


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    try:
        return MarkdownIt(preset, options_update={"linkify": False})
    except (KeyError, ValueError) as e:
        raise DocumentSyntaxError(f"Unknown markdown parser preset {preset!r}") from e


def _split_front_matter(text: str) -> tuple[str | None, str]:
    """Return (front_matter_source, body); front matter is None when absent.

    A leading `---` block only counts as front matter when it holds a YAML mapping;
    otherwise it is a thematic break followed by ordinary content.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return None, text
    try:
        fm = yaml.safe_load(m.group(1))
    except yaml.YAMLError:
        return None, text
    if not isinstance(fm, dict):
        return None, text
    return m.group(1), text[m.end():]


def _heading_level(token) -> int | None:
    """Extract heading level (1-6) from a heading_open token tag, else None."""
    if token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def _open_node(token) -> Node:
    node = Node(kind=CONTAINER_MAP[token.type])
    if node.kind is NodeKind.heading:
        node.level = _heading_level(token)
    elif token.type == 'ordered_list_open':
        node.ordered = True
        node.start = int(token.attrGet('start') or 1)
    elif node.kind is NodeKind.link:
        node.href = token.attrGet('href')
    return node


def _leaf_node(token) -> Node:
    if token.type == 'softbreak':
        return Node(kind=NodeKind.text, value='\n')
    kind = LEAF_MAP.get(token.type)
    if kind is None:
        raise DocumentSyntaxError(f"Unsupported markdown token {token.type!r}")
    if kind in (NodeKind.thematic_break, NodeKind.line_break):
        return Node(kind=kind)
    if kind is NodeKind.image:
        return Node(kind=kind, value=token.content, href=token.attrGet('src'))
    content = token.content
    # Block literals end with the newline that closes the block.
    if token.block and content.endswith('\n'):
        content = content[:-1]
    return Node(kind=kind, value=content)


def _fold(tokens: list, stack: list[Node]) -> None:
    """Append tokens to the node on top of stack, opening/closing containers by nesting."""
    skip = 0
    for tok in tokens:
        if skip:
            skip += tok.nesting
            continue
        if tok.type == 'table_open':
            # Tables are kept opaque; their cells are not part of the grammar.
            stack[-1].children.append(Node(kind=NodeKind.table))
            skip = 1
        elif tok.nesting == 1:
            if tok.type not in CONTAINER_MAP:
                raise DocumentSyntaxError(f"Unsupported markdown token {tok.type!r}")
            node = _open_node(tok)
            stack[-1].children.append(node)
            stack.append(node)
        elif tok.nesting == -1:
            if len(stack) == 1:
                raise DocumentSyntaxError(f"Unbalanced markdown token {tok.type!r}")
            stack.pop()
        elif tok.type == 'inline':
            _fold(tok.children or [], stack)
        else:
            stack[-1].children.append(_leaf_node(tok))


def tokenize(text: str, preset: str = 'gfm-like', strip_front_matter: bool = True) -> Node:
    """Parse markdown text into a root Node whose children are the top-level blocks."""
    front_matter, body = _split_front_matter(text)
    root = Node(kind=NodeKind.root)
    if front_matter is not None and not strip_front_matter:
        root.children.append(Node(kind=NodeKind.front_matter, value=front_matter))

    tokens = _make_parser(preset).parse(body)
    stack = [root]
    _fold(tokens, stack)
    if len(stack) != 1:
        raise DocumentSyntaxError(f"Unclosed markdown container {stack[-1].kind.value!r}")
    logger.debug("Tokenized %d top-level node(s)", len(root.children))
    return root
