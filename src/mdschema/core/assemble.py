"""Schema-driven assembly: one pass over the structural tree into a raw result tree"""

import logging
from typing import Any

from mdschema.core.context import ContextStack
from mdschema.core.extract import extract_text, extract_value
from mdschema.core.nodes import Node, NodeKind
from mdschema.core.schema import SchemaFragment


logger = logging.getLogger(__name__)


def assemble(tree: Node, schema: SchemaFragment, casing: str = 'exact') -> Any:
    """Walk the tree's top-level nodes in order and build the raw result tree.

    Headings open sections through the context stack; every other node is
    extracted for the current section's schema kind and merged into its slot.
    Arrays whose elements are sections come back as SectionMap entries.
    """
    stack = ContextStack(schema, casing)
    for node in tree.children:
        if node.kind is NodeKind.heading:
            label = extract_text(node, path=stack.current_path())
            stack.resolve_heading(label, node.level)
        else:
            value = extract_value(node, stack.current_schema().kind, stack.current_path())
            stack.add_value(value)
    logger.debug("Assembled %d top-level node(s)", len(tree.children))
    return stack.result
