"""Token substitution and conditional blocks for skill templates.

Templates use ``{{name}}`` tokens and ``{{#if <expression>}} ... {{/if}}``
blocks. Blocks are parsed into a tree with an explicit stack, so nesting
depth is unbounded and each ``{{/if}}`` closes the innermost open block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Union

from .expressions import evaluate, stringify

_BLOCK_TOKEN = re.compile(r"\{\{#if\s+([^}]+)\}\}|\{\{/if\}\}")
_VAR_TOKEN = re.compile(r"\{\{([a-zA-Z_][a-zA-Z0-9_]*)\}\}")
_BLANK_RUN = re.compile(r"\n{3,}")


@dataclass
class _Block:
    expression: str
    marker: str
    children: List[Union[str, "_Block"]] = field(default_factory=list)
    closed: bool = False


def _parse(template: str) -> List[Union[str, _Block]]:
    root = _Block(expression="", marker="")
    stack: List[_Block] = [root]
    position = 0
    for match in _BLOCK_TOKEN.finditer(template):
        if match.start() > position:
            stack[-1].children.append(template[position : match.start()])
        position = match.end()
        expression = match.group(1)
        if expression is not None:
            block = _Block(expression=expression.strip(), marker=match.group(0))
            stack[-1].children.append(block)
            stack.append(block)
        elif len(stack) > 1:
            stack.pop().closed = True
        else:
            # Stray closing marker stays as literal text.
            stack[-1].children.append(match.group(0))
    if position < len(template):
        stack[-1].children.append(template[position:])
    return root.children


def _resolve_blocks(nodes: List[Union[str, _Block]], context: Mapping[str, Any]) -> str:
    parts: List[str] = []
    pending: List[Iterator[Union[str, _Block]]] = [iter(nodes)]
    while pending:
        node = next(pending[-1], None)
        if node is None:
            pending.pop()
        elif isinstance(node, str):
            parts.append(node)
        elif not node.closed:
            # Unclosed block: keep the opening marker, render the body.
            parts.append(node.marker)
            pending.append(iter(node.children))
        elif evaluate(node.expression, context):
            pending.append(iter(node.children))
    return "".join(parts)


def interpolate_simple(expr: str, context: Mapping[str, str]) -> str:
    """Replace ``{{name}}`` tokens in ``expr``; unknown names become empty strings."""
    return _VAR_TOKEN.sub(lambda match: context.get(match.group(1)) or "", expr)


def render(template: str, context: Mapping[str, str]) -> str:
    """Resolve conditional blocks, substitute tokens, and collapse blank runs."""
    result = _resolve_blocks(_parse(template), context)
    result = interpolate_simple(result, context)
    return _BLANK_RUN.sub("\n\n", result)


def build_render_context(values: Mapping[str, Any]) -> dict[str, str]:
    """Coerce an answer mapping into the flat string map templates consume."""
    return {str(key): stringify(value) for key, value in values.items()}


__all__ = ["build_render_context", "interpolate_simple", "render"]
