"""Minimal boolean expression grammar shared by templates and question rules.

Supported forms, tried in order (first match wins)::

    name === 'literal'
    name !== 'literal'
    name === true | false
    name                      (truthiness)

Anything else falls through to a truthiness lookup of the whole expression
text, which usually evaluates to False. Evaluation never raises.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Mapping, Union

_IDENT = r"[A-Za-z0-9_]+"

_EQ_PATTERN = re.compile(rf"^({_IDENT})\s*===\s*['\"](.+)['\"]\s*$")
_NEQ_PATTERN = re.compile(rf"^({_IDENT})\s*!==\s*['\"](.+)['\"]\s*$")
_BOOL_PATTERN = re.compile(rf"^({_IDENT})\s*===\s*(true|false)\s*$")
_SURFACE_PATTERN = re.compile(
    rf"^({_IDENT})(\s*(===|!==)\s*(['\"].+['\"]|true|false)\s*)?$"
)

_FALSY_STRINGS = frozenset({"", "false"})


def stringify(value: Any) -> str:
    """Render a scalar the way template contexts expect it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def evaluate(expr: str, context: Mapping[str, Any]) -> bool:
    """Evaluate ``expr`` against ``context``; malformed input degrades to a boolean."""
    match = _EQ_PATTERN.match(expr)
    if match:
        return stringify(context.get(match.group(1))) == match.group(2)

    match = _NEQ_PATTERN.match(expr)
    if match:
        return stringify(context.get(match.group(1))) != match.group(2)

    match = _BOOL_PATTERN.match(expr)
    if match:
        expected = match.group(2) == "true"
        value = context.get(match.group(1))
        if isinstance(value, bool):
            return value is expected
        # Unbound names never equal the string "true".
        actual = value is not None and stringify(value) == "true"
        return actual is expected

    return _is_truthy(context.get(expr.strip()))


def _is_truthy(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, str) and value in _FALSY_STRINGS:
        return False
    return True


def is_supported_expression(expr: str) -> bool:
    """Return True when ``expr`` matches the grammar's surface syntax."""
    return bool(_SURFACE_PATTERN.match(expr.strip()))


def evaluate_when(
    when: Union[str, Callable[[Mapping[str, Any]], bool]],
    answers: Mapping[str, Any],
) -> bool:
    """Reduce a question visibility rule (predicate or expression) to a boolean."""
    if callable(when):
        return bool(when(answers))
    return evaluate(when, answers)


__all__ = ["evaluate", "evaluate_when", "is_supported_expression", "stringify"]
