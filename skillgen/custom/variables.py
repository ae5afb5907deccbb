"""Variable resolver plugins for custom templates.

A resolver computes extra template variables from the collected answers.
Resolvers are registered explicitly per template id, or discovered through
the ``skillgen.variables`` entry-point group (entry name = template id)::

    [project.entry-points."skillgen.variables"]
    release-notes = "my_pkg.skill_vars:ReleaseNotesVariables"
"""

from __future__ import annotations

from importlib import metadata
from typing import Any, Callable, Dict, Iterable, List, Mapping, Protocol, runtime_checkable

from ..logging import get_logger

_ENTRY_POINT_GROUP = "skillgen.variables"

logger = get_logger("custom.variables")


@runtime_checkable
class VariableResolver(Protocol):
    """Capability implemented by per-template variable plugins."""

    def resolve_variables(self, answers: Mapping[str, Any]) -> Mapping[str, str]:
        """Return additional variables derived from ``answers``."""


class FunctionTableResolver:
    """Adapts a ``{name: fn(answers) -> str}`` table to :class:`VariableResolver`."""

    def __init__(self, functions: Mapping[str, Callable[[Mapping[str, Any]], Any]]) -> None:
        self.functions = dict(functions)

    def resolve_variables(self, answers: Mapping[str, Any]) -> Dict[str, str]:
        resolved: Dict[str, str] = {}
        for name, function in self.functions.items():
            value = function(answers)
            resolved[name] = "" if value is None else str(value)
        return resolved


class CallableResolver:
    """Adapts ``fn(answers) -> mapping`` to :class:`VariableResolver`."""

    def __init__(self, function: Callable[[Mapping[str, Any]], Mapping[str, Any]]) -> None:
        self.function = function

    def resolve_variables(self, answers: Mapping[str, Any]) -> Dict[str, str]:
        result = self.function(answers)
        if not isinstance(result, Mapping):
            raise TypeError("Variable resolver must return a mapping")
        return {str(key): "" if value is None else str(value) for key, value in result.items()}


def coerce_resolver(obj: object) -> VariableResolver:
    """Turn a plugin object into a resolver, or raise ``TypeError`` when malformed."""
    if isinstance(obj, type):
        obj = obj()
    if isinstance(obj, VariableResolver):
        return obj
    if isinstance(obj, Mapping):
        if obj and all(isinstance(key, str) and callable(value) for key, value in obj.items()):
            return FunctionTableResolver(obj)
        raise TypeError("Variable table must map names to callables")
    if callable(obj):
        return CallableResolver(obj)
    raise TypeError(
        "Variable resolver must provide resolve_variables(), be a callable, "
        "or be a mapping of names to callables"
    )


class VariableResolverRegistry:
    """Per-template registry of variable resolvers."""

    def __init__(self) -> None:
        self._resolvers: Dict[str, List[VariableResolver]] = {}

    def register(self, template_id: str, resolver: object) -> VariableResolver:
        coerced = coerce_resolver(resolver)
        self._resolvers.setdefault(template_id, []).append(coerced)
        return coerced

    def resolvers_for(self, template_id: str) -> List[VariableResolver]:
        return list(self._resolvers.get(template_id, []))

    def template_ids(self) -> List[str]:
        return sorted(self._resolvers)

    def resolve(self, template_id: str, answers: Mapping[str, Any]) -> Dict[str, str]:
        """Merge the output of every resolver for ``template_id``; failing ones are skipped."""
        merged: Dict[str, str] = {}
        for resolver in self._resolvers.get(template_id, []):
            try:
                values = resolver.resolve_variables(answers)
            except Exception as exc:
                logger.warning(
                    "Variable resolver %r for template '%s' failed: %s",
                    resolver,
                    template_id,
                    exc,
                )
                continue
            merged.update({str(key): str(value) for key, value in values.items()})
        return merged

    def load_entry_points(self) -> int:
        """Register resolvers advertised by installed packages; returns how many loaded."""
        loaded = 0
        for entry in _iter_entry_points():
            try:
                self.register(entry.name, entry.load())
            except Exception as exc:
                logger.warning("Skipping variable resolver entry point '%s': %s", entry.name, exc)
                continue
            loaded += 1
        return loaded


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "CallableResolver",
    "FunctionTableResolver",
    "VariableResolver",
    "VariableResolverRegistry",
    "coerce_resolver",
]
