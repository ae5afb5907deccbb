"""Named answer presets for common stacks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    type: str
    options: Mapping[str, Any] = field(default_factory=dict)


BUILTIN_PRESETS: Dict[str, Preset] = {
    "modern-react": Preset(
        name="Modern React",
        description="Modern stack with shadcn and 2025 tooling",
        type="frontend",
        options={
            "uiLibrary": "shadcn",
            "stateManagement": "zustand",
            "forms": "react-hook-form",
            "dataFetching": "tanstack-query",
            "styling": "tailwind",
            "includeStorybook": True,
            "includeTesting": "vitest",
        },
    ),
    "enterprise-api": Preset(
        name="Enterprise API",
        description="Enterprise API with Clean Architecture",
        type="microservice",
        options={
            "database": "typeorm-postgres",
            "architecture": "clean",
            "communication": ["rest"],
            "authentication": "jwt-internal",
            "documentation": "swagger",
            "testing": "jest",
            "includeDocker": True,
        },
    ),
    "fullstack-next": Preset(
        name="Full Stack Next.js",
        description="Full stack with Next.js",
        type="frontend",
        options={
            "uiLibrary": "shadcn",
            "stateManagement": "zustand",
            "forms": "react-hook-form",
            "dataFetching": "tanstack-query",
            "styling": "tailwind",
            "includeStorybook": False,
            "includeTesting": "vitest",
        },
    ),
    "minimal-api": Preset(
        name="Minimal API",
        description="Lightweight microservice with minimal infrastructure",
        type="microservice",
        options={
            "database": "typeorm-postgres",
            "architecture": "modular",
            "communication": ["rest"],
            "authentication": "none",
            "documentation": "swagger",
            "testing": "basic",
            "includeDocker": False,
        },
    ),
}


def get_preset(key: str, custom: Optional[Mapping[str, Preset]] = None) -> Optional[Preset]:
    """Look up ``key``; user presets shadow built-in ones."""
    if custom and key in custom:
        return custom[key]
    return BUILTIN_PRESETS.get(key)


def list_presets(custom: Optional[Mapping[str, Preset]] = None) -> List[Dict[str, str]]:
    merged: Dict[str, Preset] = dict(BUILTIN_PRESETS)
    merged.update(custom or {})
    return [
        {"name": preset.name, "value": key, "description": preset.description}
        for key, preset in merged.items()
    ]


__all__ = ["BUILTIN_PRESETS", "Preset", "get_preset", "list_presets"]
