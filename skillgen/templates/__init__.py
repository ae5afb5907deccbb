"""Built-in template definitions."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..models import TemplateDefinition
from . import api, basic, devops, frontend, fullstack, library, microservice

BUILTIN_TEMPLATES: Dict[str, TemplateDefinition] = {
    module.TEMPLATE.id: module.TEMPLATE
    for module in (frontend, microservice, basic, library, api, fullstack, devops)
}


def get_builtin(template_id: str) -> Optional[TemplateDefinition]:
    return BUILTIN_TEMPLATES.get(template_id)


def builtin_templates() -> List[TemplateDefinition]:
    return list(BUILTIN_TEMPLATES.values())


def template_choices() -> List[Dict[str, str]]:
    """Return ``{"name", "value", "description"}`` rows for template pickers."""
    return [
        {"name": template.name, "value": template.id, "description": template.description}
        for template in BUILTIN_TEMPLATES.values()
    ]


__all__ = ["BUILTIN_TEMPLATES", "builtin_templates", "get_builtin", "template_choices"]
