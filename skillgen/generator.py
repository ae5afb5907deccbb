"""Skill generation: resolve answers and variables, then render every content body."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .custom.loader import TemplateRepository
from .custom.variables import VariableResolverRegistry
from .logging import get_logger
from .models import CONTENT_DIRS, SKILL_FILE, GeneratedSkill, TemplateDefinition
from .templates import BUILTIN_TEMPLATES, get_builtin
from .templating.expressions import stringify
from .templating.renderer import build_render_context, interpolate_simple, render

logger = get_logger("generator")

_INCLUDE_FLAGS = {
    "references/": "includeReferences",
    "scripts/": "includeScripts",
    "assets/": "includeAssets",
}


class TemplateNotFoundError(LookupError):
    """Raised when a template id is neither built in nor custom."""

    def __init__(self, template_id: str) -> None:
        super().__init__(f"Unknown template '{template_id}'")
        self.template_id = template_id


@dataclass
class SkillRequest:
    """Caller input for one skill: identity, answers and optional directories."""

    name: str
    description: str
    answers: Dict[str, Any] = field(default_factory=dict)
    include_references: bool = False
    include_scripts: bool = False
    include_assets: bool = False

    def flags(self) -> Dict[str, bool]:
        return {
            "includeReferences": self.include_references,
            "includeScripts": self.include_scripts,
            "includeAssets": self.include_assets,
        }


def title_case(name: str) -> str:
    """``my-skill`` -> ``My Skill``."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def resolve_answers(
    definition: TemplateDefinition, provided: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Fill unanswered, visible questions with their defaults.

    Questions are walked in declaration order, so a visibility rule sees the
    answers settled before it. Provided answers are always kept, including
    names no question declares.
    """
    answers: Dict[str, Any] = dict(provided or {})
    for question in definition.questions:
        if question.name in answers:
            continue
        if not question.is_visible(answers):
            continue
        if question.default is None:
            continue
        default = question.default
        answers[question.name] = list(default) if isinstance(default, (list, tuple)) else default
    return answers


def resolve_variables(
    definition: TemplateDefinition,
    answers: Mapping[str, Any],
    registry: Optional[VariableResolverRegistry] = None,
) -> Dict[str, str]:
    """Compute the definition's variables; plugin resolvers are merged last."""
    context = build_render_context(answers)
    variables: Dict[str, str] = {}
    for name, value in definition.variables.items():
        if callable(value):
            try:
                variables[name] = stringify(value(answers))
            except Exception as exc:
                logger.debug("Variable '%s' of template '%s' failed: %s", name, definition.id, exc)
                variables[name] = ""
        else:
            variables[name] = interpolate_simple(str(value), context)
    if registry is not None:
        variables.update(registry.resolve(definition.id, answers))
    return variables


def build_context(
    definition: TemplateDefinition,
    request: SkillRequest,
    registry: Optional[VariableResolverRegistry] = None,
) -> Dict[str, str]:
    """Return the string context every content body of ``definition`` is rendered with."""
    answers = resolve_answers(definition, request.answers)
    answers.update(
        name=request.name,
        description=request.description,
        titleCase=title_case(request.name),
        **request.flags(),
    )
    context = build_render_context(answers)
    context.update(resolve_variables(definition, answers, registry))
    return context


def generate_skill(
    definition: TemplateDefinition,
    request: SkillRequest,
    registry: Optional[VariableResolverRegistry] = None,
) -> GeneratedSkill:
    """Render ``SKILL.md`` plus each requested content directory of ``definition``."""
    context = build_context(definition, request, registry)
    skill: GeneratedSkill = {SKILL_FILE: render(definition.skill_body, context)}
    flags = request.flags()
    for directory in CONTENT_DIRS:
        if not flags[_INCLUDE_FLAGS[directory]]:
            continue
        for filename, body in definition.directory(directory).items():
            skill[f"{directory}{filename}"] = render(body, context)
    logger.debug("Rendered %d file(s) for template '%s'", len(skill), definition.id)
    return skill


def write_skill(skill: GeneratedSkill, directory: Path) -> List[Path]:
    """Write rendered files under ``directory``; returns the written paths."""
    written: List[Path] = []
    for relative, text in skill.items():
        target = directory / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        written.append(target)
    return written


class TemplateCatalog:
    """Built-in templates first, then custom templates from a repository."""

    def __init__(self, repository: Optional[TemplateRepository] = None) -> None:
        self.repository = repository
        self.errors: List[str] = []

    def resolve(self, template_id: str) -> TemplateDefinition:
        builtin = get_builtin(template_id)
        if builtin is not None:
            return builtin
        if self.repository is not None:
            loaded = self.repository.load()
            self.errors = list(loaded.errors)
            custom = loaded.get(template_id)
            if custom is not None:
                return custom
        raise TemplateNotFoundError(template_id)

    def list(self) -> List[TemplateDefinition]:
        templates = list(BUILTIN_TEMPLATES.values())
        if self.repository is None:
            return templates
        loaded = self.repository.load()
        self.errors = list(loaded.errors)
        for template in loaded.templates:
            if template.id in BUILTIN_TEMPLATES:
                logger.debug("Custom template '%s' is hidden by a built-in", template.id)
                continue
            templates.append(template)
        return templates


__all__ = [
    "SkillRequest",
    "TemplateCatalog",
    "TemplateNotFoundError",
    "build_context",
    "generate_skill",
    "resolve_answers",
    "resolve_variables",
    "title_case",
    "write_skill",
]
