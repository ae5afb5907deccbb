"""Load custom template definitions from global and project scopes.

Two stores are consulted: a global one (shared by every project) and a
project one. Both are loaded independently, then merged so that a project
template whose id matches a global template replaces it outright; the
definitions are never merged field by field.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from ..logging import get_logger
from ..models import CONTENT_DIRS, Choice, Question, TemplateDefinition, ValidationResult
from .validator import is_template_filename, template_id_from_path, validate_template

logger = get_logger("custom.loader")

GLOBAL_TEMPLATES_DIR = Path("~/.skill-generator/templates")
PROJECT_TEMPLATES_DIR = Path(".skill-generator/templates")


class TemplateValidationError(ValueError):
    """Raised when an explicitly requested custom definition is invalid."""

    def __init__(self, source: str, result: ValidationResult) -> None:
        super().__init__(f"{source}: {'; '.join(result.errors)}")
        self.source = source
        self.result = result


@dataclass
class LoadResult:
    """Templates that loaded cleanly plus one error string per rejected source."""

    templates: List[TemplateDefinition] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def get(self, template_id: str) -> Optional[TemplateDefinition]:
        for template in self.templates:
            if template.id == template_id:
                return template
        return None


def build_definition(
    raw: Mapping[str, Any], template_id: str, source_path: Optional[str] = None
) -> TemplateDefinition:
    """Convert an already validated raw mapping into a :class:`TemplateDefinition`."""
    questions: List[Question] = []
    for item in raw.get("questions") or []:
        choices = tuple(
            Choice(
                name=str(choice["name"]),
                value=str(choice["value"]),
                description=choice.get("description"),
            )
            for choice in item.get("choices") or []
        )
        questions.append(
            Question(
                name=item["name"],
                message=item["message"],
                type=item["type"],
                choices=choices,
                default=item.get("default"),
                when=item.get("when"),
            )
        )

    content: Dict[str, Any] = {"SKILL.md": raw["content"]["SKILL.md"]}
    for directory in CONTENT_DIRS:
        files = raw["content"].get(directory)
        if isinstance(files, Mapping):
            content[directory] = {str(name): body for name, body in files.items()}

    return TemplateDefinition(
        id=template_id,
        name=raw["name"],
        description=raw["description"],
        questions=questions,
        variables=dict(raw.get("variables") or {}),
        content=content,
        version=raw.get("version"),
        author=raw.get("author"),
        source_path=source_path,
        is_custom=True,
    )


def validate_template_file(path: Path) -> ValidationResult:
    """Parse and validate a single definition file without loading it."""
    try:
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        return ValidationResult(valid=False, errors=[f"Cannot read template: {exc}"])
    return validate_template(raw, str(path))


def load_template_file(path: Path) -> TemplateDefinition:
    """Load one definition file, raising :class:`TemplateValidationError` when invalid."""
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise TemplateValidationError(
            path.name, ValidationResult(valid=False, errors=[f"Cannot read template: {exc}"])
        ) from exc
    return load_template_mapping(raw, str(path))


def load_template_mapping(raw: Any, source_id: str) -> TemplateDefinition:
    """Validate and build a definition from an already parsed mapping."""
    validation = validate_template(raw, source_id)
    if not validation.valid:
        raise TemplateValidationError(template_id_from_path(source_id), validation)
    return build_definition(raw, validation.template_id or template_id_from_path(source_id), source_id)


def load_templates_from_dir(directory: Path, scope: str = "project") -> LoadResult:
    """Load every ``*.yaml``/``*.yml`` definition in ``directory`` (missing dir => empty)."""
    result = LoadResult()
    directory = directory.expanduser()
    try:
        if not directory.is_dir():
            return result
        paths = sorted(
            (
                path
                for path in directory.iterdir()
                if is_template_filename(path.name) and path.is_file()
            ),
            key=lambda path: path.name,
        )
    except OSError as exc:
        logger.debug("Cannot list %s templates in %s: %s", scope, directory, exc)
        return result

    for path in paths:
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, yaml.YAMLError) as exc:
            result.errors.append(f"{path.name}: {exc}")
            logger.warning("Skipping %s template %s: %s", scope, path.name, exc)
            continue

        validation = validate_template(raw, str(path))
        if not validation.valid:
            result.errors.append(f"{path.name}: {'; '.join(validation.errors)}")
            logger.warning("Skipping invalid %s template %s", scope, path.name)
            continue
        for warning in validation.warnings:
            logger.debug("%s: %s", path.name, warning)

        result.templates.append(
            build_definition(raw, validation.template_id or path.stem, str(path))
        )
    return result


class TemplateStore(ABC):
    """A source of custom template definitions for one scope."""

    scope: str

    @abstractmethod
    def load(self) -> LoadResult:
        """Return every valid definition in the store plus per-source errors."""


class DirectoryTemplateStore(TemplateStore):
    """Definitions stored as YAML files in a directory."""

    def __init__(self, directory: Path, scope: str) -> None:
        self.directory = Path(directory)
        self.scope = scope

    def load(self) -> LoadResult:
        return load_templates_from_dir(self.directory, self.scope)

    def __repr__(self) -> str:
        return f"DirectoryTemplateStore({str(self.directory)!r}, scope={self.scope!r})"


class MemoryTemplateStore(TemplateStore):
    """Definitions held in memory, keyed by source name (``<id>.yaml``)."""

    def __init__(self, sources: Mapping[str, Any], scope: str = "memory") -> None:
        self.sources = dict(sources)
        self.scope = scope

    def load(self) -> LoadResult:
        result = LoadResult()
        for source_id, raw in self.sources.items():
            validation = validate_template(raw, source_id)
            if not validation.valid:
                result.errors.append(f"{source_id}: {'; '.join(validation.errors)}")
                continue
            template_id = validation.template_id or template_id_from_path(source_id)
            result.templates.append(build_definition(raw, template_id, source_id))
        return result


class TemplateRepository:
    """Two-tier template store: project entries replace global entries with the same id."""

    def __init__(
        self,
        global_store: Optional[TemplateStore] = None,
        project_store: Optional[TemplateStore] = None,
    ) -> None:
        self.global_store = global_store
        self.project_store = project_store

    @classmethod
    def from_directories(
        cls,
        global_dir: Optional[Path] = None,
        project_dir: Optional[Path] = None,
        *,
        root: Optional[Path] = None,
    ) -> "TemplateRepository":
        base = root or Path.cwd()
        return cls(
            DirectoryTemplateStore(global_dir or GLOBAL_TEMPLATES_DIR, "global"),
            DirectoryTemplateStore(project_dir or base / PROJECT_TEMPLATES_DIR, "project"),
        )

    def load(self) -> LoadResult:
        merged: Dict[str, TemplateDefinition] = {}
        errors: List[str] = []

        if self.global_store is not None:
            loaded = self.global_store.load()
            for template in loaded.templates:
                merged[template.id] = template
            errors.extend(loaded.errors)

        if self.project_store is not None:
            loaded = self.project_store.load()
            for template in loaded.templates:
                if template.id in merged:
                    logger.debug("Project template '%s' shadows the global one", template.id)
                merged[template.id] = template
            errors.extend(loaded.errors)

        return LoadResult(templates=list(merged.values()), errors=errors)

    def get(self, template_id: str) -> Optional[TemplateDefinition]:
        return self.load().get(template_id)


__all__ = [
    "DirectoryTemplateStore",
    "GLOBAL_TEMPLATES_DIR",
    "LoadResult",
    "MemoryTemplateStore",
    "PROJECT_TEMPLATES_DIR",
    "TemplateRepository",
    "TemplateStore",
    "TemplateValidationError",
    "build_definition",
    "load_template_file",
    "load_template_mapping",
    "load_templates_from_dir",
    "validate_template_file",
]
