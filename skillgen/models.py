"""Core data models shared across skillgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union


class EvidenceCategory(str, Enum):
    """Where a piece of evidence was observed."""

    DEPENDENCY = "dependency"
    CONFIG_FILE = "config-file"
    FOLDER_STRUCTURE = "folder-structure"


# Meta fields consumed by type resolution and never copied into answers.
RESERVED_FIELDS = frozenset({"type", "type-hint", "database-driver"})


@dataclass(frozen=True)
class Evidence:
    """One observed fact about a project directory."""

    source: str
    implies: Tuple[Tuple[str, str], ...]
    category: EvidenceCategory

    @classmethod
    def parse(
        cls, source: str, implies: str, category: EvidenceCategory | str
    ) -> "Evidence":
        """Build evidence from ``"field=value, bare"`` assertion text.

        A bare field asserts ``"true"``. Empty segments are ignored.
        """
        pairs: List[Tuple[str, str]] = []
        for part in implies.split(","):
            trimmed = part.strip()
            if not trimmed:
                continue
            name, sep, value = trimmed.partition("=")
            if not sep:
                pairs.append((trimmed, "true"))
            else:
                pairs.append((name.strip(), value.strip()))
        return cls(source=source, implies=tuple(pairs), category=EvidenceCategory(category))

    @property
    def implies_text(self) -> str:
        return ", ".join(f"{name}={value}" for name, value in self.implies)

    def value_of(self, name: str) -> Optional[str]:
        for key, value in self.implies:
            if key == name:
                return value
        return None

    def asserts(self, name: str, value: Optional[str] = None) -> bool:
        """Return True when this evidence asserts ``name`` (optionally with ``value``)."""
        for key, current in self.implies:
            if key == name and (value is None or current == value):
                return True
        return False

    def to_dict(self) -> Dict[str, str]:
        return {
            "source": self.source,
            "implies": self.implies_text,
            "category": self.category.value,
        }


class TemplateType(str, Enum):
    """Closed set of template types the resolver can infer."""

    MICROSERVICE = "microservice"
    FULLSTACK = "fullstack"
    FRONTEND = "frontend"
    API = "api"
    DEVOPS = "devops"
    LIBRARY = "library"
    BASIC = "basic"


@dataclass(frozen=True)
class DetectionResult:
    """Inferred template type, confidence tier, answers and diagnostics."""

    type: str
    confidence: float
    answers: Mapping[str, Any]
    evidence: Tuple[Evidence, ...] = ()
    warnings: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "answers", MappingProxyType(dict(self.answers)))
        object.__setattr__(self, "evidence", tuple(self.evidence))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "confidence": self.confidence,
            "answers": dict(self.answers),
            "evidence": [item.to_dict() for item in self.evidence],
            "warnings": list(self.warnings),
        }


QUESTION_TYPES: Tuple[str, ...] = ("select", "input", "confirm", "multiselect")

WhenClause = Union[str, Callable[[Mapping[str, Any]], bool]]


@dataclass(frozen=True)
class Choice:
    """Selectable option for select/multiselect questions."""

    name: str
    value: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Question:
    """Template question; ``when`` is a predicate or an expression string."""

    name: str
    message: str
    type: str
    choices: Tuple[Choice, ...] = ()
    default: Any = None
    when: Optional[WhenClause] = None

    def is_visible(self, answers: Mapping[str, Any]) -> bool:
        if self.when is None:
            return True
        from .templating.expressions import evaluate_when

        return evaluate_when(self.when, answers)


SKILL_FILE = "SKILL.md"
CONTENT_DIRS: Tuple[str, ...] = ("references/", "scripts/", "assets/")

VariableValue = Union[str, Callable[[Mapping[str, Any]], str]]


@dataclass
class TemplateDefinition:
    """A named template with questions, variables and content bodies."""

    id: str
    name: str
    description: str
    questions: List[Question] = field(default_factory=list)
    variables: Dict[str, VariableValue] = field(default_factory=dict)
    content: Dict[str, Any] = field(default_factory=dict)
    version: Optional[str] = None
    author: Optional[str] = None
    source_path: Optional[str] = None
    is_custom: bool = False

    @property
    def skill_body(self) -> str:
        return self.content[SKILL_FILE]

    def directory(self, name: str) -> Dict[str, str]:
        """Return the ``name`` content directory (``references/`` etc.) or an empty dict."""
        value = self.content.get(name)
        return dict(value) if isinstance(value, Mapping) else {}


@dataclass
class ValidationResult:
    """Outcome of validating a custom template definition or a generated skill."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    template_id: Optional[str] = None


# Logical file name (``SKILL.md``, ``references/api.md``) -> rendered text.
GeneratedSkill = Dict[str, str]


__all__ = [
    "CONTENT_DIRS",
    "Choice",
    "DetectionResult",
    "Evidence",
    "EvidenceCategory",
    "GeneratedSkill",
    "QUESTION_TYPES",
    "Question",
    "RESERVED_FIELDS",
    "SKILL_FILE",
    "TemplateDefinition",
    "TemplateType",
    "ValidationResult",
]
