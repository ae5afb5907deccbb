"""Resolve scanned evidence into a template type, confidence tier and answers."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..logging import get_logger
from ..models import (
    RESERVED_FIELDS,
    DetectionResult,
    Evidence,
    EvidenceCategory,
    TemplateType,
)
from .tables import TESTING_COMBINATIONS

logger = get_logger("detection.resolver")

CONFIDENCE_MICROSERVICE = 0.95
CONFIDENCE_FULLSTACK = 0.9
CONFIDENCE_FRONTEND = 0.85
CONFIDENCE_API = 0.85
CONFIDENCE_DEVOPS = 0.8
CONFIDENCE_LIBRARY = 0.6
CONFIDENCE_BASIC = 0.3

_DEPENDENCY = EvidenceCategory.DEPENDENCY
_CONFIG_FILE = EvidenceCategory.CONFIG_FILE
_FOLDER = EvidenceCategory.FOLDER_STRUCTURE


def resolve_detection(
    evidence: Sequence[Evidence],
    has_manifest: bool,
    *,
    has_python_manifest: bool = False,
) -> DetectionResult:
    """Infer the template type and answers from ``evidence`` (in scan order).

    Field assignments are first-wins: a later conflicting value is dropped and
    reported in ``warnings``. Never raises.
    """
    answers, warnings = _extract_answers(evidence)

    def has_framework(hint: str) -> bool:
        return any(e.category is _DEPENDENCY and e.asserts("type", hint) for e in evidence)

    def has_config(name: str, value: str) -> bool:
        return any(e.category is _CONFIG_FILE and e.asserts(name, value) for e in evidence)

    def has_folder_hint(name: str, value: str) -> bool:
        return any(e.category is _FOLDER and e.asserts(name, value) for e in evidence)

    def has_dependency(keyword: str) -> bool:
        return any(e.category is _DEPENDENCY and keyword in e.source for e in evidence)

    has_orm = "orm" in answers
    has_src_dir = any(
        e.category is _FOLDER and (e.source.startswith("src/") or e.asserts("frontend-hint"))
        for e in evidence
    )

    if has_framework("microservice") or has_config("type", "microservice"):
        template_type, confidence = TemplateType.MICROSERVICE, CONFIDENCE_MICROSERVICE
        _resolve_microservice_database(evidence, answers)
    elif has_framework("fullstack-or-frontend") and has_orm:
        template_type, confidence = TemplateType.FULLSTACK, CONFIDENCE_FULLSTACK
        _resolve_fullstack_database(evidence, answers)
    elif has_framework("fullstack-or-frontend"):
        template_type, confidence = TemplateType.FRONTEND, CONFIDENCE_FRONTEND
    elif has_framework("api"):
        template_type, confidence = TemplateType.API, CONFIDENCE_API
        _resolve_api_database(evidence, answers)
    elif has_folder_hint("type-hint", "devops") or (
        has_config("containerization", "docker") and not has_manifest
    ):
        template_type, confidence = TemplateType.DEVOPS, CONFIDENCE_DEVOPS
    elif has_manifest and has_src_dir:
        template_type, confidence = TemplateType.LIBRARY, CONFIDENCE_LIBRARY
        if has_config("language", "typescript") or has_dependency("typescript"):
            answers["language"] = "typescript"
        elif has_python_manifest and "language" not in answers:
            answers["language"] = "python"
    else:
        template_type, confidence = TemplateType.BASIC, CONFIDENCE_BASIC

    _resolve_testing_combinations(evidence, answers, warnings)

    if template_type is TemplateType.FRONTEND and "testing" in answers:
        answers["includeTesting"] = answers.pop("testing")

    logger.debug(
        "Resolved %s (confidence %.2f) from %d evidence item(s), %d warning(s)",
        template_type.value,
        confidence,
        len(evidence),
        len(warnings),
    )
    return DetectionResult(
        type=template_type.value,
        confidence=confidence,
        answers=answers,
        evidence=tuple(evidence),
        warnings=tuple(warnings),
    )


_TESTING_CONFLICT = 'Conflict on "testing":'


def _extract_answers(evidence: Sequence[Evidence]) -> tuple[Dict[str, Any], List[str]]:
    answers: Dict[str, Any] = {}
    raw: Dict[str, str] = {}
    warnings: List[str] = []
    for item in evidence:
        for name, value in item.implies:
            if name in RESERVED_FIELDS:
                continue
            if name in raw:
                if raw[name] != value:
                    warnings.append(
                        f'Conflict on "{name}": keeping "{raw[name]}" (seen first), '
                        f'ignoring "{value}" (from {item.source})'
                    )
                continue
            raw[name] = value
            answers[name] = _coerce(value)
    return answers, warnings


def _coerce(value: str) -> Any:
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def _database_drivers(evidence: Sequence[Evidence]) -> List[str]:
    return [
        driver
        for driver in (e.value_of("database-driver") for e in evidence)
        if driver is not None
    ]


def _resolve_microservice_database(evidence: Sequence[Evidence], answers: Dict[str, Any]) -> None:
    drivers = _database_drivers(evidence)
    orm = answers.get("orm")

    if orm == "mongoose" or "mongodb" in drivers:
        answers["database"] = "mongoose"
    elif orm == "typeorm" or drivers:
        if "sqlserver" in drivers:
            answers["database"] = "typeorm-sqlserver"
        elif "postgres" in drivers:
            answers["database"] = "typeorm-postgres"
        elif "mysql" in drivers:
            answers["database"] = "typeorm-mysql"
        else:
            answers["database"] = "typeorm-postgres"

    # The microservice template records its choice under "database".
    answers.pop("orm", None)


def _resolve_fullstack_database(evidence: Sequence[Evidence], answers: Dict[str, Any]) -> None:
    drivers = _database_drivers(evidence)
    orm = answers.get("orm")

    if orm == "mongoose" or "mongodb" in drivers:
        answers["database"] = "mongodb"
    elif "sqlite" in drivers:
        answers["database"] = "sqlite"
    else:
        answers["database"] = "postgres"


def _resolve_api_database(evidence: Sequence[Evidence], answers: Dict[str, Any]) -> None:
    drivers = _database_drivers(evidence)
    orm = answers.get("orm")

    if orm == "mongoose" or "mongodb" in drivers:
        answers["database"] = "mongodb"
    elif "sqlite" in drivers:
        answers["database"] = "sqlite"
    elif orm or drivers:
        answers["database"] = "postgres"


def _resolve_testing_combinations(
    evidence: Sequence[Evidence], answers: Dict[str, Any], warnings: List[str]
) -> None:
    sources = {e.source for e in evidence if e.category is _DEPENDENCY}
    resolved = None
    for unit, e2e, combined in TESTING_COMBINATIONS:
        if unit in sources and e2e in sources:
            resolved = combined
            break

    if resolved is None or answers.get("testing") == resolved:
        return

    # Earlier "testing" conflicts are settled by the combined value.
    warnings[:] = [warning for warning in warnings if not warning.startswith(_TESTING_CONFLICT)]
    answers["testing"] = resolved


__all__ = [
    "CONFIDENCE_API",
    "CONFIDENCE_BASIC",
    "CONFIDENCE_DEVOPS",
    "CONFIDENCE_FRONTEND",
    "CONFIDENCE_FULLSTACK",
    "CONFIDENCE_LIBRARY",
    "CONFIDENCE_MICROSERVICE",
    "resolve_detection",
]
