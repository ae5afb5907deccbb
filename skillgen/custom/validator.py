"""Structural validation for user-authored template definitions."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, List, Set

from ..models import CONTENT_DIRS, QUESTION_TYPES, SKILL_FILE, ValidationResult
from ..templating.expressions import is_supported_expression

_TEMPLATE_SUFFIX = re.compile(r"\.ya?ml$", re.IGNORECASE)


def template_id_from_path(source_id: str) -> str:
    """Derive a template id from a file path: the filename without ``.yml``/``.yaml``."""
    filename = source_id.replace("\\", "/").rsplit("/", 1)[-1]
    return _TEMPLATE_SUFFIX.sub("", filename)


def is_template_filename(name: str) -> bool:
    """True for ``.yml``/``.yaml`` names, in any letter case."""
    return bool(_TEMPLATE_SUFFIX.search(name))


def validate_template(raw: Any, source_id: str) -> ValidationResult:
    """Validate a parsed definition; problems are collected, never raised."""
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(raw, Mapping):
        return ValidationResult(valid=False, errors=["Template must be a YAML mapping"])

    if not _non_empty_str(raw.get("name")):
        errors.append('Missing or invalid "name" field (must be a non-empty string)')
    if not _non_empty_str(raw.get("description")):
        errors.append('Missing or invalid "description" field (must be a non-empty string)')
    for optional in ("version", "author"):
        if optional in raw and not isinstance(raw[optional], str):
            errors.append(f'"{optional}" must be a string if provided')

    _check_content(raw.get("content"), errors)
    if "questions" in raw:
        _check_questions(raw["questions"], errors, warnings)
    if "variables" in raw:
        _check_variables(raw["variables"], errors)

    valid = not errors
    return ValidationResult(
        valid=valid,
        errors=errors,
        warnings=warnings,
        template_id=template_id_from_path(source_id) if valid else None,
    )


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _check_content(content: Any, errors: List[str]) -> None:
    if not isinstance(content, Mapping):
        errors.append('Missing or invalid "content" field (must be a mapping)')
        return
    if not _non_empty_str(content.get(SKILL_FILE)):
        errors.append(f'Missing or invalid "content.{SKILL_FILE}" (must be a non-empty string)')

    for directory in CONTENT_DIRS:
        if directory not in content:
            continue
        files = content[directory]
        if not isinstance(files, Mapping):
            errors.append(
                f'"content.{directory}" must be a mapping of file names to template strings'
            )
            continue
        for filename, body in files.items():
            if not isinstance(body, str):
                errors.append(f'"content.{directory}{filename}" must be a string')


def _check_questions(questions: Any, errors: List[str], warnings: List[str]) -> None:
    if not isinstance(questions, list):
        errors.append('"questions" must be a list')
        return

    seen: Set[str] = set()
    for index, question in enumerate(questions):
        prefix = f"questions[{index}]"
        if not isinstance(question, Mapping):
            errors.append(f"{prefix}: must be a mapping")
            continue

        name = question.get("name")
        if not _non_empty_str(name):
            errors.append(f'{prefix}: missing or invalid "name"')
        else:
            if name in seen:
                warnings.append(f'{prefix}: duplicate question name "{name}"')
            seen.add(name)

        if not _non_empty_str(question.get("message")):
            errors.append(f'{prefix}: missing or invalid "message"')

        kind = question.get("type")
        if kind not in QUESTION_TYPES:
            errors.append(
                f'{prefix}: invalid "type" (must be one of: {", ".join(QUESTION_TYPES)})'
            )

        if kind in ("select", "multiselect"):
            choices = question.get("choices")
            if not isinstance(choices, list) or not choices:
                errors.append(f'{prefix}: "choices" required and must be non-empty for {kind}')
            else:
                for position, choice in enumerate(choices):
                    if not (
                        isinstance(choice, Mapping)
                        and _present(choice.get("name"))
                        and _present(choice.get("value"))
                    ):
                        errors.append(f'{prefix}.choices[{position}]: must have "name" and "value"')

        if "when" in question:
            when = question["when"]
            if not isinstance(when, str):
                errors.append(f'{prefix}: "when" must be a string expression')
            elif not is_supported_expression(when):
                warnings.append(
                    f'{prefix}: "when" expression "{when}" may not be parseable '
                    "(expected: \"name\", \"name === 'value'\", or \"name !== 'value'\")"
                )


def _present(value: Any) -> bool:
    if value is None or value is False:
        return False
    return not (isinstance(value, str) and not value)


def _check_variables(variables: Any, errors: List[str]) -> None:
    if not isinstance(variables, Mapping):
        errors.append('"variables" must be a mapping of names to template strings')
        return
    for key, value in variables.items():
        if not isinstance(value, str):
            errors.append(f"variables.{key}: must be a string")


__all__ = ["is_template_filename", "template_id_from_path", "validate_template"]
