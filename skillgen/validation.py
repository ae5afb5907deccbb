"""Structural checks for a generated skill directory."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, List

import yaml

from .models import SKILL_FILE, ValidationResult

ALLOWED_FRONTMATTER_KEYS = (
    "name",
    "description",
    "license",
    "allowed-tools",
    "metadata",
    "compatibility",
)
MAX_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024

_FRONTMATTER = re.compile(r"^---\n(.*?)\n---", re.DOTALL)
_KEBAB_NAME = re.compile(r"^[a-z0-9-]+$")


def validate_skill(path: Path) -> ValidationResult:
    """Check ``path/SKILL.md`` for frontmatter, a valid name and description, and a body.

    Missing or unreadable files and malformed frontmatter stop the checks
    early; field problems are all collected. An empty body only warns.
    """
    skill_md = Path(path) / SKILL_FILE
    if not skill_md.is_file():
        return ValidationResult(valid=False, errors=[f"{SKILL_FILE} not found"])
    try:
        content = skill_md.read_text(encoding="utf-8")
    except (OSError, ValueError) as exc:
        return ValidationResult(valid=False, errors=[f"Could not read {SKILL_FILE}: {exc}"])

    if not content.startswith("---"):
        return ValidationResult(
            valid=False, errors=[f"{SKILL_FILE} must start with YAML frontmatter (---)"]
        )
    match = _FRONTMATTER.match(content)
    if match is None:
        return ValidationResult(
            valid=False,
            errors=["Invalid frontmatter: expected '---', name/description lines, then '---'"],
        )
    try:
        frontmatter = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        return ValidationResult(valid=False, errors=[f"Invalid YAML: {exc}"])
    if frontmatter is None:
        frontmatter = {}
    if not isinstance(frontmatter, dict):
        return ValidationResult(valid=False, errors=["Frontmatter must be a YAML mapping"])

    errors: List[str] = []
    warnings: List[str] = []
    _check_name(frontmatter.get("name"), errors)
    _check_description(frontmatter.get("description"), errors)

    unexpected = [str(key) for key in frontmatter if key not in ALLOWED_FRONTMATTER_KEYS]
    if unexpected:
        errors.append(f"Unexpected keys in frontmatter: {', '.join(unexpected)}")

    if not content[match.end() :].strip():
        warnings.append(f"{SKILL_FILE} has no content after frontmatter")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def _check_name(name: Any, errors: List[str]) -> None:
    if not name:
        errors.append("Missing required field: name")
        return
    if not isinstance(name, str):
        errors.append('Field "name" must be a string')
        return
    if not _KEBAB_NAME.match(name):
        errors.append(f'Invalid name "{name}": use kebab-case (lowercase, numbers, hyphens)')
    if name.startswith("-") or name.endswith("-") or "--" in name:
        errors.append(
            f'Invalid name "{name}": cannot start/end with a hyphen or contain consecutive hyphens'
        )
    if len(name) > MAX_NAME_LENGTH:
        errors.append(f"Name too long: maximum {MAX_NAME_LENGTH} characters")


def _check_description(description: Any, errors: List[str]) -> None:
    if not description:
        errors.append("Missing required field: description")
        return
    if not isinstance(description, str):
        errors.append('Field "description" must be a string')
        return
    if len(description) > MAX_DESCRIPTION_LENGTH:
        errors.append(f"Description too long: maximum {MAX_DESCRIPTION_LENGTH} characters")
    if "<" in description or ">" in description:
        errors.append("Description cannot contain < or > characters")


__all__ = ["ALLOWED_FRONTMATTER_KEYS", "validate_skill"]
