"""Structural checks for generated skill directories."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillgen.generator import SkillRequest, generate_skill, write_skill
from skillgen.templates import BUILTIN_TEMPLATES
from skillgen.validation import validate_skill


def _skill(tmp_path: Path, text: str) -> Path:
    directory = tmp_path / "skill"
    directory.mkdir(exist_ok=True)
    (directory / "SKILL.md").write_text(text, encoding="utf-8")
    return directory


def _frontmatter(body: str = "# Title\n\nUse it.\n", **fields: str) -> str:
    lines = "".join(f"{key}: {value}\n" for key, value in fields.items())
    return f"---\n{lines}---\n{body}"


@pytest.mark.parametrize("template_id", sorted(BUILTIN_TEMPLATES))
def test_generated_builtin_skills_are_valid(tmp_path: Path, template_id: str) -> None:
    skill = generate_skill(
        BUILTIN_TEMPLATES[template_id], SkillRequest(name="my-skill", description="Does things.")
    )
    write_skill(skill, tmp_path / template_id)

    result = validate_skill(tmp_path / template_id)

    assert result.valid, result.errors
    assert result.warnings == []


def test_missing_skill_file(tmp_path: Path) -> None:
    result = validate_skill(tmp_path)
    assert not result.valid
    assert result.errors == ["SKILL.md not found"]


def test_frontmatter_is_required(tmp_path: Path) -> None:
    result = validate_skill(_skill(tmp_path, "# No frontmatter\n"))
    assert result.errors == ["SKILL.md must start with YAML frontmatter (---)"]


def test_unterminated_frontmatter(tmp_path: Path) -> None:
    result = validate_skill(_skill(tmp_path, "---\nname: x\n"))
    assert not result.valid
    assert result.errors[0].startswith("Invalid frontmatter")


def test_frontmatter_yaml_must_parse(tmp_path: Path) -> None:
    result = validate_skill(_skill(tmp_path, "---\nname: [unclosed\n---\nbody\n"))
    assert not result.valid
    assert result.errors[0].startswith("Invalid YAML:")


def test_frontmatter_must_be_a_mapping(tmp_path: Path) -> None:
    result = validate_skill(_skill(tmp_path, "---\n- a\n- b\n---\nbody\n"))
    assert result.errors == ["Frontmatter must be a YAML mapping"]


def test_missing_name_and_description(tmp_path: Path) -> None:
    result = validate_skill(_skill(tmp_path, _frontmatter(license="MIT")))
    assert result.errors == [
        "Missing required field: name",
        "Missing required field: description",
    ]


@pytest.mark.parametrize(
    ("name", "message"),
    [
        ("My_Skill", "use kebab-case"),
        ("-leading", "cannot start/end with a hyphen"),
        ("trailing-", "cannot start/end with a hyphen"),
        ("double--hyphen", "consecutive hyphens"),
        ("a" * 65, "Name too long: maximum 64 characters"),
        ("123", 'Field "name" must be a string'),
    ],
)
def test_name_rules(tmp_path: Path, name: str, message: str) -> None:
    result = validate_skill(_skill(tmp_path, _frontmatter(name=name, description="ok")))
    assert not result.valid
    assert any(message in error for error in result.errors), result.errors


def test_name_at_limit_is_accepted(tmp_path: Path) -> None:
    result = validate_skill(_skill(tmp_path, _frontmatter(name="a" * 64, description="ok")))
    assert result.valid


@pytest.mark.parametrize(
    ("description", "message"),
    [
        ("'" + "d" * 1025 + "'", "Description too long: maximum 1024 characters"),
        ("'uses <html> tags'", "Description cannot contain < or > characters"),
        ("[a, b]", 'Field "description" must be a string'),
    ],
)
def test_description_rules(tmp_path: Path, description: str, message: str) -> None:
    result = validate_skill(_skill(tmp_path, _frontmatter(name="ok", description=description)))
    assert not result.valid
    assert message in result.errors


def test_unexpected_frontmatter_keys(tmp_path: Path) -> None:
    text = _frontmatter(name="ok", description="fine", version="1", author="me", license="MIT")
    result = validate_skill(_skill(tmp_path, text))
    assert result.errors == ["Unexpected keys in frontmatter: version, author"]


def test_empty_body_only_warns(tmp_path: Path) -> None:
    result = validate_skill(_skill(tmp_path, _frontmatter(body="\n  \n", name="ok", description="d")))
    assert result.valid
    assert result.warnings == ["SKILL.md has no content after frontmatter"]
