"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from skillgen.cli import _build_parser, _coerce_answer, main
from skillgen.custom import variables as variables_module
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture(autouse=True)
def _no_entry_points(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(variables_module, "_iter_entry_points", lambda: [])


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project directory whose config points the global template dir at tmp_path."""
    root = tmp_path / "project"
    root.mkdir()
    (root / ".skillgen.yml").write_text(
        f"templates:\n  global_dir: {tmp_path / 'global'}\n", encoding="utf-8"
    )
    return root


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "detect"])
    assert args.verbose is True
    assert args.command == "detect"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["detect", "--verbose"])
    assert args.verbose is True
    assert args.quiet is False
    assert args.command == "detect"


def test_cli_init_sources_are_mutually_exclusive(capsys: pytest.CaptureFixture[str]) -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["init", "--name", "x", "--desc", "d", "--type", "api", "--preset", "minimal-api"])
    assert "not allowed with argument" in capsys.readouterr().err


def test_coerce_answer_by_question_type() -> None:
    assert _coerce_answer("multiselect", "rest, grpc,") == ["rest", "grpc"]
    assert _coerce_answer("confirm", "yes") is True
    assert _coerce_answer(None, "false") is False
    assert _coerce_answer("select", "fastify") == "fastify"


def test_detect_prints_json(repo_builder: RepoBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    repo_builder.package_json({"@nestjs/core": "10"})

    main(["detect", str(repo_builder.path()), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["type"] == "microservice"
    assert payload["evidence"][0]["source"] == "@nestjs/core dependency"


def test_detect_prints_summary(repo_builder: RepoBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    main(["detect", str(repo_builder.path())])
    assert capsys.readouterr().out.startswith("Detected: basic (confidence 0.30)")


def test_init_dry_run_prints_files(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(
        [
            "init",
            "--name",
            "payments",
            "--desc",
            "Payments service.",
            "--preset",
            "minimal-api",
            "--answer",
            "communication=rest,grpc",
            "--path",
            str(project),
            "--dry-run",
        ]
    )

    out = capsys.readouterr().out
    assert out.startswith("=== SKILL.md ===\n---\nname: payments\n")
    assert "- gRPC" in out
    assert "## Docker" not in out
    assert not (project / "payments").exists()


def test_init_writes_skill_and_refuses_to_overwrite(
    project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output = tmp_path / "out"
    argv = [
        "init",
        "--name",
        "tiny",
        "--desc",
        "Tiny skill.",
        "--type",
        "basic",
        "--with-scripts",
        "--path",
        str(project),
        "--output",
        str(output),
    ]

    main(argv)

    assert (output / "tiny" / "SKILL.md").read_text(encoding="utf-8").startswith("---\nname: tiny\n")
    assert (output / "tiny" / "scripts" / "example.ts").exists()
    assert not (output / "tiny" / "assets").exists()
    assert "Skill 'tiny' (basic) created" in capsys.readouterr().out

    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 1
    assert "already exists" in capsys.readouterr().err

    main([*argv, "--force"])


def test_init_detects_template_when_none_is_chosen(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (project / "main.tf").write_text("", encoding="utf-8")

    main(["init", "--name", "ops", "--desc", "Ops.", "--path", str(project), "--dry-run"])

    assert "| IaC | terraform |" in capsys.readouterr().out


def test_init_renders_template_file(
    project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    template = tmp_path / "release.yaml"
    template.write_text(
        "name: Release\n"
        "description: Release helper\n"
        "questions:\n"
        "  - name: cadence\n"
        "    message: Cadence?\n"
        "    type: input\n"
        "    default: weekly\n"
        "content:\n"
        "  SKILL.md: '{{titleCase}} ships {{cadence}}'\n",
        encoding="utf-8",
    )

    main(
        [
            "init",
            "--name",
            "release-train",
            "--desc",
            "d",
            "--template-file",
            str(template),
            "--answer",
            "cadence=daily",
            "--path",
            str(project),
            "--dry-run",
        ]
    )

    assert "Release Train ships daily" in capsys.readouterr().out


@pytest.mark.parametrize(
    ("extra", "message"),
    [
        (["--type", "nope"], "Unknown template 'nope'"),
        (["--preset", "nope"], "Unknown preset 'nope'"),
        (["--type", "basic", "--answer", "novalue"], "expected KEY=VALUE"),
    ],
)
def test_init_reports_errors(
    project: Path, capsys: pytest.CaptureFixture[str], extra: list[str], message: str
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["init", "--name", "x", "--desc", "d", "--path", str(project), "--dry-run", *extra])
    assert excinfo.value.code == 1
    assert message in capsys.readouterr().err


def test_template_validate_exit_codes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    good = tmp_path / "good.yaml"
    good.write_text("name: G\ndescription: d\ncontent:\n  SKILL.md: body\n", encoding="utf-8")
    bad = tmp_path / "bad.yaml"
    bad.write_text("name: B\n", encoding="utf-8")

    main(["template", "validate", str(good)])
    assert "good.yaml is valid (template id: good)" in capsys.readouterr().out

    with pytest.raises(SystemExit) as excinfo:
        main(["template", "validate", str(bad)])
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert "error: " in out
    assert "bad.yaml is invalid" in out


def test_template_list_includes_custom_templates(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    custom_dir = project / ".skill-generator" / "templates"
    custom_dir.mkdir(parents=True)
    (custom_dir / "notes.yaml").write_text(
        "name: Notes\ndescription: Team notes\ncontent:\n  SKILL.md: body\n", encoding="utf-8"
    )
    (custom_dir / "broken.yaml").write_text("name: Broken\n", encoding="utf-8")

    main(["template", "list", "--path", str(project)])

    captured = capsys.readouterr()
    assert "frontend" in captured.out
    assert "(custom)" in captured.out
    assert "Notes" in captured.out
    assert "invalid: broken.yaml" in captured.err


def test_presets_lists_configured_entries(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with (project / ".skillgen.yml").open("a", encoding="utf-8") as handle:
        handle.write("presets:\n  team-api:\n    name: Team API\n    description: Ours\n    type: api\n")

    main(["presets", "--path", str(project)])

    out = capsys.readouterr().out
    assert "modern-react" in out
    assert "team-api" in out and "Team API: Ours" in out


def test_validate_generated_skill_exit_codes(
    project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output = tmp_path / "out"
    main(
        [
            "init",
            "--name",
            "checked",
            "--desc",
            "Checked skill.",
            "--type",
            "api",
            "--path",
            str(project),
            "--output",
            str(output),
        ]
    )
    capsys.readouterr()

    main(["validate", str(output / "checked")])
    assert "is a valid skill" in capsys.readouterr().out

    broken = tmp_path / "broken"
    broken.mkdir()
    (broken / "SKILL.md").write_text("---\nname: Bad_Name\ndescription: d\n---\nbody\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["validate", str(broken)])
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert 'error: Invalid name "Bad_Name"' in out
    assert "is not a valid skill" in out
