"""CLI entrypoints for skillgen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .config import ConfigError, SkillgenConfig, load_config
from .custom.loader import load_template_file, validate_template_file
from .custom.variables import VariableResolverRegistry
from .detection import detect_project
from .generator import (
    SkillRequest,
    TemplateCatalog,
    generate_skill,
    write_skill,
)
from .logging import configure_logging, get_logger
from .models import DetectionResult, TemplateDefinition
from .presets import get_preset, list_presets
from .validation import validate_skill

logger = get_logger("cli")


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Show debug logging.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log errors.",
    )


def _add_path_argument(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument(
        "--path",
        default=".",
        help=help_text,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillgen",
        description="Scaffold agent skills from built-in or custom templates.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect_parser = subparsers.add_parser(
        "detect",
        help="Detect the template type and answers for a project directory.",
    )
    _add_logging_options(detect_parser, suppress_default=True)
    detect_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory to scan (defaults to current directory).",
    )
    detect_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full detection result as JSON.",
    )

    init_parser = subparsers.add_parser(
        "init",
        help="Generate a new skill directory.",
    )
    _add_logging_options(init_parser, suppress_default=True)
    init_parser.add_argument("--name", required=True, help="Skill name (kebab-case).")
    init_parser.add_argument(
        "--desc",
        "--description",
        dest="description",
        required=True,
        help="One-line description of what the skill covers.",
    )
    source = init_parser.add_mutually_exclusive_group()
    source.add_argument("--type", dest="template", help="Template id (built-in or custom).")
    source.add_argument("--preset", help="Start from a named preset.")
    source.add_argument(
        "--template-file",
        type=Path,
        help="Render a custom template definition file directly.",
    )
    init_parser.add_argument(
        "--detect",
        action="store_true",
        help="Seed the template type and answers from project detection.",
    )
    init_parser.add_argument(
        "--answer",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Answer a template question; repeat for several answers.",
    )
    init_parser.add_argument(
        "--with-references", action="store_true", help="Generate references/ files."
    )
    init_parser.add_argument("--with-scripts", action="store_true", help="Generate scripts/ files.")
    init_parser.add_argument("--with-assets", action="store_true", help="Generate assets/ files.")
    init_parser.add_argument(
        "--output",
        type=Path,
        help="Directory that receives the skill folder (defaults to output.dir).",
    )
    init_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the rendered files instead of writing them.",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing skill directory.",
    )
    _add_path_argument(init_parser, "Project directory used for config and detection.")

    template_parser = subparsers.add_parser("template", help="Inspect templates.")
    _add_logging_options(template_parser, suppress_default=True)
    template_commands = template_parser.add_subparsers(dest="template_command", required=True)
    list_parser = template_commands.add_parser("list", help="List available templates.")
    _add_logging_options(list_parser, suppress_default=True)
    _add_path_argument(list_parser, "Project directory whose custom templates are listed.")
    validate_parser = template_commands.add_parser(
        "validate", help="Validate a custom template definition file."
    )
    _add_logging_options(validate_parser, suppress_default=True)
    validate_parser.add_argument("file", type=Path, help="YAML definition to validate.")

    skill_validate_parser = subparsers.add_parser(
        "validate", help="Validate a generated skill directory (SKILL.md frontmatter and body)."
    )
    _add_logging_options(skill_validate_parser, suppress_default=True)
    skill_validate_parser.add_argument("path", type=Path, help="Skill directory containing SKILL.md.")

    presets_parser = subparsers.add_parser("presets", help="List built-in and configured presets.")
    _add_logging_options(presets_parser, suppress_default=True)
    _add_path_argument(presets_parser, "Project directory whose configured presets are listed.")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for skillgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    try:
        if args.command == "detect":
            _run_detect(args)
        elif args.command == "init":
            _run_init(args)
        elif args.command == "template":
            code = _run_template(args)
            if code:
                parser.exit(code)
        elif args.command == "validate":
            code = _run_validate(args)
            if code:
                parser.exit(code)
        elif args.command == "presets":
            _run_presets(args)
        elif args.command == "serve":
            from .service import run_service

            run_service(host=args.host, port=args.port)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (ConfigError, LookupError, ValueError) as exc:
        parser.exit(1, f"skillgen {args.command} failed: {exc}\n")
    except FileExistsError as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"skillgen {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _run_detect(args: argparse.Namespace) -> None:
    result = detect_project(args.path)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return
    print(_describe_detection(result))


def _describe_detection(result: DetectionResult) -> str:
    lines = [f"Detected: {result.type} (confidence {result.confidence:.2f})"]
    for name, value in result.answers.items():
        lines.append(f"  {name}: {value}")
    for warning in result.warnings:
        lines.append(f"  warning: {warning}")
    return "\n".join(lines)


def _run_init(args: argparse.Namespace) -> None:
    project = Path(args.path)
    config = load_config(project)
    catalog = TemplateCatalog(config.template_repository())

    template_id: Optional[str] = args.template
    answers: Dict[str, Any] = {}
    definition: Optional[TemplateDefinition] = None

    if args.template_file is not None:
        definition = load_template_file(args.template_file)
    elif args.preset:
        preset = get_preset(args.preset, config.presets)
        if preset is None:
            raise LookupError(f"Unknown preset '{args.preset}'")
        template_id = preset.type
        answers.update(preset.options)

    if args.detect or (template_id is None and definition is None and config.detection.enabled):
        detected = detect_project(project)
        logger.info("Detected %s (confidence %.2f)", detected.type, detected.confidence)
        if template_id is None and definition is None:
            template_id = detected.type
        answers = {**dict(detected.answers), **answers}

    if definition is None:
        definition = catalog.resolve(template_id or "basic")
    answers.update(_parse_answers(definition, args.answer))

    registry = VariableResolverRegistry()
    registry.load_entry_points()

    request = SkillRequest(
        name=args.name,
        description=args.description,
        answers=answers,
        include_references=args.with_references or config.output.references,
        include_scripts=args.with_scripts or config.output.scripts,
        include_assets=args.with_assets or config.output.assets,
    )
    skill = generate_skill(definition, request, registry)

    if args.dry_run:
        for relative, text in skill.items():
            print(f"=== {relative} ===")
            print(text)
        return

    target = _output_root(args, config) / args.name
    if target.exists() and not args.force:
        raise FileExistsError(f"{_relativize(target)} already exists (use --force to overwrite)")
    written = write_skill(skill, target)
    print(f"Skill '{args.name}' ({definition.id}) created at {_relativize(target)}")
    for path in written:
        print(f"  {_relativize(path)}")


def _output_root(args: argparse.Namespace, config: SkillgenConfig) -> Path:
    return args.output if args.output is not None else config.output.dir


def _parse_answers(definition: TemplateDefinition, pairs: Sequence[str]) -> Dict[str, Any]:
    """Parse ``KEY=VALUE`` pairs, coercing by the matching question's type."""
    kinds = {question.name: question.type for question in definition.questions}
    parsed: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid answer {pair!r} (expected KEY=VALUE)")
        parsed[key] = _coerce_answer(kinds.get(key), value.strip())
    return parsed


def _coerce_answer(kind: Optional[str], value: str) -> Any:
    if kind == "multiselect":
        return [item.strip() for item in value.split(",") if item.strip()]
    if kind == "confirm" or value in ("true", "false"):
        return value.lower() in ("true", "yes", "1")
    return value


def _run_template(args: argparse.Namespace) -> int:
    if args.template_command == "list":
        config = load_config(Path(args.path))
        catalog = TemplateCatalog(config.template_repository())
        templates = catalog.list()
        for template in templates:
            origin = "custom" if template.is_custom else "built-in"
            print(f"{template.id:<16} {template.name} ({origin})")
            print(f"{'':<16} {template.description}")
        for error in catalog.errors:
            print(f"invalid: {error}", file=sys.stderr)
        return 0

    result = validate_template_file(args.file)
    for error in result.errors:
        print(f"error: {error}")
    for warning in result.warnings:
        print(f"warning: {warning}")
    if not result.valid:
        print(f"{args.file.name} is invalid")
        return 1
    print(f"{args.file.name} is valid (template id: {result.template_id})")
    return 0


def _run_validate(args: argparse.Namespace) -> int:
    result = validate_skill(args.path)
    for error in result.errors:
        print(f"error: {error}")
    for warning in result.warnings:
        print(f"warning: {warning}")
    if not result.valid:
        print(f"{args.path} is not a valid skill")
        return 1
    print(f"{args.path} is a valid skill")
    return 0


def _run_presets(args: argparse.Namespace) -> None:
    config = load_config(Path(args.path))
    for row in list_presets(config.presets):
        print(f"{row['value']:<16} {row['name']}: {row['description']}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
