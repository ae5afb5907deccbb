"""Configuration loading for skillgen (.skillgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .custom.loader import GLOBAL_TEMPLATES_DIR, PROJECT_TEMPLATES_DIR, TemplateRepository
from .presets import Preset

CONFIG_FILENAME = ".skillgen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class TemplatesConfig:
    """Where custom template definitions are looked up."""

    global_dir: Path = GLOBAL_TEMPLATES_DIR
    project_dir: Optional[Path] = None


@dataclass
class OutputConfig:
    """Default output directory and optional content directories."""

    dir: Path = Path(".")
    references: bool = False
    scripts: bool = False
    assets: bool = False


@dataclass
class DetectionConfig:
    enabled: bool = True


@dataclass
class SkillgenConfig:
    """Represents the high-level settings defined in .skillgen.yml."""

    root: Path
    templates: TemplatesConfig = field(default_factory=TemplatesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    presets: Dict[str, Preset] = field(default_factory=dict)

    @property
    def project_templates_dir(self) -> Path:
        return self.templates.project_dir or self.root / PROJECT_TEMPLATES_DIR

    def template_repository(self) -> TemplateRepository:
        return TemplateRepository.from_directories(
            self.templates.global_dir, self.project_templates_dir, root=self.root
        )


def load_config(config_path: Path) -> SkillgenConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SkillgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    templates = TemplatesConfig()
    templates_data = _as_dict(data.get("templates"))
    global_dir = _as_str(templates_data.get("global_dir"))
    if global_dir:
        templates.global_dir = Path(global_dir).expanduser()
    project_dir = _as_str(templates_data.get("project_dir"))
    if project_dir:
        templates.project_dir = root / Path(project_dir).expanduser()

    output = OutputConfig(dir=root)
    output_data = _as_dict(data.get("output"))
    output_dir = _as_str(output_data.get("dir"))
    if output_dir:
        output.dir = root / Path(output_dir).expanduser()
    output.references = _as_bool(output_data.get("references")) or False
    output.scripts = _as_bool(output_data.get("scripts")) or False
    output.assets = _as_bool(output_data.get("assets")) or False

    detection = DetectionConfig()
    enabled = _as_bool(_as_dict(data.get("detection")).get("enabled"))
    if enabled is not None:
        detection.enabled = enabled

    return SkillgenConfig(
        root=root,
        templates=templates,
        output=output,
        detection=detection,
        presets=_parse_presets(data.get("presets")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _parse_presets(value: Any) -> Dict[str, Preset]:
    presets: Dict[str, Preset] = {}
    for key, entry in _as_dict(value).items():
        if not isinstance(entry, dict):
            raise ConfigError(f"presets.{key} must be a mapping")
        template_type = _as_str(entry.get("type"))
        if not template_type:
            raise ConfigError(f'presets.{key} is missing "type"')
        presets[str(key)] = Preset(
            name=_as_str(entry.get("name")) or str(key),
            description=_as_str(entry.get("description")) or "",
            type=template_type,
            options=dict(_as_dict(entry.get("options"))),
        )
    return presets


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DetectionConfig",
    "OutputConfig",
    "SkillgenConfig",
    "TemplatesConfig",
    "load_config",
]
