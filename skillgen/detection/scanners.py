"""Evidence scanners: dependency manifests, config markers and folder shapes."""

from __future__ import annotations

import json
import re
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from ..models import Evidence, EvidenceCategory
from .tables import (
    CLEAN_ARCHITECTURE_DIRS,
    CONFIG_FILE_CHECKS,
    CONFIG_PATH_CHECKS,
    DB_DRIVER_DEPS,
    FOLDER_CHECKS,
    FRAMEWORK_DEPS,
    PYTHON_DB_DRIVER_DEPS,
    PYTHON_FRAMEWORK_DEPS,
    PYTHON_TECH_DEPS,
    TECH_DEPS,
)


@dataclass
class ProjectManifests:
    """Dependency manifests read once per detection run."""

    package_json: Optional[Dict[str, Any]] = None
    python_packages: List[str] = field(default_factory=list)
    has_python_manifest: bool = False

    @property
    def has_manifest(self) -> bool:
        return self.package_json is not None or self.has_python_manifest

    @property
    def node_dependencies(self) -> Set[str]:
        if self.package_json is None:
            return set()
        names: Set[str] = set()
        for key in ("dependencies", "devDependencies"):
            deps = self.package_json.get(key)
            if isinstance(deps, dict):
                names.update(str(name) for name in deps)
        return names


def load_manifests(root: Path) -> ProjectManifests:
    """Read package.json and Python manifests under ``root``; unreadable files are skipped."""
    manifests = ProjectManifests(package_json=load_package_json(root))

    requirements = root / "requirements.txt"
    pyproject = root / "pyproject.toml"
    packages: Set[str] = set()
    if _is_file(requirements):
        manifests.has_python_manifest = True
        packages.update(_parse_requirements(requirements))
    if _is_file(pyproject):
        manifests.has_python_manifest = True
        packages.update(_parse_pyproject(pyproject))
    manifests.python_packages = sorted(packages)
    return manifests


def load_package_json(root: Path) -> Optional[Dict[str, Any]]:
    """Return the parsed package.json mapping, or None when absent or malformed."""
    try:
        data = json.loads((root / "package.json").read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def _normalise_package(name: str) -> str:
    return re.sub(r"[-_.]+", "-", name).lower()


def _split_requirement(spec: str) -> str:
    name = re.split(r"[<>=!~;\[\s]", spec.strip(), maxsplit=1)[0].strip()
    return _normalise_package(name) if name else ""


def _parse_requirements(path: Path) -> List[str]:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, ValueError):
        return []
    packages: List[str] = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "-")):
            continue
        name = _split_requirement(stripped)
        if name:
            packages.append(name)
    return packages


def _parse_pyproject(path: Path) -> List[str]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return []

    dependencies: List[Any] = []
    project = data.get("project")
    if isinstance(project, dict):
        dependencies.extend(_as_list(project.get("dependencies")))
        optional = project.get("optional-dependencies", {}) or {}
        if isinstance(optional, dict):
            for values in optional.values():
                dependencies.extend(_as_list(values))

    tool = data.get("tool")
    poetry = tool.get("poetry", {}) if isinstance(tool, dict) else {}
    if isinstance(poetry, dict):
        poetry_deps = poetry.get("dependencies", {}) or {}
        if isinstance(poetry_deps, dict):
            dependencies.extend(poetry_deps.keys())

    packages: Set[str] = set()
    for dep in dependencies:
        if not isinstance(dep, str):
            continue
        name = _split_requirement(dep)
        if name and name != "python":
            packages.add(name)
    return sorted(packages)


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError:
        return False


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


class Scanner(ABC):
    """Contract for scanners that emit evidence about a project directory."""

    name: str = "scanner"

    @abstractmethod
    def scan(self, root: Path, manifests: ProjectManifests) -> List[Evidence]:
        """Return evidence for ``root``; missing inputs yield fewer facts, never errors."""


class DependencyScanner(Scanner):
    """Maps declared dependencies to frameworks, technologies and database drivers."""

    name = "dependencies"

    def scan(self, root: Path, manifests: ProjectManifests) -> List[Evidence]:
        evidence: List[Evidence] = []
        node = manifests.node_dependencies
        if node:
            evidence.extend(self._scan_names(node, FRAMEWORK_DEPS, TECH_DEPS, DB_DRIVER_DEPS))
        python = set(manifests.python_packages)
        if python:
            evidence.extend(
                self._scan_names(
                    python, PYTHON_FRAMEWORK_DEPS, PYTHON_TECH_DEPS, PYTHON_DB_DRIVER_DEPS
                )
            )
        return evidence

    @staticmethod
    def _scan_names(
        names: Set[str],
        frameworks: Dict[str, Any],
        technologies: Dict[str, Any],
        drivers: Dict[str, str],
    ) -> List[Evidence]:
        evidence: List[Evidence] = []
        category = EvidenceCategory.DEPENDENCY

        for dep, (type_hint, answer, value) in frameworks.items():
            if dep not in names:
                continue
            pairs = [("type", type_hint)]
            if answer is not None:
                pairs.append((answer, value))
            evidence.append(Evidence(f"{dep} dependency", tuple(pairs), category))

        for dep, (answer, value) in technologies.items():
            if dep in names:
                evidence.append(Evidence(f"{dep} dependency", ((answer, value),), category))

        for dep, database in drivers.items():
            if dep in names:
                evidence.append(
                    Evidence(f"{dep} dependency", (("database-driver", database),), category)
                )
        return evidence


class ConfigFileScanner(Scanner):
    """Looks for well-known configuration and tooling marker files."""

    name = "config-files"

    def scan(self, root: Path, manifests: ProjectManifests) -> List[Evidence]:
        evidence: List[Evidence] = []
        for candidates, implies in CONFIG_FILE_CHECKS:
            for candidate in candidates:
                if _exists(root / candidate):
                    evidence.append(
                        Evidence.parse(candidate, implies, EvidenceCategory.CONFIG_FILE)
                    )
                    break

        for label, candidates, implies in CONFIG_PATH_CHECKS:
            if any(_exists(root / candidate) for candidate in candidates):
                evidence.append(Evidence.parse(label, implies, EvidenceCategory.CONFIG_FILE))
        return evidence


class FolderStructureScanner(Scanner):
    """Infers hints from top-level folder layout."""

    name = "folders"

    def scan(self, root: Path, manifests: ProjectManifests) -> List[Evidence]:
        evidence: List[Evidence] = []
        category = EvidenceCategory.FOLDER_STRUCTURE
        for directory, implies in FOLDER_CHECKS:
            if _exists(root / directory):
                evidence.append(Evidence.parse(f"{directory}/", implies, category))

        present = sum(1 for directory in CLEAN_ARCHITECTURE_DIRS if _exists(root / directory))
        if present >= 2:
            evidence.append(
                Evidence.parse(
                    " + ".join(f"{directory}/" for directory in CLEAN_ARCHITECTURE_DIRS),
                    "architecture=clean",
                    category,
                )
            )

        try:
            has_terraform = any(
                child.suffix == ".tf" for child in root.iterdir() if _is_file(child)
            )
        except OSError:
            has_terraform = False
        if has_terraform:
            evidence.append(
                Evidence.parse("*.tf files", "iac=terraform, type-hint=devops", category)
            )
        return evidence


# Concatenation order decides which fact wins a field conflict.
DEFAULT_SCANNERS: tuple[Scanner, ...] = (
    DependencyScanner(),
    ConfigFileScanner(),
    FolderStructureScanner(),
)


__all__ = [
    "ConfigFileScanner",
    "DEFAULT_SCANNERS",
    "DependencyScanner",
    "FolderStructureScanner",
    "ProjectManifests",
    "Scanner",
    "load_manifests",
    "load_package_json",
]
