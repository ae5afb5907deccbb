"""Project detection: scan a directory for evidence and resolve a template type."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import List, Sequence

from ..logging import get_logger
from ..models import DetectionResult, Evidence
from .resolver import resolve_detection
from .scanners import (
    DEFAULT_SCANNERS,
    ConfigFileScanner,
    DependencyScanner,
    FolderStructureScanner,
    ProjectManifests,
    Scanner,
    load_manifests,
)

logger = get_logger("detection")


async def scan_project_async(
    root: Path, scanners: Sequence[Scanner] = DEFAULT_SCANNERS
) -> tuple[List[Evidence], ProjectManifests]:
    """Run ``scanners`` concurrently and concatenate their evidence in scanner order."""
    manifests = await asyncio.to_thread(load_manifests, root)
    results = await asyncio.gather(
        *(asyncio.to_thread(_safe_scan, scanner, root, manifests) for scanner in scanners)
    )
    evidence: List[Evidence] = []
    for scanner, items in zip(scanners, results):
        logger.debug("Scanner %s produced %d evidence item(s)", scanner.name, len(items))
        evidence.extend(items)
    return evidence, manifests


def _safe_scan(scanner: Scanner, root: Path, manifests: ProjectManifests) -> List[Evidence]:
    try:
        return scanner.scan(root, manifests)
    except OSError as exc:
        logger.debug("Scanner %s skipped %s: %s", scanner.name, root, exc)
        return []


async def detect_project_async(path: str | os.PathLike[str] | None = None) -> DetectionResult:
    root = Path(path) if path is not None else Path.cwd()
    evidence, manifests = await scan_project_async(root)
    return resolve_detection(
        evidence,
        manifests.has_manifest,
        has_python_manifest=manifests.has_python_manifest,
    )


def detect_project(path: str | os.PathLike[str] | None = None) -> DetectionResult:
    """Scan ``path`` (defaults to the working directory) and detect its template type."""
    return asyncio.run(detect_project_async(path))


__all__ = [
    "ConfigFileScanner",
    "DependencyScanner",
    "FolderStructureScanner",
    "ProjectManifests",
    "Scanner",
    "detect_project",
    "detect_project_async",
    "resolve_detection",
    "scan_project_async",
]
