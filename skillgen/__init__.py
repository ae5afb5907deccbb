"""Scaffold agent skills from project detection and templates."""

from .detection import detect_project, detect_project_async
from .generator import SkillRequest, TemplateCatalog, generate_skill
from .models import DetectionResult, Evidence, TemplateDefinition

__version__ = "1.0.0"

__all__ = [
    "DetectionResult",
    "Evidence",
    "SkillRequest",
    "TemplateCatalog",
    "TemplateDefinition",
    "__version__",
    "detect_project",
    "detect_project_async",
    "generate_skill",
]
