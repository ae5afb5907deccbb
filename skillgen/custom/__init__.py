"""User-authored templates: validation, loading and variable plugins."""

from .loader import (
    DirectoryTemplateStore,
    LoadResult,
    MemoryTemplateStore,
    TemplateRepository,
    TemplateStore,
    TemplateValidationError,
    build_definition,
    load_template_file,
    load_template_mapping,
    load_templates_from_dir,
    validate_template_file,
)
from .validator import template_id_from_path, validate_template
from .variables import VariableResolver, VariableResolverRegistry, coerce_resolver

__all__ = [
    "DirectoryTemplateStore",
    "LoadResult",
    "MemoryTemplateStore",
    "TemplateRepository",
    "TemplateStore",
    "TemplateValidationError",
    "VariableResolver",
    "VariableResolverRegistry",
    "build_definition",
    "coerce_resolver",
    "load_template_file",
    "load_template_mapping",
    "load_templates_from_dir",
    "template_id_from_path",
    "validate_template",
    "validate_template_file",
]
