"""FastAPI application entrypoint for skillgen service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError, SkillgenConfig, load_config
from ..custom.loader import TemplateValidationError, load_template_mapping
from ..custom.validator import validate_template
from ..custom.variables import VariableResolverRegistry
from ..detection import detect_project_async
from ..generator import SkillRequest, TemplateCatalog, TemplateNotFoundError, generate_skill
from ..models import TemplateDefinition

T = TypeVar("T")


class HealthResponse(BaseModel):
    status: str


class DetectRequest(BaseModel):
    path: str


class EvidenceModel(BaseModel):
    source: str
    implies: str
    category: str


class DetectResponse(BaseModel):
    type: str
    confidence: float
    answers: Dict[str, Any]
    evidence: List[EvidenceModel]
    warnings: List[str]


class RenderRequest(BaseModel):
    name: str
    description: str
    template: Optional[str] = None
    definition: Optional[Dict[str, Any]] = None
    answers: Dict[str, Any] = Field(default_factory=dict)
    include_references: bool = False
    include_scripts: bool = False
    include_assets: bool = False


class RenderResponse(BaseModel):
    template: str
    files: Dict[str, str]


class ValidateRequest(BaseModel):
    definition: Any = None
    source: str = "template.yaml"


class ValidateResponse(BaseModel):
    valid: bool
    errors: List[str]
    warnings: List[str]
    template_id: Optional[str] = None


class TemplateSummary(BaseModel):
    id: str
    name: str
    description: str
    custom: bool


def _default_config() -> SkillgenConfig:
    return load_config(Path.cwd())


def _default_registry() -> VariableResolverRegistry:
    registry = VariableResolverRegistry()
    registry.load_entry_points()
    return registry


async def _run_blocking(function: Callable[[], T]) -> T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, function)


def create_app(
    config_factory: Callable[[], SkillgenConfig] = _default_config,
    registry_factory: Callable[[], VariableResolverRegistry] = _default_registry,
) -> FastAPI:
    """Create the FastAPI application exposing detection and rendering."""
    app = FastAPI(title="skillgen", version="1.0.0")
    registry = registry_factory()

    async def get_catalog() -> TemplateCatalog:
        # Custom templates are re-read per request so edits show up without a restart.
        config = await _run_blocking(config_factory)
        return TemplateCatalog(config.template_repository())

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/detect", response_model=DetectResponse)
    async def detect(payload: DetectRequest) -> DetectResponse:
        root = Path(payload.path).expanduser()
        if not root.is_dir():
            raise FileNotFoundError(f"Project directory not found: {payload.path}")
        result = await detect_project_async(root)
        return DetectResponse(**result.to_dict())

    @app.post("/render", response_model=RenderResponse)
    async def render(
        payload: RenderRequest,
        catalog: TemplateCatalog = Depends(get_catalog),
    ) -> RenderResponse:
        def _run_render() -> RenderResponse:
            definition = _select_definition(payload, catalog)
            request = SkillRequest(
                name=payload.name,
                description=payload.description,
                answers=dict(payload.answers),
                include_references=payload.include_references,
                include_scripts=payload.include_scripts,
                include_assets=payload.include_assets,
            )
            files = generate_skill(definition, request, registry)
            return RenderResponse(template=definition.id, files=files)

        return await _run_blocking(_run_render)

    @app.post("/templates/validate", response_model=ValidateResponse)
    async def validate(payload: ValidateRequest) -> ValidateResponse:
        result = validate_template(payload.definition, payload.source)
        return ValidateResponse(
            valid=result.valid,
            errors=result.errors,
            warnings=result.warnings,
            template_id=result.template_id,
        )

    @app.get("/templates", response_model=List[TemplateSummary])
    async def list_templates(
        catalog: TemplateCatalog = Depends(get_catalog),
    ) -> List[TemplateSummary]:
        templates = await _run_blocking(catalog.list)
        return [
            TemplateSummary(
                id=template.id,
                name=template.name,
                description=template.description,
                custom=template.is_custom,
            )
            for template in templates
        ]

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(TemplateNotFoundError)
    async def template_not_found_handler(_: Any, exc: TemplateNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(TemplateValidationError)
    async def template_invalid_handler(_: Any, exc: TemplateValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "errors": exc.result.errors},
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def _select_definition(payload: RenderRequest, catalog: TemplateCatalog) -> TemplateDefinition:
    if payload.definition is not None:
        return load_template_mapping(payload.definition, f"{payload.template or 'inline'}.yaml")
    return catalog.resolve(payload.template or "basic")


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["create_app", "run_service"]
