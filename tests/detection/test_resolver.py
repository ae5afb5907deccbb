"""Tier cascade, answer extraction and database/testing resolution."""

from __future__ import annotations

from typing import Sequence

import pytest

from skillgen.detection.resolver import (
    CONFIDENCE_API,
    CONFIDENCE_BASIC,
    CONFIDENCE_DEVOPS,
    CONFIDENCE_FRONTEND,
    CONFIDENCE_FULLSTACK,
    CONFIDENCE_LIBRARY,
    CONFIDENCE_MICROSERVICE,
    resolve_detection,
)
from skillgen.models import Evidence, EvidenceCategory

DEP = EvidenceCategory.DEPENDENCY
CFG = EvidenceCategory.CONFIG_FILE
DIR = EvidenceCategory.FOLDER_STRUCTURE


def _ev(source: str, implies: str, category: EvidenceCategory) -> Evidence:
    return Evidence.parse(source, implies, category)


def _resolve(evidence: Sequence[Evidence], has_manifest: bool = True):
    return resolve_detection(list(evidence), has_manifest)


def test_empty_evidence_is_basic() -> None:
    result = _resolve([], has_manifest=False)
    assert result.type == "basic"
    assert result.confidence == CONFIDENCE_BASIC
    assert dict(result.answers) == {}
    assert result.warnings == ()


def test_nest_dependency_wins_over_everything() -> None:
    result = _resolve(
        [
            _ev("@nestjs/core dependency", "type=microservice", DEP),
            _ev("next dependency", "type=fullstack-or-frontend, framework=nextjs", DEP),
            _ev("express dependency", "type=api, framework=express", DEP),
        ]
    )
    assert result.type == "microservice"
    assert result.confidence == CONFIDENCE_MICROSERVICE


def test_nest_cli_config_selects_microservice() -> None:
    result = _resolve([_ev("nest-cli.json", "type=microservice", CFG)])
    assert result.type == "microservice"


def test_microservice_type_hint_only_counts_from_config_or_dependency() -> None:
    result = _resolve([_ev("weird/", "type=microservice", DIR)], has_manifest=False)
    assert result.type == "basic"


@pytest.mark.parametrize(
    ("extra", "database"),
    [
        ([_ev("mongoose dependency", "orm=mongoose", DEP)], "mongoose"),
        ([_ev("mongodb dependency", "database-driver=mongodb", DEP)], "mongoose"),
        ([_ev("mssql dependency", "database-driver=sqlserver", DEP)], "typeorm-sqlserver"),
        ([_ev("pg dependency", "database-driver=postgres", DEP)], "typeorm-postgres"),
        ([_ev("mysql2 dependency", "database-driver=mysql", DEP)], "typeorm-mysql"),
        ([_ev("typeorm dependency", "orm=typeorm", DEP)], "typeorm-postgres"),
    ],
)
def test_microservice_database_mapping(extra: list[Evidence], database: str) -> None:
    result = _resolve([_ev("@nestjs/core dependency", "type=microservice", DEP), *extra])
    assert result.answers["database"] == database
    assert "orm" not in result.answers


def test_microservice_without_database_signals_has_no_database() -> None:
    result = _resolve([_ev("@nestjs/core dependency", "type=microservice", DEP)])
    assert "database" not in result.answers


def test_meta_framework_with_orm_is_fullstack() -> None:
    result = _resolve(
        [
            _ev("next dependency", "type=fullstack-or-frontend, framework=nextjs", DEP),
            _ev("@prisma/client dependency", "orm=prisma", DEP),
        ]
    )
    assert result.type == "fullstack"
    assert result.confidence == CONFIDENCE_FULLSTACK
    assert result.answers["framework"] == "nextjs"
    assert result.answers["orm"] == "prisma"
    assert result.answers["database"] == "postgres"


@pytest.mark.parametrize(
    ("extra", "database"),
    [
        ([_ev("mongoose dependency", "orm=mongoose", DEP)], "mongodb"),
        (
            [
                _ev("drizzle-orm dependency", "orm=drizzle", DEP),
                _ev("better-sqlite3 dependency", "database-driver=sqlite", DEP),
            ],
            "sqlite",
        ),
    ],
)
def test_fullstack_database_mapping(extra: list[Evidence], database: str) -> None:
    result = _resolve(
        [_ev("nuxt dependency", "type=fullstack-or-frontend, framework=nuxt", DEP), *extra]
    )
    assert result.type == "fullstack"
    assert result.answers["database"] == database


def test_meta_framework_without_orm_is_frontend() -> None:
    result = _resolve(
        [
            _ev("next dependency", "type=fullstack-or-frontend, framework=nextjs", DEP),
            _ev("zustand dependency", "stateManagement=zustand", DEP),
        ]
    )
    assert result.type == "frontend"
    assert result.confidence == CONFIDENCE_FRONTEND
    assert result.answers["stateManagement"] == "zustand"


def test_frontend_renames_testing_to_include_testing() -> None:
    result = _resolve(
        [
            _ev("next dependency", "type=fullstack-or-frontend, framework=nextjs", DEP),
            _ev("vitest dependency", "testing=vitest", DEP),
        ]
    )
    assert result.answers["includeTesting"] == "vitest"
    assert "testing" not in result.answers


def test_api_framework_is_api() -> None:
    result = _resolve(
        [
            _ev("express dependency", "type=api, framework=express", DEP),
            _ev("pg dependency", "database-driver=postgres", DEP),
        ]
    )
    assert result.type == "api"
    assert result.confidence == CONFIDENCE_API
    assert result.answers["framework"] == "express"
    assert result.answers["database"] == "postgres"


def test_api_without_database_signals_leaves_database_unset() -> None:
    result = _resolve([_ev("hono dependency", "type=api, framework=hono", DEP)])
    assert "database" not in result.answers


@pytest.mark.parametrize(
    ("extra", "database"),
    [
        ([_ev("mongodb dependency", "database-driver=mongodb", DEP)], "mongodb"),
        ([_ev("better-sqlite3 dependency", "database-driver=sqlite", DEP)], "sqlite"),
        ([_ev("prisma dependency", "orm=prisma", DEP)], "postgres"),
    ],
)
def test_api_database_mapping(extra: list[Evidence], database: str) -> None:
    result = _resolve([_ev("koa dependency", "type=api, framework=koa", DEP), *extra])
    assert result.answers["database"] == database


def test_devops_from_folder_hint() -> None:
    result = _resolve([_ev("terraform/", "iac=terraform, type-hint=devops", DIR)])
    assert result.type == "devops"
    assert result.confidence == CONFIDENCE_DEVOPS
    assert result.answers["iac"] == "terraform"
    assert "type-hint" not in result.answers


def test_dockerfile_without_manifest_is_devops() -> None:
    evidence = [_ev("Dockerfile", "containerization=docker, includeDocker=true", CFG)]
    assert _resolve(evidence, has_manifest=False).type == "devops"


def test_dockerfile_with_manifest_and_src_is_library() -> None:
    evidence = [
        _ev("Dockerfile", "containerization=docker, includeDocker=true", CFG),
        _ev("src/components/", "frontend-hint", DIR),
    ]
    result = _resolve(evidence, has_manifest=True)
    assert result.type == "library"
    assert result.confidence == CONFIDENCE_LIBRARY


def test_library_sets_typescript_language_from_config() -> None:
    evidence = [
        _ev("tsconfig.json", "language=typescript", CFG),
        _ev("src/modules/", "nest-modules", DIR),
    ]
    result = _resolve(evidence)
    assert result.type == "library"
    assert result.answers["language"] == "typescript"


def test_library_sets_typescript_language_from_dependency() -> None:
    evidence = [
        _ev("typescript dependency", "language=typescript", DEP),
        _ev("src/app/", "app-router", DIR),
    ]
    assert _resolve(evidence).answers["language"] == "typescript"


def test_python_library_defaults_to_python_language() -> None:
    evidence = [_ev("src/domain/ + src/application/ + src/infrastructure/", "architecture=clean", DIR)]
    result = resolve_detection(evidence, True, has_python_manifest=True)
    assert result.type == "library"
    assert result.answers["language"] == "python"


def test_manifest_without_src_is_basic() -> None:
    result = _resolve([_ev("zod dependency", "validation=zod", DEP)])
    assert result.type == "basic"
    assert result.answers["validation"] == "zod"


def test_first_value_wins_and_conflict_is_reported() -> None:
    result = _resolve(
        [
            _ev("zustand dependency", "stateManagement=zustand", DEP),
            _ev("jotai dependency", "stateManagement=jotai", DEP),
        ]
    )
    assert result.answers["stateManagement"] == "zustand"
    assert len(result.warnings) == 1
    warning = result.warnings[0]
    assert '"stateManagement"' in warning
    assert "zustand" in warning and "jotai" in warning
    assert "jotai dependency" in warning


def test_repeated_equal_values_do_not_warn() -> None:
    result = _resolve(
        [
            _ev("prisma dependency", "orm=prisma", DEP),
            _ev("prisma/schema.prisma", "orm=prisma", CFG),
        ]
    )
    assert result.warnings == ()


def test_boolean_strings_are_coerced() -> None:
    result = _resolve(
        [
            _ev("Dockerfile", "containerization=docker, includeDocker=true", CFG),
            _ev("src/app/", "app-router", DIR),
        ],
        has_manifest=False,
    )
    assert result.answers["includeDocker"] is True
    assert result.answers["app-router"] is True


def test_reserved_fields_never_reach_answers() -> None:
    result = _resolve(
        [
            _ev("express dependency", "type=api, framework=express", DEP),
            _ev("pg dependency", "database-driver=postgres", DEP),
            _ev("infrastructure/", "type-hint=devops", DIR),
        ]
    )
    for reserved in ("type", "type-hint", "database-driver"):
        assert reserved not in result.answers


@pytest.mark.parametrize(
    ("unit", "e2e", "combined"),
    [
        ("vitest", "@playwright/test", "vitest-playwright"),
        ("jest", "cypress", "jest-cypress"),
    ],
)
def test_testing_combination_overrides_and_clears_warnings(
    unit: str, e2e: str, combined: str
) -> None:
    from skillgen.detection.tables import TECH_DEPS

    result = _resolve(
        [
            _ev("express dependency", "type=api, framework=express", DEP),
            Evidence(f"{unit} dependency", (TECH_DEPS[unit],), DEP),
            Evidence(f"{e2e} dependency", (TECH_DEPS[e2e],), DEP),
        ]
    )
    assert result.answers["testing"] == combined
    assert not any('"testing"' in warning for warning in result.warnings)


def test_combination_on_frontend_lands_in_include_testing() -> None:
    result = _resolve(
        [
            _ev("next dependency", "type=fullstack-or-frontend, framework=nextjs", DEP),
            _ev("vitest dependency", "testing=vitest", DEP),
            _ev("@playwright/test dependency", "testing=vitest-playwright", DEP),
        ]
    )
    assert result.answers["includeTesting"] == "vitest-playwright"
    assert result.warnings == ()


def test_unrelated_conflicts_survive_testing_resolution() -> None:
    result = _resolve(
        [
            _ev("zustand dependency", "stateManagement=zustand", DEP),
            _ev("jotai dependency", "stateManagement=jotai", DEP),
            _ev("jest dependency", "testing=jest", DEP),
            _ev("cypress dependency", "testing=jest-cypress", DEP),
        ]
    )
    assert len(result.warnings) == 1
    assert '"stateManagement"' in result.warnings[0]


def test_conflict_whose_value_mentions_testing_survives_resolution() -> None:
    result = _resolve(
        [
            _ev("env a", "stage=testing", CFG),
            _ev("env b", "stage=production", CFG),
            _ev("jest dependency", "testing=jest", DEP),
            _ev("cypress dependency", "testing=jest-cypress", DEP),
        ]
    )
    assert result.answers["testing"] == "jest-cypress"
    assert len(result.warnings) == 1
    assert result.warnings[0].startswith('Conflict on "stage"')
    assert 'keeping "testing"' in result.warnings[0]


def test_result_is_read_only_and_carries_evidence() -> None:
    evidence = [_ev("zod dependency", "validation=zod", DEP)]
    result = _resolve(evidence)
    assert result.evidence == tuple(evidence)
    with pytest.raises(TypeError):
        result.answers["validation"] = "joi"  # type: ignore[index]


def test_resolution_is_deterministic() -> None:
    evidence = [
        _ev("next dependency", "type=fullstack-or-frontend, framework=nextjs", DEP),
        _ev("typeorm dependency", "orm=typeorm", DEP),
        _ev("mysql2 dependency", "database-driver=mysql", DEP),
    ]
    assert _resolve(evidence).to_dict() == _resolve(evidence).to_dict()
