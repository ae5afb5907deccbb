"""Static lookup tables mapping project signals to implied answers."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

# dependency -> (type hint, answer field, answer value)
FRAMEWORK_DEPS: Dict[str, Tuple[str, Optional[str], Optional[str]]] = {
    "next": ("fullstack-or-frontend", "framework", "nextjs"),
    "nuxt": ("fullstack-or-frontend", "framework", "nuxt"),
    "@remix-run/react": ("fullstack-or-frontend", "framework", "remix"),
    "@sveltejs/kit": ("fullstack-or-frontend", "framework", "sveltekit"),
    "@nestjs/core": ("microservice", None, None),
    "express": ("api", "framework", "express"),
    "fastify": ("api", "framework", "fastify"),
    "hono": ("api", "framework", "hono"),
    "koa": ("api", "framework", "koa"),
}

# dependency -> (answer field, answer value)
TECH_DEPS: Dict[str, Tuple[str, str]] = {
    # UI libraries
    "@shadcn/ui": ("uiLibrary", "shadcn"),
    "@mui/material": ("uiLibrary", "mui"),
    "@chakra-ui/react": ("uiLibrary", "chakra"),
    "@headlessui/react": ("uiLibrary", "headless"),
    # State management
    "zustand": ("stateManagement", "zustand"),
    "@reduxjs/toolkit": ("stateManagement", "redux"),
    "jotai": ("stateManagement", "jotai"),
    "pinia": ("stateManagement", "pinia"),
    # Forms
    "react-hook-form": ("forms", "react-hook-form"),
    "@tanstack/react-form": ("forms", "tanstack-form"),
    "formik": ("forms", "formik"),
    # Data fetching
    "@tanstack/react-query": ("dataFetching", "tanstack-query"),
    "swr": ("dataFetching", "swr"),
    # Styling
    "tailwindcss": ("styling", "tailwind"),
    "styled-components": ("styling", "styled-components"),
    # ORM
    "prisma": ("orm", "prisma"),
    "@prisma/client": ("orm", "prisma"),
    "drizzle-orm": ("orm", "drizzle"),
    "mongoose": ("orm", "mongoose"),
    "typeorm": ("orm", "typeorm"),
    # Auth
    "next-auth": ("auth", "authjs"),
    "@clerk/nextjs": ("auth", "clerk"),
    "lucia": ("auth", "lucia"),
    "jsonwebtoken": ("auth", "jwt"),
    "passport": ("auth", "oauth"),
    # Validation
    "zod": ("validation", "zod"),
    "joi": ("validation", "joi"),
    "yup": ("validation", "yup"),
    # Testing
    "vitest": ("testing", "vitest"),
    "jest": ("testing", "jest"),
    "@playwright/test": ("testing", "vitest-playwright"),
    "cypress": ("testing", "jest-cypress"),
    # Misc
    "@storybook/react": ("includeStorybook", "true"),
    "typescript": ("language", "typescript"),
}

# database driver dependency -> database family
DB_DRIVER_DEPS: Dict[str, str] = {
    "pg": "postgres",
    "mssql": "sqlserver",
    "mysql2": "mysql",
    "mongodb": "mongodb",
    "better-sqlite3": "sqlite",
}

# Python distributions (normalised names), same shapes as the Node tables.
PYTHON_FRAMEWORK_DEPS: Dict[str, Tuple[str, Optional[str], Optional[str]]] = {
    "fastapi": ("api", "framework", "fastapi"),
    "flask": ("api", "framework", "flask"),
    "django": ("fullstack-or-frontend", "framework", "django"),
}

PYTHON_TECH_DEPS: Dict[str, Tuple[str, str]] = {
    "sqlalchemy": ("orm", "sqlalchemy"),
    "sqlmodel": ("orm", "sqlmodel"),
    "django": ("orm", "django"),
    "pydantic": ("validation", "pydantic"),
    "pytest": ("testing", "pytest"),
}

PYTHON_DB_DRIVER_DEPS: Dict[str, str] = {
    "psycopg": "postgres",
    "psycopg2": "postgres",
    "psycopg2-binary": "postgres",
    "asyncpg": "postgres",
    "pymysql": "mysql",
    "mysqlclient": "mysql",
    "pymongo": "mongodb",
    "motor": "mongodb",
    "pyodbc": "sqlserver",
}

# (candidate files, implied assertions); only the first existing file per group counts.
CONFIG_FILE_CHECKS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("next.config.js", "next.config.mjs", "next.config.ts"), "framework=nextjs"),
    (("nuxt.config.js", "nuxt.config.ts"), "framework=nuxt"),
    (("svelte.config.js", "svelte.config.ts"), "framework=sveltekit"),
    (("nest-cli.json",), "type=microservice"),
    (("Dockerfile",), "containerization=docker, includeDocker=true"),
    (
        ("docker-compose.yml", "docker-compose.yaml", "compose.yml", "compose.yaml"),
        "orchestration=docker-compose",
    ),
    ((".gitlab-ci.yml",), "cicd=gitlab-ci"),
    (("Jenkinsfile",), "cicd=jenkins"),
    (("tsconfig.json",), "language=typescript"),
)

# (label, candidate paths, implied assertions) checked after the file groups.
CONFIG_PATH_CHECKS: Tuple[Tuple[str, Tuple[str, ...], str], ...] = (
    (".github/workflows/", (".github/workflows",), "cicd=github-actions"),
    ("prisma/schema.prisma", ("prisma/schema.prisma",), "orm=prisma"),
    ("drizzle.config.*", ("drizzle.config.ts", "drizzle.config.js"), "orm=drizzle"),
)

FOLDER_CHECKS: Tuple[Tuple[str, str], ...] = (
    ("src/app", "app-router"),
    ("src/modules", "nest-modules"),
    ("src/components", "frontend-hint"),
    ("terraform", "iac=terraform, type-hint=devops"),
    ("k8s", "orchestration=kubernetes"),
    ("kubernetes", "orchestration=kubernetes"),
    ("infrastructure", "type-hint=devops"),
)

CLEAN_ARCHITECTURE_DIRS: Tuple[str, ...] = ("src/domain", "src/application", "src/infrastructure")

# (unit runner source, e2e tool source, combined testing value)
TESTING_COMBINATIONS: Tuple[Tuple[str, str, str], ...] = (
    ("vitest dependency", "@playwright/test dependency", "vitest-playwright"),
    ("jest dependency", "cypress dependency", "jest-cypress"),
)


__all__ = [
    "CLEAN_ARCHITECTURE_DIRS",
    "CONFIG_FILE_CHECKS",
    "CONFIG_PATH_CHECKS",
    "DB_DRIVER_DEPS",
    "FOLDER_CHECKS",
    "FRAMEWORK_DEPS",
    "PYTHON_DB_DRIVER_DEPS",
    "PYTHON_FRAMEWORK_DEPS",
    "PYTHON_TECH_DEPS",
    "TECH_DEPS",
    "TESTING_COMBINATIONS",
]
