"""Full-stack application with frontend, API routes and database."""

from __future__ import annotations

from typing import Any, Mapping

from ..models import Choice, Question, TemplateDefinition
from ._common import ASSETS, EXAMPLE_SCRIPT, FOOTER, FRONTMATTER, RESOURCES, answer

QUESTIONS = [
    Question(
        name="framework",
        message="Full-stack framework?",
        type="select",
        choices=(
            Choice("Next.js", "nextjs", "React meta-framework"),
            Choice("Nuxt", "nuxt", "Vue meta-framework"),
            Choice("Remix", "remix", "React with loaders/actions"),
            Choice("SvelteKit", "sveltekit", "Svelte meta-framework"),
        ),
        default="nextjs",
    ),
    Question(
        name="database",
        message="Database?",
        type="select",
        choices=(
            Choice("PostgreSQL", "postgres", "Relational, open source"),
            Choice("MongoDB", "mongodb", "NoSQL document store"),
            Choice("SQLite", "sqlite", "File-based, simple"),
        ),
        default="postgres",
    ),
    Question(
        name="orm",
        message="ORM?",
        type="select",
        choices=(
            Choice("Prisma", "prisma", "Type-safe, auto-generated client"),
            Choice("Drizzle", "drizzle", "Lightweight, SQL-like"),
            Choice("Mongoose", "mongoose", "MongoDB ODM"),
            Choice("TypeORM", "typeorm", "Decorator-based ORM"),
        ),
        default="prisma",
    ),
    Question(
        name="auth",
        message="Authentication?",
        type="select",
        choices=(
            Choice("NextAuth.js / Auth.js", "authjs", "Built-in auth for Next.js/SvelteKit"),
            Choice("Clerk", "clerk", "Drop-in auth UI and management"),
            Choice("Lucia", "lucia", "Session-based, framework-agnostic"),
            Choice("None", "none", "No authentication"),
        ),
        default="authjs",
    ),
    Question(
        name="styling",
        message="Styling?",
        type="select",
        choices=(
            Choice("Tailwind CSS", "tailwind", "Utility-first"),
            Choice("CSS Modules", "css-modules", "Scoped CSS"),
            Choice("Styled Components", "styled-components", "CSS-in-JS"),
        ),
        default="tailwind",
    ),
    Question(
        name="stateManagement",
        message="Client state management?",
        type="select",
        choices=(
            Choice("Zustand", "zustand", "Simple, minimalist (React)"),
            Choice("Pinia", "pinia", "Vue official store"),
            Choice("Jotai", "jotai", "Atomic state (React)"),
            Choice("None", "none", "Framework defaults only"),
        ),
        default="zustand",
    ),
    Question(
        name="testing",
        message="Testing?",
        type="select",
        choices=(
            Choice("Vitest + Playwright", "vitest-playwright", "Unit + E2E"),
            Choice("Jest + Cypress", "jest-cypress", "Unit + E2E (legacy standard)"),
            Choice("Vitest only", "vitest", "Unit tests only"),
            Choice("None", "none", "Configure later"),
        ),
        default="vitest-playwright",
    ),
]

_FRAMEWORK_INSTALL = {
    "nextjs": "npx create-next-app@latest",
    "nuxt": "npx nuxi@latest init",
    "remix": "npx create-remix@latest",
    "sveltekit": "npx sv create",
}
_ORM_INSTALL = {
    "prisma": "npm install prisma @prisma/client",
    "drizzle": "npm install drizzle-orm drizzle-kit",
    "mongoose": "npm install mongoose",
    "typeorm": "npm install typeorm reflect-metadata",
}
_AUTH_INSTALL = {
    "authjs": "npm install next-auth",
    "clerk": "npm install @clerk/nextjs",
    "lucia": "npm install lucia",
}
_STYLING_INSTALL = {
    "tailwind": "npm install -D tailwindcss postcss autoprefixer",
    "styled-components": "npm install styled-components",
}
_STATE_INSTALL = {
    "zustand": "npm install zustand",
    "pinia": "npm install pinia",
    "jotai": "npm install jotai",
}
_TESTING_INSTALL = {
    "vitest-playwright": "npm install -D vitest @playwright/test",
    "jest-cypress": "npm install -D jest cypress",
    "vitest": "npm install -D vitest",
}
_ORM_SETUP = {
    "prisma": "npx prisma init && npx prisma generate",
    "drizzle": "npx drizzle-kit generate && npx drizzle-kit push",
    "mongoose": "Define schemas in src/models/",
    "typeorm": "Configure data-source.ts with entity paths",
}


def install_command(answers: Mapping[str, Any]) -> str:
    commands = [
        _FRAMEWORK_INSTALL.get(answer(answers, "framework", "nextjs")),
        _ORM_INSTALL.get(answer(answers, "orm", "prisma")),
        _AUTH_INSTALL.get(answer(answers, "auth", "authjs")),
        _STYLING_INSTALL.get(answer(answers, "styling", "tailwind")),
        _STATE_INSTALL.get(answer(answers, "stateManagement", "zustand")),
        _TESTING_INSTALL.get(answer(answers, "testing", "vitest-playwright")),
    ]
    return "\n".join(command for command in commands if command)


def stack_summary(answers: Mapping[str, Any]) -> str:
    return " + ".join(
        (
            answer(answers, "framework", "nextjs"),
            answer(answers, "orm", "prisma"),
            answer(answers, "auth", "authjs"),
        )
    )


def orm_setup(answers: Mapping[str, Any]) -> str:
    return _ORM_SETUP.get(answer(answers, "orm", "prisma"), "")


SKILL_MD = (
    FRONTMATTER
    + """
{{description}}

**Stack:** {{stackSummary}}

## Tech Stack

| Category | Technology |
|----------|------------|
| Framework | {{framework}} |
| Database | {{database}} |
| ORM | {{orm}} |
| Auth | {{auth}} |
| Styling | {{styling}} |
{{#if stateManagement !== 'none'}}| State | {{stateManagement}} |
{{/if}}{{#if testing !== 'none'}}| Testing | {{testing}} |
{{/if}}
## Installation

```bash
{{installCommand}}
```

## Database Setup

```bash
{{ormSetup}}
```

## Structure

```
src/
{{#if framework === 'nextjs'}}  app/               # Pages, layouts and route handlers
{{/if}}{{#if framework === 'nuxt'}}  pages/             # File-based routes
  server/api/        # API routes
{{/if}}{{#if framework === 'remix'}}  routes/            # Loaders, actions and views
{{/if}}{{#if framework === 'sveltekit'}}  routes/            # +page.svelte / +server.ts
{{/if}}  components/        # UI components
  lib/               # Shared utilities, db client
```

## Conventions

- Server code reads the database; client components never import the db client.
- Validate mutations on the server before writing.
{{#if auth !== 'none'}}- Check the session in every protected route handler ({{auth}}).
{{/if}}
"""
    + RESOURCES
    + FOOTER
)

DATA_MD = """# Data Layer - {{orm}}

Database: **{{database}}**

```bash
{{ormSetup}}
```

{{#if orm === 'prisma'}}Edit `prisma/schema.prisma`, then run `npx prisma migrate dev`.
{{/if}}{{#if orm === 'drizzle'}}Define tables in `src/db/schema.ts`, then generate migrations with drizzle-kit.
{{/if}}{{#if orm === 'mongoose'}}Each model lives in `src/models/<name>.ts` and exports its schema.
{{/if}}{{#if orm === 'typeorm'}}Register entities in `data-source.ts` and run migrations through the CLI.
{{/if}}"""

TEMPLATE = TemplateDefinition(
    id="fullstack",
    name="Full-Stack App",
    description="Full-stack application with frontend, API routes, and database",
    questions=QUESTIONS,
    variables={
        "installCommand": install_command,
        "stackSummary": stack_summary,
        "ormSetup": orm_setup,
        "descriptionSuffix": lambda answers: (
            f"Stack: {stack_summary(answers)}. Use when developing full-stack features."
        ),
    },
    content={
        "SKILL.md": SKILL_MD,
        "references/": {"DATA.md": DATA_MD},
        "scripts/": {"example.ts": EXAMPLE_SCRIPT},
        "assets/": ASSETS,
    },
)
