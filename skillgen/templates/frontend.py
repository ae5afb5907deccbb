"""Next.js frontend application."""

from __future__ import annotations

from typing import Any, Mapping

from ..models import Choice, Question, TemplateDefinition
from ._common import ASSETS, EXAMPLE_SCRIPT, FOOTER, FRONTMATTER, RESOURCES, answer

QUESTIONS = [
    Question(
        name="uiLibrary",
        message="UI component library?",
        type="select",
        choices=(
            Choice("shadcn/ui", "shadcn", "Tailwind-based components (recommended)"),
            Choice("Material UI (MUI)", "mui", "Full Material Design components"),
            Choice("Chakra UI", "chakra", "Modular and accessible components"),
            Choice("Headless UI", "headless", "Unstyled components, maximum flexibility"),
        ),
        default="shadcn",
    ),
    Question(
        name="stateManagement",
        message="Global state management?",
        type="select",
        choices=(
            Choice("Zustand", "zustand", "Simple, minimalist"),
            Choice("Redux Toolkit", "redux", "Robust, for complex apps"),
            Choice("Jotai", "jotai", "Atomic, similar to Recoil"),
            Choice("Context API", "context", "React built-in"),
        ),
        default="zustand",
    ),
    Question(
        name="forms",
        message="Forms library?",
        type="select",
        choices=(
            Choice("React Hook Form + Zod", "react-hook-form", "Performance + typed validation"),
            Choice("TanStack Form", "tanstack-form", "Headless, framework-agnostic"),
            Choice("Formik", "formik", "Popular, with built-in validation"),
        ),
        default="react-hook-form",
    ),
    Question(
        name="dataFetching",
        message="Data fetching?",
        type="select",
        choices=(
            Choice("TanStack Query (React Query)", "tanstack-query", "Standard for server state"),
            Choice("SWR", "swr", "Lightweight, by Vercel"),
            Choice("RTK Query", "rtk-query", "Integrated with Redux"),
        ),
        default="tanstack-query",
    ),
    Question(
        name="styling",
        message="Styling solution?",
        type="select",
        choices=(
            Choice("Tailwind CSS v4", "tailwind", "Utility-first (recommended)"),
            Choice("CSS Modules", "css-modules", "Scoped CSS"),
            Choice("Styled Components", "styled-components", "CSS-in-JS"),
        ),
        default="tailwind",
    ),
    Question(
        name="includeStorybook",
        message="Include Storybook?",
        type="confirm",
        default=False,
    ),
    Question(
        name="includeTesting",
        message="Include testing setup?",
        type="select",
        choices=(
            Choice("Vitest + React Testing Library", "vitest", "Fast, modern"),
            Choice("Jest + React Testing Library", "jest", "Industry standard"),
            Choice("Skip tests", "none", "Configure later"),
        ),
        default="vitest",
    ),
]

_UI_INSTALL = {
    "shadcn": "npx shadcn@latest init",
    "mui": "npm install @mui/material @emotion/react @emotion/styled",
    "chakra": "npm install @chakra-ui/react @emotion/react @emotion/styled framer-motion",
    "headless": "npm install @headlessui/react",
}
_STATE_INSTALL = {
    "zustand": "npm install zustand",
    "redux": "npm install @reduxjs/toolkit react-redux",
    "jotai": "npm install jotai",
}
_FORMS_INSTALL = {
    "react-hook-form": "npm install react-hook-form zod @hookform/resolvers",
    "tanstack-form": "npm install @tanstack/react-form",
    "formik": "npm install formik yup",
}
_FETCH_INSTALL = {
    "tanstack-query": "npm install @tanstack/react-query",
    "swr": "npm install swr",
}
_STYLING_INSTALL = {
    "tailwind": "npm install -D tailwindcss postcss autoprefixer",
    "styled-components": "npm install styled-components",
}


def stack_summary(answers: Mapping[str, Any]) -> str:
    return " + ".join(
        (
            answer(answers, "uiLibrary", "shadcn"),
            answer(answers, "stateManagement", "zustand"),
            answer(answers, "dataFetching", "tanstack-query"),
        )
    )


def install_command(answers: Mapping[str, Any]) -> str:
    commands = [
        _UI_INSTALL.get(answer(answers, "uiLibrary", "shadcn")),
        _STATE_INSTALL.get(answer(answers, "stateManagement", "zustand")),
        _FORMS_INSTALL.get(answer(answers, "forms", "react-hook-form")),
        _FETCH_INSTALL.get(answer(answers, "dataFetching", "tanstack-query")),
        _STYLING_INSTALL.get(answer(answers, "styling", "tailwind")),
    ]
    return "\n".join(command for command in commands if command)


SKILL_MD = (
    FRONTMATTER
    + """
{{description}}

## Tech Stack

| Category | Technology |
|----------|------------|
| Framework | Next.js 15 (App Router) |
| UI Library | {{uiLibrary}} |
| State | {{stateManagement}} |
| Forms | {{forms}} |
| Data Fetching | {{dataFetching}} |
| Styling | {{styling}} |
{{#if includeStorybook}}| Storybook | Component documentation |
{{/if}}{{#if includeTesting !== 'none'}}| Testing | {{includeTesting}} |
{{/if}}
## Installation

```bash
# Install dependencies
{{installCommand}}
```

## Structure

```
src/
  app/               # App Router (Next.js 15)
  components/        # React components
  hooks/             # Custom hooks
  lib/               # Utilities and configuration
  services/          # API clients
  stores/            # {{stateManagement}} stores
  types/             # TypeScript types
```

## Conventions

### Components

```typescript
'use client'  // Only if using state or effects

interface Props {
  // Define props explicitly
}

export function ComponentName({ ...props }: Props) {
  return (/* JSX */);
}
```

### Data Fetching

```typescript
// Server Component (default)
const data = await fetchData();

// Client Component
{{#if dataFetching === 'swr'}}const { data, isLoading } = useSWR('key', fetchData);
{{/if}}{{#if dataFetching !== 'swr'}}const { data, isLoading } = useQuery({
  queryKey: ['key'],
  queryFn: fetchData
});
{{/if}}```

"""
    + RESOURCES
    + FOOTER
)

COMPONENTS_MD = """# Components - {{uiLibrary}}

{{#if uiLibrary === 'shadcn'}}## Installation
```bash
npx shadcn@latest add button
npx shadcn@latest add input
npx shadcn@latest add dialog
```

## Usage
```tsx
import { Button } from "@/components/ui/button"

export function Example() {
  return <Button>Click me</Button>
}
```
{{/if}}{{#if uiLibrary === 'mui'}}## Installation
```bash
npm install @mui/material @emotion/react @emotion/styled
```

## Usage
```tsx
import Button from '@mui/material/Button';

export function Example() {
  return <Button variant="contained">Click me</Button>;
}
```
{{/if}}{{#if uiLibrary === 'chakra'}}## Installation
```bash
npm install @chakra-ui/react @emotion/react @emotion/styled framer-motion
```

## Usage
```tsx
import { Button } from '@chakra-ui/react';

export function Example() {
  return <Button colorScheme="blue">Click me</Button>;
}
```
{{/if}}{{#if uiLibrary === 'headless'}}## Installation
```bash
npm install @headlessui/react
```

## Usage
```tsx
import { Dialog } from '@headlessui/react';
```
{{/if}}"""

STYLING_MD = """# Styling - {{styling}}

{{#if styling === 'tailwind'}}Compose utility classes directly in JSX and extract repeated patterns
into components rather than `@apply` rules.
{{/if}}{{#if styling === 'css-modules'}}Co-locate `Component.module.css` next to each component and import
the generated class map.
{{/if}}{{#if styling === 'styled-components'}}Define styled primitives in `components/ui/` and keep theme tokens in
`lib/theme.ts`.
{{/if}}"""

TEMPLATE = TemplateDefinition(
    id="frontend",
    name="Frontend Next.js",
    description="Next.js application with configurable UI and state options",
    questions=QUESTIONS,
    variables={
        "stackSummary": stack_summary,
        "installCommand": install_command,
        "descriptionSuffix": lambda answers: (
            f"Stack: {stack_summary(answers)}. Use when developing frontend functionality."
        ),
    },
    content={
        "SKILL.md": SKILL_MD,
        "references/": {"COMPONENTS.md": COMPONENTS_MD, "STYLING.md": STYLING_MD},
        "scripts/": {"example.ts": EXAMPLE_SCRIPT},
        "assets/": ASSETS,
    },
)
