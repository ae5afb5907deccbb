"""Shared building blocks for the built-in template bodies."""

from __future__ import annotations

from typing import Any, Mapping

FRONTMATTER = """---
name: {{name}}
description: |
  {{description}}{{#if descriptionSuffix}} {{descriptionSuffix}}{{/if}}
---

# {{titleCase}}
"""

RESOURCES = """## Resources

{{#if includeReferences}}- See [references/](references/) for extended documentation
{{/if}}{{#if includeScripts}}- See [scripts/](scripts/) for utilities
{{/if}}{{#if includeAssets}}- See [assets/](assets/) for resources
{{/if}}"""

FOOTER = """
---

**See in:** `{{name}}/src/`
"""

EXAMPLE_SCRIPT = """#!/usr/bin/env tsx
/**
 * Example script for {{name}}
 */

function main() {
  console.log('Hello from {{name}}!');
}

main();
"""

ASSETS = {".gitkeep": ""}


def answer(answers: Mapping[str, Any], name: str, default: str) -> str:
    """Return a string answer, falling back to ``default`` for missing or empty values."""
    value = answers.get(name)
    if value is None or value == "":
        return default
    return str(value)


def as_list(value: Any) -> list[str]:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]
