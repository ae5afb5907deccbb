"""Framework-free utility library."""

from __future__ import annotations

from typing import Any, Mapping

from ..models import Choice, Question, TemplateDefinition
from ._common import ASSETS, EXAMPLE_SCRIPT, FOOTER, FRONTMATTER, RESOURCES

QUESTIONS = [
    Question(
        name="language",
        message="Primary language?",
        type="select",
        choices=(
            Choice("TypeScript", "typescript", "Typed JavaScript"),
            Choice("JavaScript", "javascript", "Vanilla JS"),
            Choice("Python", "python", "Python 3.x"),
            Choice("Go", "go", "Go (Golang)"),
            Choice("Rust", "rust", "Rust"),
        ),
        default="typescript",
    ),
    Question(
        name="testing",
        message="Testing framework?",
        type="select",
        choices=(
            Choice("Vitest", "vitest", "Fast, modern"),
            Choice("Jest", "jest", "Industry standard"),
            Choice("Mocha", "mocha", "Flexible"),
            Choice("Node Test Runner", "node", "Node.js built-in"),
            Choice("None", "none", "No tests"),
        ),
        default="vitest",
    ),
]

_LANGUAGE_LABELS = {
    "typescript": "TypeScript",
    "javascript": "JavaScript",
    "python": "Python",
    "go": "Go",
    "rust": "Rust",
}


def language_label(answers: Mapping[str, Any]) -> str:
    return _LANGUAGE_LABELS.get(str(answers.get("language")), "TypeScript")


SKILL_MD = (
    FRONTMATTER
    + """
{{description}}

**Language:** {{languageLabel}}

## Principles

- No framework dependencies; keep the public surface small.
- Every exported function is pure or documents its side effects.
- Breaking changes bump the major version.

## Structure

{{#if language === 'python'}}```
src/{{name}}/
  __init__.py        # Public API
  _internal/         # Private helpers
tests/
```
{{/if}}{{#if language === 'go'}}```
{{name}}.go          # Public API
internal/            # Private helpers
{{name}}_test.go
```
{{/if}}{{#if language === 'rust'}}```
src/
  lib.rs             # Public API
  internal/          # Private helpers
tests/
```
{{/if}}{{#if language === 'typescript'}}```
src/
  index.ts           # Public API
  internal/          # Private helpers
tests/
```
{{/if}}{{#if language === 'javascript'}}```
src/
  index.js           # Public API
  internal/          # Private helpers
tests/
```
{{/if}}
{{#if testing !== 'none'}}## Testing

Tests use **{{testing}}**. Cover every exported function, including error paths.

{{/if}}"""
    + RESOURCES
    + FOOTER
)

TEMPLATE = TemplateDefinition(
    id="library",
    name="Shared Library",
    description="Utility library without framework dependencies",
    questions=QUESTIONS,
    variables={
        "languageLabel": language_label,
        "descriptionSuffix": lambda answers: (
            f"{language_label(answers)} library. Use when extending or consuming the library."
        ),
    },
    content={
        "SKILL.md": SKILL_MD,
        "scripts/": {"example.ts": EXAMPLE_SCRIPT},
        "assets/": ASSETS,
    },
)
