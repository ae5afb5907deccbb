"""Minimal skill with only SKILL.md."""

from __future__ import annotations

from ..models import TemplateDefinition
from ._common import ASSETS, EXAMPLE_SCRIPT, FRONTMATTER

SKILL_MD = (
    FRONTMATTER
    + """
## Overview

{{description}}

## Usage

[Add usage instructions here]

---

**Generated with:** skillgen
"""
)

TEMPLATE = TemplateDefinition(
    id="basic",
    name="Basic",
    description="Minimal skill with only SKILL.md",
    content={
        "SKILL.md": SKILL_MD,
        "scripts/": {"example.ts": EXAMPLE_SCRIPT},
        "assets/": ASSETS,
    },
)
