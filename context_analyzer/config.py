"""
Analyzer configuration.

One pydantic model carries every recognised option. Field names are
snake_case; camelCase aliases (maxDepth, domainKeywords, ...) are accepted so
JSON configs and API bodies can use either spelling.
"""
from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_INCLUDE = ["*.ts", "*.tsx", "*.js", "*.jsx", "*.mjs", "*.cjs"]

DEFAULT_EXCLUDE = [
    ".git",
    "dist",
    "build",
    "coverage",
    ".next",
    "*.min.js",
]

Focus = Literal["all", "depth", "cohesion", "fragmentation"]


class ConfigurationError(ValueError):
    """Raised before any file is processed when the config cannot be used."""


class AnalyzerConfig(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    # Domain inference
    domain_keywords:  list[str]      = Field(default_factory=list)
    path_domain_map:  dict[str, str] = Field(default_factory=dict)
    domain_patterns:  list[str]      = Field(default_factory=list)

    # Thresholds
    max_depth:          int   = Field(5, ge=0)
    max_context_budget: int   = Field(10000, ge=0)
    min_cohesion:       float = Field(0.6, ge=0, le=1)
    max_fragmentation:  float = Field(0.5, ge=0, le=1)

    focus: Focus = "all"

    # Scanner
    include_node_modules: bool      = False
    include:              list[str] = Field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude:              list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE))


def compile_domain_patterns(config: AnalyzerConfig) -> list[re.Pattern]:
    """
    Compile every domain pattern once, in order.

    Raises ConfigurationError naming the first invalid pattern.
    """
    compiled = []
    for pattern in config.domain_patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise ConfigurationError(
                f"Invalid domain pattern {pattern!r}: {exc}"
            ) from exc
    return compiled


def load_config(data: dict | None = None, **overrides) -> AnalyzerConfig:
    """Build a config from a (possibly camelCase) dict plus keyword overrides."""
    base = AnalyzerConfig.model_validate(data or {})
    if not overrides:
        return base
    merged = base.model_dump()
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return AnalyzerConfig.model_validate(merged)
