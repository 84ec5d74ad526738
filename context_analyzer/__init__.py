"""
context-analyzer — how expensive is a codebase to load into an AI's context?

Builds a dependency graph from JS/TS sources and scores every file for
import depth, context budget, circular dependencies, cohesion and
fragmentation.
"""
from .analyze import analyze_context
from .analytics.context import analyze_records
from .analytics.summary import generate_summary
from .config import AnalyzerConfig, ConfigurationError, load_config
from .sources.read import AnalysisCancelled

__all__ = [
    "AnalysisCancelled",
    "AnalyzerConfig",
    "ConfigurationError",
    "analyze_context",
    "analyze_records",
    "generate_summary",
    "load_config",
]
