"""
Context analysis runner and CLI.

Scans a directory, reads the matching sources, and scores every file for
how much context an AI assistant needs to understand it.

Usage:
    context-analyzer                            # current directory
    context-analyzer src/ --max-depth 4         # custom threshold
    context-analyzer --config analyzer.json     # JSON config (camelCase ok)
    context-analyzer --focus depth --out report.json

Output: a summary on stdout; --out also writes {summary, results} as JSON.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
import threading
import time
from concurrent.futures import Executor
from pathlib import Path

from pydantic import ValidationError

from .analytics.context import analyze_records
from .analytics.summary import generate_summary
from .config import AnalyzerConfig, ConfigurationError, compile_domain_patterns, load_config
from .sources.read import DEFAULT_WORKERS, read_sources
from .sources.scan import scan_files

logger = logging.getLogger(__name__)


def analyze_context(
    root: Path,
    config: AnalyzerConfig | None = None,
    executor: Executor | None = None,
    cancel: threading.Event | None = None,
    max_workers: int = DEFAULT_WORKERS,
) -> list[dict]:
    """
    Scan, read and analyze everything under root.

    Patterns are validated before the filesystem is touched. Reading is the
    only cancellable phase; once records are in hand the analysis runs to
    completion.
    """
    config = config or AnalyzerConfig()
    compile_domain_patterns(config)

    t0 = time.time()
    paths = scan_files(root, config.include, config.exclude, config.include_node_modules)
    logger.info("Scanned %d files in %.2fs", len(paths), time.time() - t0)

    t0 = time.time()
    records = read_sources(root, paths, executor=executor, cancel=cancel, max_workers=max_workers)
    logger.info("Read %d files in %.2fs", len(records), time.time() - t0)

    t0 = time.time()
    results = analyze_records(records, config)
    logger.info("Analyzed %d files in %.2fs", len(results), time.time() - t0)
    return results


# ── CLI ───────────────────────────────────────────────────────────────────────

def _build_config(args: argparse.Namespace) -> AnalyzerConfig:
    data: dict = {}
    if args.config:
        data = json.loads(Path(args.config).read_text())
    return load_config(
        data,
        max_depth=args.max_depth,
        max_context_budget=args.max_context_budget,
        min_cohesion=args.min_cohesion,
        max_fragmentation=args.max_fragmentation,
        focus=args.focus,
        include_node_modules=True if args.include_node_modules else None,
        include=args.include,
        exclude=args.exclude,
    )


def print_summary(summary: dict) -> None:
    print(f"\nFiles analyzed:        {summary['total_files']}")
    print(f"Total tokens:          {summary['total_tokens']:,}")
    print(f"Avg context budget:    {summary['avg_context_budget']:,.0f}")
    print(f"Max context budget:    {summary['max_context_budget']:,}")
    print(f"Avg / max import depth: {summary['avg_import_depth']:.1f} / {summary['max_import_depth']}")
    print(f"Avg cohesion:          {summary['avg_cohesion']:.2f}")
    print(f"Avg fragmentation:     {summary['avg_fragmentation']:.2f}")
    print(
        f"Issues:                {summary['critical_issues']} critical, "
        f"{summary['major_issues']} major, {summary['minor_issues']} minor"
    )
    print(f"Potential savings:     {summary['total_potential_savings']:,} tokens")

    if summary["top_expensive_files"]:
        print("\nMost expensive files:")
        for f in summary["top_expensive_files"][:5]:
            print(f"  [{f['severity']:<8}] {f['context_budget']:>8,}  {f['file']}")

    if summary["fragmented_modules"]:
        print("\nFragmented modules:")
        for m in summary["fragmented_modules"][:5]:
            print(f"  {m['domain']}: {len(m['files'])} files, fragmentation {m['fragmentation_score']:.2f}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Estimate AI context cost of a codebase.")
    parser.add_argument("path", nargs="?", default=".", help="Directory to analyze")
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--max-depth", type=int)
    parser.add_argument("--max-context-budget", type=int)
    parser.add_argument("--min-cohesion", type=float)
    parser.add_argument("--max-fragmentation", type=float)
    parser.add_argument("--focus", choices=["all", "depth", "cohesion", "fragmentation"])
    parser.add_argument("--include-node-modules", action="store_true")
    parser.add_argument("--include", nargs="*", help="Include globs")
    parser.add_argument("--exclude", nargs="*", help="Exclude globs")
    parser.add_argument("--workers", type=int, default=DEFAULT_WORKERS,
                        help="Concurrent file reads")
    parser.add_argument("--out", help="Write {summary, results} JSON here")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    root = Path(args.path).resolve()
    if not root.is_dir():
        print(f"Path not found: {root}", file=sys.stderr)
        return 2

    try:
        config = _build_config(args)
        print(f"Analyzing {root}...", flush=True)
        results = analyze_context(root, config, max_workers=args.workers)
    except (ConfigurationError, ValidationError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    summary = generate_summary(results)
    print_summary(summary)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w") as f:
            json.dump({"summary": summary, "results": results}, f, indent=2)
        print(f"\nReport → {out_path}", flush=True)

    return 0


if __name__ == "__main__":
    sys.exit(main())
