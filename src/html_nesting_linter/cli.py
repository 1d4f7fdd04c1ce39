from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .api import FileResult
from .api import iter_source_files
from .api import lint_document
from .api import lint_path
from .catalog.index import default_rule_index
from .config import ConfigError
from .config import LinterConfig
from .config import load_config
from .diagnostics import Diagnostic
from .diagnostics import FileReport
from .diagnostics import JsonSerializer
from .diagnostics import Severity
from .languages import SUPPORTED_LANGUAGES
from .logging import LogConfig
from .logging import configure_logging
from .types import NestingRule

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="html-nesting-linter",
        description="Report invalid HTML element nesting in markup files.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Files or directories to lint. Use '-' to read from stdin.",
    )
    parser.add_argument(
        "--language",
        choices=SUPPORTED_LANGUAGES,
        help="Editor language id to use instead of guessing from the file suffix.",
    )
    parser.add_argument(
        "--severity",
        choices=[s.value for s in Severity],
        help="Severity to report violations with (overrides config).",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="pyproject.toml to read [tool.html-nesting-linter] from.",
    )
    parser.add_argument(
        "--disable",
        action="store_true",
        help="Treat the linter as disabled (reports nothing).",
    )
    parser.add_argument(
        "--explain",
        nargs=2,
        metavar=("PARENT", "CHILD"),
        help="Explain the rule for a parent/child pair and exit.",
    )
    parser.add_argument(
        "--list-rules",
        nargs="?",
        const="",
        metavar="PARENT",
        help="List known rules (optionally only for one parent) and exit.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def format_rule(rule: NestingRule) -> str:
    lines = [f"<{rule.child}> inside <{rule.parent}>: {rule.reason}"]
    for alt in rule.alternatives:
        lines.append(f"  - {alt}")
    for ref in rule.references:
        lines.append(f"  {ref.label}: {ref.url}")
    return "\n".join(lines)


def format_text(path: str, diagnostic: Diagnostic) -> str:
    start = diagnostic.range.start
    return (
        f"{path}:{start.line + 1}:{start.character + 1}: "
        f"{diagnostic.severity.value}: {diagnostic.message} [{diagnostic.code}]"
    )


def _resolve_config(args: argparse.Namespace) -> LinterConfig:
    config = load_config(args.config)
    updates: dict[str, object] = {}
    if args.severity:
        updates["severity"] = Severity(args.severity)
    if args.disable:
        updates["enable"] = False
    if args.language and args.language not in config.languages:
        updates["languages"] = [*config.languages, args.language]
    if updates:
        config = config.model_copy(update=updates)
    return config


def _explain(parent: str, child: str) -> int:
    rule = default_rule_index().lookup(parent.lower(), child.lower())
    if rule is None:
        print(f"No rule forbids <{child}> directly inside <{parent}>.")
        return EXIT_OK
    print(format_rule(rule))
    return EXIT_OK


def _list_rules(parent: str) -> int:
    index = default_rule_index()
    parents = [parent.lower()] if parent else index.parents
    for name in parents:
        for rule in index.rules_for_parent(name):
            marker = "*" if index.is_explicit(rule.parent, rule.child) else " "
            print(f"{marker} {rule.parent} > {rule.child}: {rule.reason}")
    return EXIT_OK


def _lint_stdin(config: LinterConfig, language_id: str | None) -> FileResult:
    text = sys.stdin.read()
    return FileResult(
        path=Path("-"),
        language_id=language_id,
        diagnostics=lint_document(text, language_id, config),
    )


def run(args: argparse.Namespace) -> int:
    if args.explain:
        return _explain(*args.explain)
    if args.list_rules is not None:
        return _list_rules(args.list_rules)

    config = _resolve_config(args)

    results: list[FileResult] = []
    for path in iter_source_files(args.paths, config):
        if str(path) == "-":
            results.append(_lint_stdin(config, args.language or "html"))
            continue
        try:
            results.append(lint_path(path, config, language_id=args.language))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)

    if args.format == "json":
        reports = [
            FileReport(path=str(r.path), language=r.language_id, diagnostics=r.diagnostics)
            for r in results
            if not r.skipped
        ]
        print(JsonSerializer[FileReport]().encode(reports).decode())
    else:
        for result in results:
            for diagnostic in result.diagnostics:
                print(format_text(str(result.path), diagnostic))

    has_errors = any(
        d.severity is Severity.ERROR for r in results for d in r.diagnostics
    )
    return EXIT_VIOLATIONS if has_errors else EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    configure_logging(LogConfig(log_level=level, console_level=level))

    if not args.paths and not args.explain and args.list_rules is None:
        parser.error("no paths given")

    try:
        return run(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
