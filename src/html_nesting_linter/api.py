"""Linting entry points.

Document and file level wrappers that apply configuration around `analyze()`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from .config import LinterConfig
from .diagnostics import Diagnostic
from .diagnostics import to_diagnostics
from .languages import language_for_path
from .validation.document import analyze_for_language

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    path: Path
    language_id: str | None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    skipped: bool = False


def lint_document(
    text: str,
    language_id: str | None,
    config: LinterConfig | None = None,
) -> list[Diagnostic]:
    """Diagnostics for one document, or none when config excludes it."""
    config = config or LinterConfig()
    if not config.handles(language_id):
        return []
    violations = analyze_for_language(text, language_id)
    return to_diagnostics(text, violations, config.severity)


def lint_path(
    path: Path,
    config: LinterConfig | None = None,
    language_id: str | None = None,
) -> FileResult:
    config = config or LinterConfig()
    language_id = language_id or language_for_path(path, config.extra_suffixes)
    if not config.handles(language_id):
        logger.debug("Skipping %s (language %s)", path, language_id)
        return FileResult(path=path, language_id=language_id, skipped=True)
    text = path.read_text(encoding="utf-8")
    return FileResult(
        path=path,
        language_id=language_id,
        diagnostics=lint_document(text, language_id, config),
    )


def iter_source_files(
    paths: Iterable[Path],
    config: LinterConfig | None = None,
) -> Iterator[Path]:
    """
    Expand directories into the supported files beneath them.

    Explicitly named files are yielded as-is; directory contents are
    filtered by suffix and yielded in sorted order.
    """
    config = config or LinterConfig()
    for path in paths:
        if not path.is_dir():
            yield path
            continue
        for child in sorted(path.rglob("*")):
            if not child.is_file():
                continue
            if language_for_path(child, config.extra_suffixes) is None:
                continue
            yield child
