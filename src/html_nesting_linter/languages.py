"""
Editor language ids and file suffixes, mapped onto dialects.
"""

from __future__ import annotations

from pathlib import Path

from .types import Dialect

LANGUAGE_DIALECTS: dict[str, Dialect] = {
    "html": Dialect.PLAIN,
    "html-angular": Dialect.PLAIN,
    "javascriptreact": Dialect.COMPONENT,
    "typescriptreact": Dialect.COMPONENT,
    "vue": Dialect.TEMPLATE_WRAPPED,
    "svelte": Dialect.TEMPLATE_WRAPPED,
}

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(LANGUAGE_DIALECTS)

SUFFIX_LANGUAGES: dict[str, str] = {
    ".html": "html",
    ".htm": "html",
    ".jsx": "javascriptreact",
    ".tsx": "typescriptreact",
    ".vue": "vue",
    ".svelte": "svelte",
}


def dialect_for_language(language_id: str | None) -> Dialect:
    if not language_id:
        return Dialect.UNKNOWN
    return LANGUAGE_DIALECTS.get(language_id.lower(), Dialect.UNKNOWN)


def language_for_path(
    path: Path | str,
    extra_suffixes: dict[str, str] | None = None,
) -> str | None:
    """
    Guess the editor language id of a file from its suffix.

    `extra_suffixes` entries take precedence over the built-in table.
    """
    suffix = Path(path).suffix.lower()
    if extra_suffixes:
        overrides = {k.lower(): v for k, v in extra_suffixes.items()}
        if suffix in overrides:
            return overrides[suffix]
    return SUFFIX_LANGUAGES.get(suffix)
