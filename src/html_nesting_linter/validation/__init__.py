"""Nesting validation over tag token streams."""

from __future__ import annotations
