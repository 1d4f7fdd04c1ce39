"""Lexical layer: markup regions and tag tokens."""

from __future__ import annotations
