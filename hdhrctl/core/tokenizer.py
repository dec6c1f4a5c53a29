"""Whitespace-tolerant splitting shared by every response parser."""

from __future__ import annotations


def tokenize(separator: str, text: str) -> list[str]:
    """Split ``text`` on ``separator``, strip each piece, and drop empty pieces."""
    return [piece.strip() for piece in text.split(separator) if piece.strip()]
