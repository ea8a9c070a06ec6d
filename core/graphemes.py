"""Grapheme segmentation for per-character emphasis rendering.

A unit is a base character plus any trailing combining marks (voiced and
semi-voiced sound marks), variation selectors or emoji modifiers. Units
are never split when a span is wrapped character by character.
"""

from typing import Iterator

import grapheme


class GraphemeUnits:
    """Restartable view over the grapheme units of a string."""

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[str]:
        return iter_units(self.text)

    def __len__(self) -> int:
        return unit_count(self.text)

    def __repr__(self) -> str:
        return f"GraphemeUnits({self.text!r})"


def iter_units(text: str) -> Iterator[str]:
    """Yield the grapheme units of text in order."""
    if not text:
        return iter(())
    return grapheme.graphemes(text)


def split_units(text: str) -> list[str]:
    """Return the grapheme units of text as a list."""
    return list(iter_units(text))


def unit_count(text: str) -> int:
    if not text:
        return 0
    return grapheme.length(text)
