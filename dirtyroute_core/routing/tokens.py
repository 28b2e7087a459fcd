"""Pattern Tokens - Typed segments of an action pattern.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

# Segment produced by the path parser for an empty or missing segment.
INDEX = "{/}"

INT_ARG = "{i}"
STRING_ARG = "{s}"
ANY_ARG = "{i||s}"

_INT_RE = re.compile(r"[+-]?[0-9]+")


def is_int(segment: str) -> bool:
    """Check if segment is entirely a base-10 integer."""
    return _INT_RE.fullmatch(segment) is not None


class PatternToken(ABC):
    """Abstract pattern token.

    Token kinds:
    ┌──────────────┬──────────────┬─────────────────────────────┐
    │ Source text  │ Token        │ Matches                     │
    ├──────────────┼──────────────┼─────────────────────────────┤
    │ users        │ Literal      │ "users" exactly             │
    │ {i}          │ IntArg       │ "42", "-7"                  │
    │ {s}          │ StringArg    │ anything that is not {i}    │
    │ {i||s}       │ AnyArg       │ anything                    │
    │ {/}          │ IndexMarker  │ the index sentinel          │
    └──────────────┴──────────────┴─────────────────────────────┘
    """

    @abstractmethod
    def matches(self, segment: str) -> bool:
        """Check if segment matches this token."""
        pass


@dataclass(frozen=True)
class Literal(PatternToken):
    """Literal text, compared case-sensitively."""

    text: str

    def matches(self, segment: str) -> bool:
        return segment == self.text

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class IntArg(PatternToken):
    """Integer argument."""

    source: str = INT_ARG

    def matches(self, segment: str) -> bool:
        return is_int(segment)

    def __str__(self) -> str:
        return self.source


@dataclass(frozen=True)
class StringArg(PatternToken):
    """Non-integer argument."""

    source: str = STRING_ARG

    def matches(self, segment: str) -> bool:
        return not is_int(segment)

    def __str__(self) -> str:
        return self.source


@dataclass(frozen=True)
class AnyArg(PatternToken):
    """Integer-or-string argument."""

    source: str = ANY_ARG

    def matches(self, segment: str) -> bool:
        return True

    def __str__(self) -> str:
        return self.source


@dataclass(frozen=True)
class IndexMarker(PatternToken):
    """Controller root (no arguments supplied)."""

    def matches(self, segment: str) -> bool:
        return segment == INDEX

    def __str__(self) -> str:
        return INDEX


TokenSource = Union[str, PatternToken]


def parse_token(source: TokenSource) -> PatternToken:
    """Infer a token from its source text.

    ``{i||s}`` is checked before ``{i}`` and ``{s}`` so an element
    carrying it is never narrowed to the stricter kinds.
    """
    if isinstance(source, PatternToken):
        return source
    if not isinstance(source, str):
        raise TypeError(f"Pattern element must be str, got {type(source).__name__}")

    if ANY_ARG in source:
        return AnyArg(source)
    if INT_ARG in source:
        return IntArg(source)
    if STRING_ARG in source:
        return StringArg(source)
    if source in (INDEX, ""):
        return IndexMarker()
    return Literal(source)


def parse_pattern(pattern: Union[str, Iterable[TokenSource]]) -> Tuple[PatternToken, ...]:
    """Parse a whole action pattern.

    Accepts a sequence of elements or a ``/``-joined string. An empty
    string, ``"/"`` or ``"{/}"`` is the index pattern; inside a joined
    string an empty element (``a//b``) stands for the index marker.
    """
    if isinstance(pattern, str):
        stripped = pattern.strip("/")
        if stripped in ("", INDEX):
            elements = [INDEX]
        else:
            elements = stripped.split("/")
    else:
        elements = list(pattern)

    if not elements:
        raise ValueError("Action pattern must have at least one element")

    return tuple(parse_token(e) for e in elements)


__all__ = [
    "INDEX",
    "PatternToken",
    "Literal",
    "IntArg",
    "StringArg",
    "AnyArg",
    "IndexMarker",
    "is_int",
    "parse_token",
    "parse_pattern",
]
