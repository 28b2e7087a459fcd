"""Path Parser - Split request paths into controller and segments.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from dirtyroute_core.routing.tokens import INDEX


@dataclass
class Params:
    """Request-derived routing parameters."""

    controller: str = ""
    segments: List[str] = field(default_factory=list)


def parse_path(path: str) -> Params:
    """Parse a URL path.

    ``/users/42/edit`` -> ``Params("users", ["42", "edit"])``.
    Empty segments become the index sentinel, and a path with no
    segments after the controller gets a single one, so ``segments``
    is never empty.
    """
    params = Params()
    parts = path.split("/")

    # parts[0] is whatever precedes the leading slash
    for i, part in enumerate(parts[1:], 1):
        if i == 1:
            params.controller = part or INDEX
        else:
            params.segments.append(part or INDEX)

    if not params.segments:
        params.segments.append(INDEX)

    return params


__all__ = [
    "Params",
    "parse_path",
]
