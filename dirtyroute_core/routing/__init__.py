"""Routing module - Pattern tokens, controllers and dispatch."""

from dirtyroute_core.routing.tokens import (
    INDEX,
    PatternToken,
    Literal,
    IntArg,
    StringArg,
    AnyArg,
    IndexMarker,
    parse_token,
    parse_pattern,
)
from dirtyroute_core.routing.action import Action, Controller
from dirtyroute_core.routing.params import Params, parse_path
from dirtyroute_core.routing.registry import Registry
from dirtyroute_core.routing.router import Router

__all__ = [
    "INDEX",
    "PatternToken",
    "Literal",
    "IntArg",
    "StringArg",
    "AnyArg",
    "IndexMarker",
    "parse_token",
    "parse_pattern",
    "Action",
    "Controller",
    "Params",
    "parse_path",
    "Registry",
    "Router",
]
