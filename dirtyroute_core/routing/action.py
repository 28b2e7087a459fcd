"""Actions and Controllers - Routable endpoints grouped by name.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from dirtyroute_core.errors import NoPatternMatch
from dirtyroute_core.routing.tokens import PatternToken, TokenSource, parse_pattern

if TYPE_CHECKING:
    from dirtyroute_core.gateway.request import Request, Response

logger = logging.getLogger(__name__)

ActionHandler = Callable[["Response", "Request", List[str]], Any]


@dataclass
class Action:
    """Action definition.

    ``pattern`` may be given as source strings (``["{i}", "edit"]``), a
    ``/``-joined string (``"{i}/edit"``) or prebuilt tokens. It is parsed
    into tokens once, here, and never re-parsed per request.
    """

    pattern: Union[str, Sequence[TokenSource]]
    handler: ActionHandler
    method: str = "GET"
    name: str = ""
    private: bool = False

    tokens: Tuple[PatternToken, ...] = field(default=(), init=False, repr=False)

    def __post_init__(self):
        """Parse and validate the pattern."""
        if not callable(self.handler):
            raise TypeError(f"Action handler must be callable, got {self.handler!r}")
        if not self.method:
            raise ValueError("Action method must not be empty")
        self.method = self.method.upper()
        self.tokens = parse_pattern(self.pattern)
        if not self.name:
            self.name = getattr(self.handler, "__name__", "") or self.source

    @property
    def source(self) -> str:
        """Pattern rendered back to its source text."""
        return "/".join(str(t) for t in self.tokens)

    def matches(self, segments: Sequence[str], method: str) -> bool:
        """Check if the action matches path segments and method.

        All-or-nothing: every token must match its positional segment.
        """
        if len(self.tokens) != len(segments) or self.method != method:
            return False
        return all(token.matches(seg) for token, seg in zip(self.tokens, segments))

    def check(self, segments: Sequence[str], method: str) -> None:
        """Like :meth:`matches` but raises :class:`NoPatternMatch`."""
        if not self.matches(segments, method):
            raise NoPatternMatch()


class Controller:
    """Named, ordered collection of actions.

    Usage:
        users = Controller("users")

        @users.get("{/}")
        def index(response, request, segments):
            response.write("all users")

        @users.get("{i}")
        def show(response, request, segments):
            response.write(f"user {segments[0]}")
    """

    def __init__(self, name: str, actions: Optional[Iterable[Action]] = None):
        if not name:
            raise ValueError("Controller name must not be empty")
        self.name = name
        self._actions: Tuple[Action, ...] = ()
        self._lock = threading.RLock()
        for action in actions or ():
            self.register_action(action)

    @property
    def actions(self) -> Tuple[Action, ...]:
        """Actions in registration order."""
        return self._actions

    def register_action(self, action: Action) -> "Controller":
        """Append an action; registration order is match order."""
        with self._lock:
            self._actions = self._actions + (action,)
        logger.debug(f"Registered action {self.name}.{action.name}: {action.method} {action.source}")
        return self

    def action(
        self,
        pattern: Union[str, Sequence[TokenSource]],
        method: str = "GET",
        name: str = "",
        private: bool = False,
    ) -> Callable[[ActionHandler], ActionHandler]:
        """Decorator registering a handler as an action."""

        def decorator(handler: ActionHandler) -> ActionHandler:
            self.register_action(
                Action(
                    pattern=pattern,
                    handler=handler,
                    method=method,
                    name=name,
                    private=private,
                )
            )
            return handler

        return decorator

    def get(self, pattern, **kwargs) -> Callable[[ActionHandler], ActionHandler]:
        """Add GET action."""
        return self.action(pattern, method="GET", **kwargs)

    def post(self, pattern, **kwargs) -> Callable[[ActionHandler], ActionHandler]:
        """Add POST action."""
        return self.action(pattern, method="POST", **kwargs)

    def put(self, pattern, **kwargs) -> Callable[[ActionHandler], ActionHandler]:
        """Add PUT action."""
        return self.action(pattern, method="PUT", **kwargs)

    def delete(self, pattern, **kwargs) -> Callable[[ActionHandler], ActionHandler]:
        """Add DELETE action."""
        return self.action(pattern, method="DELETE", **kwargs)

    def patch(self, pattern, **kwargs) -> Callable[[ActionHandler], ActionHandler]:
        """Add PATCH action."""
        return self.action(pattern, method="PATCH", **kwargs)

    def __len__(self) -> int:
        return len(self._actions)

    def __repr__(self) -> str:
        return f"Controller({self.name!r}, actions={len(self._actions)})"


__all__ = [
    "Action",
    "ActionHandler",
    "Controller",
]
