"""Registry - Controllers looked up by name.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from dirtyroute_core.errors import ControllerNotFound, DuplicateController
from dirtyroute_core.routing.action import Controller

logger = logging.getLogger(__name__)


class Registry:
    """Registered controllers.

    Writes are serialized by a lock and published by swapping in new
    immutable snapshots, so lookups during dispatch never lock.

    When two controllers share a name the first registered one wins;
    with ``unique=True`` the second registration raises instead.
    """

    def __init__(self, unique: bool = False):
        self.unique = unique
        self._controllers: Tuple[Controller, ...] = ()
        self._by_name: Mapping[str, Controller] = MappingProxyType({})
        self._lock = threading.RLock()

    def register(self, controller: Controller) -> Controller:
        """Register a controller."""
        with self._lock:
            if controller.name in self._by_name:
                if self.unique:
                    raise DuplicateController(controller.name)
                logger.warning(
                    f"Controller {controller.name!r} already registered; "
                    "the earlier registration shadows this one"
                )
            else:
                by_name: Dict[str, Controller] = dict(self._by_name)
                by_name[controller.name] = controller
                self._by_name = MappingProxyType(by_name)

            self._controllers = self._controllers + (controller,)

        logger.info(f"Registered controller {controller.name!r}")
        return controller

    def get(self, name: str) -> Controller:
        """Get controller by exact name.

        Raises:
            ControllerNotFound: no controller has that name
        """
        controller = self._by_name.get(name)
        if controller is None:
            raise ControllerNotFound()
        return controller

    @property
    def controllers(self) -> List[Controller]:
        """All registered controllers in registration order."""
        return list(self._controllers)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._controllers)


__all__ = [
    "Registry",
]
