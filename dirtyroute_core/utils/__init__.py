"""Utils module - Configuration."""

from dirtyroute_core.utils.config import (
    Options,
    load_options,
)

__all__ = [
    "Options",
    "load_options",
]
