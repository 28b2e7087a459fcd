"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

import yaml

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Options")

ENV_PREFIX = "DIRTYROUTE_"


@dataclass
class Options:
    """Router options."""

    # Content-type gate, compared case-insensitively
    content_types: List[str] = field(default_factory=lambda: ["text/plain", "application/json"])
    default_content_type: str = "Text/Plain"

    # Registry
    unique_controllers: bool = False

    # Bundled WSGI server
    host: str = "127.0.0.1"
    port: int = 8080

    # Logging
    log_level: str = "INFO"

    def accepts(self, content_type: str) -> bool:
        """Check if content type is in the allow-list."""
        wanted = content_type.lower()
        return any(wanted == allowed.lower() for allowed in self.content_types)

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create options from dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in (data or {}).items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load options from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load options from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_env(cls: Type[T], prefix: str = ENV_PREFIX) -> T:
        """Load options from environment variables.

        List fields take comma-separated values, e.g.
        ``DIRTYROUTE_CONTENT_TYPES=text/plain,application/json``.
        """
        list_fields = {"content_types"}
        data: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            config_key = key[len(prefix):].lower()

            if config_key in list_fields:
                data[config_key] = [v.strip() for v in value.split(",") if v.strip()]
            elif value.lower() in ("true", "false"):
                data[config_key] = value.lower() == "true"
            elif value.isdigit():
                data[config_key] = int(value)
            else:
                data[config_key] = value

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def merge(self, overrides: Dict[str, Any]) -> "Options":
        """Return a copy with ``overrides`` applied."""
        data = self.to_dict()
        data.update(overrides)
        return type(self).from_dict(data)


def _explicit_env(prefix: str) -> Dict[str, Any]:
    """Only the fields actually set in the environment."""
    names = {f.name for f in fields(Options)}
    present = {key[len(prefix):].lower() for key in os.environ if key.startswith(prefix)}
    env = Options.from_env(prefix).to_dict()
    return {k: v for k, v in env.items() if k in present & names}


def load_options(
    path: Optional[str] = None,
    env_prefix: str = ENV_PREFIX,
) -> Options:
    """Load options from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Options file (if provided)
    3. Defaults
    """
    options = Options()

    if path:
        path_obj = Path(path)
        if not path_obj.exists():
            logger.warning(f"Options file not found: {path}")
        elif path_obj.suffix == ".json":
            options = Options.from_json(path)
        elif path_obj.suffix in (".yaml", ".yml"):
            options = Options.from_yaml(path)
        else:
            logger.warning(f"Unknown options format: {path}")

    return options.merge(_explicit_env(env_prefix))


__all__ = [
    "Options",
    "load_options",
]
