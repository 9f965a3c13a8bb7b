"""
Configuration management for the graph-augment hook.

Loads settings from .claude/graph-augment/config.json with sensible defaults,
then applies GRAPH_AUGMENT_* environment overrides.
"""

import json
import logging
import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .models import MIN_TOKEN_LENGTH

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}


def _as_bool(value, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _as_positive_int(value, default: int) -> int:
    # bool is an int subclass; "true" is not a depth
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return default


def _as_command(value) -> Optional[List[str]]:
    """Accept either an argv list or a shell-style string."""
    if isinstance(value, str) and value.strip():
        return shlex.split(value)
    if isinstance(value, list) and value and all(isinstance(part, str) for part in value):
        return list(value)
    return None


@dataclass
class Config:
    """Settings for one project's augmentation hook."""

    enabled: bool = True
    marker_name: str = ".gitnexus"  # Written by the indexer at the repo root
    max_depth: int = 5  # Ancestor directories to probe, start directory included
    timeout_ms: int = 8000
    min_token_length: int = MIN_TOKEN_LENGTH
    command: Optional[List[str]] = None  # None = auto-detect collaborator

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> "Config":
        """
        Load configuration from config.json.

        Falls back to defaults if the file doesn't exist or can't be parsed.
        """
        if project_root is None:
            project_root = Path.cwd()

        config_path = cls.config_path(project_root)
        config = cls()

        try:
            if config_path.is_file():
                data = json.loads(config_path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    config = cls.from_dict(data)
                else:
                    logger.debug(f"Ignoring non-object config at {config_path}")
        except (OSError, ValueError) as e:
            logger.debug(f"Using default config, could not read {config_path}: {e}")

        config.apply_env()
        return config

    @classmethod
    def discover(cls, start: Path, max_depth: Optional[int] = None) -> "Config":
        """
        Load the nearest project config at or above start.

        Walks the same bounded ancestor chain as the index search, so a
        session opened in a subdirectory still sees the project settings.
        """
        if max_depth is None:
            max_depth = cls.max_depth

        start = Path(os.path.abspath(start))
        current = start

        for _ in range(max_depth):
            try:
                if cls.config_path(current).is_file():
                    return cls.load(current)
            except OSError as e:
                logger.debug(f"Cannot probe {current} for config: {e}")
            parent = current.parent
            if parent == current:
                break
            current = parent

        return cls.load(start)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        defaults = cls()
        marker_name = data.get("marker_name")
        return cls(
            enabled=_as_bool(data.get("enabled"), defaults.enabled),
            marker_name=marker_name if isinstance(marker_name, str) and marker_name else defaults.marker_name,
            max_depth=_as_positive_int(data.get("max_depth"), defaults.max_depth),
            timeout_ms=_as_positive_int(data.get("timeout_ms"), defaults.timeout_ms),
            min_token_length=_as_positive_int(data.get("min_token_length"), defaults.min_token_length),
            command=_as_command(data.get("command")),
        )

    def apply_env(self, environ: Optional[dict] = None) -> None:
        """Apply GRAPH_AUGMENT_* overrides in place."""
        env = os.environ if environ is None else environ

        if env.get("GRAPH_AUGMENT_DISABLED", "").strip().lower() in TRUTHY:
            self.enabled = False

        timeout = env.get("GRAPH_AUGMENT_TIMEOUT_MS", "").strip()
        if timeout:
            try:
                self.timeout_ms = _as_positive_int(int(timeout), self.timeout_ms)
            except ValueError:
                logger.debug(f"Ignoring GRAPH_AUGMENT_TIMEOUT_MS={timeout!r}")

        command = _as_command(env.get("GRAPH_AUGMENT_COMMAND", ""))
        if command:
            self.command = command

    @staticmethod
    def config_path(project_root: Path) -> Path:
        return project_root / ".claude" / "graph-augment" / "config.json"
