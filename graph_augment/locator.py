"""Find the graph index marker by walking up from a working directory."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class IndexLocator:
    """
    Bounded upward search for the index marker.

    The start directory is the first level probed, so with max_depth=5 a
    marker up to four parents above the start is found. The walk follows
    the logical path as given (symlinks are not resolved), matching the
    directory tree the session sees.
    """

    def __init__(self, marker_name: str = ".gitnexus", max_depth: int = 5):
        self.marker_name = marker_name
        self.max_depth = max_depth

    def find_root(self, start: Union[str, Path]) -> Optional[Path]:
        """Return the directory holding the marker, or None."""
        current = Path(os.path.abspath(start))

        for _ in range(self.max_depth):
            if self._has_marker(current):
                return current
            parent = current.parent
            if parent == current:
                break
            current = parent

        return None

    def locate(self, start: Union[str, Path]) -> bool:
        return self.find_root(start) is not None

    def _has_marker(self, directory: Path) -> bool:
        try:
            return (directory / self.marker_name).exists()
        except OSError as e:
            logger.debug(f"Cannot probe {directory}: {e}")
            return False
