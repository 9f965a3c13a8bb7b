"""
Subprocess bridge to the graph augmentation CLI.

The collaborator is run as `<command> augment <token>` in the project
directory. Its answer arrives on stderr: a native database module inside
the collaborator owns stdout, so nothing useful can be read there.
"""

import logging
import os
import shutil
import signal
import subprocess
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

AUGMENT_SUBCOMMAND = "augment"
COLLABORATOR_EXECUTABLE = "gitnexus"


def resolve_command(configured: Optional[List[str]] = None) -> List[str]:
    """
    Pick the argv prefix used to reach the collaborator.

    Order: explicit configuration, a gitnexus binary on PATH, then npx.
    """
    if configured:
        return list(configured)

    local = shutil.which(COLLABORATOR_EXECUTABLE)
    if local:
        return [local]

    return ["npx", "-y", COLLABORATOR_EXECUTABLE]


def kill_process_group(proc: subprocess.Popen) -> None:
    """Kill the child and everything it spawned (npx -> node)."""
    try:
        if hasattr(os, "killpg"):
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        logger.debug(f"Collaborator {proc.pid} already exited")


class AugmentCollaborator:
    """Ask the graph engine about a search token. One attempt, bounded by a timeout."""

    def __init__(self, command: Optional[List[str]] = None, timeout_ms: int = 8000):
        self.command = resolve_command(command)
        self.timeout_ms = timeout_ms

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    def augment(self, token: str, cwd: Union[str, Path]) -> Optional[str]:
        """
        Run the augment subcommand for one token.

        The child gets its own session so a timeout can take down the
        whole process group, not just the launcher.

        Args:
            token: Search token extracted from the tool call
            cwd: Project directory the collaborator runs in

        Returns:
            Trimmed stderr text, or None on non-zero exit, timeout,
            spawn failure or blank output
        """
        argv = self.command + [AUGMENT_SUBCOMMAND, token]

        try:
            proc = subprocess.Popen(
                argv,
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            logger.debug(f"Augment could not start {argv[0]!r}: {e}")
            return None

        with proc:
            try:
                _, stderr = proc.communicate(timeout=self.timeout_seconds)
            except subprocess.TimeoutExpired:
                kill_process_group(proc)
                logger.debug(f"Augment timed out after {self.timeout_ms}ms for {token!r}")
                return None

        if proc.returncode != 0:
            logger.debug(f"Augment exited {proc.returncode} for {token!r}")
            return None

        answer = (stderr or "").strip()
        return answer or None
