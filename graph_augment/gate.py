"""
PreToolUse gate: decide whether a search gets graph context, and fetch it.

The gate is a straight line of checks. Any failed check ends the run with
None, which the CLI turns into "print nothing". Only a successful
collaborator answer produces output.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .collaborator import AugmentCollaborator
from .config import Config
from .extractor import PatternExtractor
from .locator import IndexLocator
from .models import PRE_TOOL_USE, HookEvent

logger = logging.getLogger(__name__)


def build_context_output(context: str) -> Dict[str, Any]:
    """Wrap collaborator text in the host's hook output record."""
    return {
        "hookSpecificOutput": {
            "hookEventName": PRE_TOOL_USE,
            "additionalContext": context,
        }
    }


class AugmentationGate:
    """
    Orchestrates one interception.

    Collaborators are injectable; anything left as None is built from the
    project's Config when the event arrives.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        locator: Optional[IndexLocator] = None,
        extractor: Optional[PatternExtractor] = None,
        collaborator: Optional[AugmentCollaborator] = None,
    ):
        self.config = config
        self.locator = locator
        self.extractor = extractor or PatternExtractor()
        self.collaborator = collaborator

    def handle(self, event: HookEvent) -> Optional[Dict[str, Any]]:
        if not event.is_pre_tool_use:
            logger.debug(f"Ignoring {event.hook_event_name or 'unnamed'} event")
            return None

        cwd = Path(event.cwd or os.getcwd())
        config = self.config or Config.discover(cwd)
        if not config.enabled:
            logger.debug("Augmentation disabled by config")
            return None

        locator = self.locator or IndexLocator(config.marker_name, config.max_depth)
        if not locator.locate(cwd):
            logger.debug(f"No {config.marker_name} index above {cwd}")
            return None

        invocation = event.invocation()
        if invocation is None:
            logger.debug(f"Not a search tool: {event.tool_name!r}")
            return None

        token = self.extractor.extract_invocation(invocation)
        # Re-checked here: Grep patterns pass through extraction unfiltered
        if not token or len(token) < config.min_token_length:
            logger.debug(f"No usable search token for {invocation.kind.value}")
            return None

        collaborator = self.collaborator or AugmentCollaborator(config.command, config.timeout_ms)
        logger.debug(f"Augmenting {invocation.kind.value} search for {token!r}")
        try:
            context = collaborator.augment(token, cwd)
        except Exception as e:
            logger.debug(f"Augment failed for {token!r}: {e}")
            return None

        if not isinstance(context, str) or not context.strip():
            return None

        return build_context_output(context.strip())

    def handle_payload(self, payload: Any) -> Optional[Dict[str, Any]]:
        """Entry point for raw decoded JSON; non-objects are ignored."""
        if not isinstance(payload, dict):
            return None
        return self.handle(HookEvent.from_dict(payload))
