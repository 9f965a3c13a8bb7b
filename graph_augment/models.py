"""
Data model for intercepted tool invocations.

Everything here is invocation-scoped: built from the host's JSON event,
consumed once by the gate, then discarded.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


PRE_TOOL_USE = "PreToolUse"

# Shortest token worth sending to the graph
MIN_TOKEN_LENGTH = 3


class ToolKind(Enum):
    """Search-style host tools the gate knows how to read."""
    SEARCH_TEXT = "Grep"
    SEARCH_FILES = "Glob"
    SHELL = "Bash"

    @classmethod
    def from_tool_name(cls, tool_name: str) -> Optional["ToolKind"]:
        """Map a host tool name to its kind, or None if it is not a search tool."""
        for kind in cls:
            if kind.value == tool_name:
                return kind
        return None


# The single parameter each kind reads; everything else in the bag is ignored
PARAMETER_FIELDS: Dict[ToolKind, str] = {
    ToolKind.SEARCH_TEXT: "pattern",
    ToolKind.SEARCH_FILES: "pattern",
    ToolKind.SHELL: "command",
}


@dataclass
class ToolInvocation:
    """A tool call tagged by kind, with the host's raw parameter bag."""

    kind: ToolKind
    raw_parameters: Dict[str, Any] = field(default_factory=dict)

    @property
    def argument(self) -> Optional[str]:
        """The declared field for this kind, or None if missing or not a string."""
        value = self.raw_parameters.get(PARAMETER_FIELDS[self.kind])
        if isinstance(value, str):
            return value
        return None


@dataclass
class HookEvent:
    """
    One host invocation record, as delivered on stdin.

    Built leniently: missing or wrongly-typed fields become empty values
    so that the gate can reject the event instead of crashing on it.
    """

    hook_event_name: str = ""
    cwd: Optional[str] = None
    tool_name: str = ""
    tool_input: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_pre_tool_use(self) -> bool:
        return self.hook_event_name == PRE_TOOL_USE

    def invocation(self) -> Optional[ToolInvocation]:
        """Tag the tool call with its kind; None for tools we don't handle."""
        kind = ToolKind.from_tool_name(self.tool_name)
        if kind is None:
            return None
        return ToolInvocation(kind=kind, raw_parameters=self.tool_input)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HookEvent":
        """Create a HookEvent from the host's JSON object."""
        event_name = data.get("hook_event_name")
        cwd = data.get("cwd")
        tool_name = data.get("tool_name")
        tool_input = data.get("tool_input")

        return cls(
            hook_event_name=event_name if isinstance(event_name, str) else "",
            cwd=cwd if isinstance(cwd, str) and cwd else None,
            tool_name=tool_name if isinstance(tool_name, str) else "",
            tool_input=tool_input if isinstance(tool_input, dict) else {},
        )
