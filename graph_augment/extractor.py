"""
Search-token extraction from tool parameters.

Each tool kind has its own rule:

- Grep:  the pattern, verbatim
- Glob:  the first identifier-shaped path or wildcard segment
- Bash:  the first positional argument to rg/grep

The Bash rule is a heuristic, not a shell parser. Quoting, multi-word
patterns and bundled flags are only approximated: `rg "foo bar"` yields
`foo`. Keep it behind extract() so a stricter tokenizer can replace it.
"""

import re
from typing import Any, Dict, Optional

from .models import MIN_TOKEN_LENGTH, ToolInvocation, ToolKind

SEARCH_TOOLS = ("rg", "grep")

_TOOL_ALTERNATION = "|".join(re.escape(tool) for tool in SEARCH_TOOLS)

# Cheap whole-word check before tokenizing
SEARCH_TOOL_WORD = re.compile(rf"\b(?:{_TOOL_ALTERNATION})\b")

# Matches the tool word at the end of a token: rg, /usr/bin/grep, ./rg
SEARCH_TOOL_TOKEN = re.compile(rf"\b(?:{_TOOL_ALTERNATION})$")

# Flags whose next token is their value, not the pattern
VALUE_FLAGS = {
    "-e", "--regexp",
    "-f", "--file",
    "-m", "--max-count",
    "-A", "-B", "-C", "--context",
    "-g", "--glob",
    "-t", "--type",
    "--include", "--exclude",
}

# Identifier after '/', '*' or '?'; after '*.' only when another '.' follows,
# so 'src/*.test.ts' gives 'test' but '**/*.tsx' gives nothing
GLOB_SEGMENT = re.compile(
    r"[/*?]([A-Za-z][A-Za-z0-9_-]{2,})"
    r"|\*\.([A-Za-z][A-Za-z0-9_-]{2,})(?=\.)"
)

QUOTES = "'\""


def extract_text_pattern(pattern: str) -> Optional[str]:
    return pattern or None


def extract_glob_pattern(pattern: str) -> Optional[str]:
    match = GLOB_SEGMENT.search(pattern)
    if match is None:
        return None
    return match.group(1) or match.group(2)


def extract_shell_pattern(command: str) -> Optional[str]:
    """Find the first positional argument after rg/grep in a command line."""
    if not SEARCH_TOOL_WORD.search(command):
        return None

    seen_tool = False
    skip_next = False

    for token in command.split():
        if not seen_tool:
            seen_tool = bool(SEARCH_TOOL_TOKEN.search(token))
            continue
        if skip_next:
            skip_next = False
            continue
        if token.startswith("-"):
            skip_next = token in VALUE_FLAGS
            continue

        candidate = token.strip(QUOTES)
        if len(candidate) >= MIN_TOKEN_LENGTH:
            return candidate
        return None

    return None


# Each rule receives the kind's declared field (see models.PARAMETER_FIELDS)
EXTRACTORS = {
    ToolKind.SEARCH_TEXT: extract_text_pattern,
    ToolKind.SEARCH_FILES: extract_glob_pattern,
    ToolKind.SHELL: extract_shell_pattern,
}


class PatternExtractor:
    """Derive one search token from a tool call, or None."""

    def extract(self, kind: Optional[ToolKind], parameters: Optional[Dict[str, Any]]) -> Optional[str]:
        if kind not in EXTRACTORS or not isinstance(parameters, dict):
            return None
        return self.extract_invocation(ToolInvocation(kind=kind, raw_parameters=parameters))

    def extract_invocation(self, invocation: ToolInvocation) -> Optional[str]:
        argument = invocation.argument
        if argument is None:
            return None
        return EXTRACTORS[invocation.kind](argument)
