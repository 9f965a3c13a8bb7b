#!/usr/bin/env python3
"""PreToolUse Hook: Code-graph context for searches

When Claude runs Grep, Glob or an rg/grep command inside an indexed
project, ask the graph engine about the search term and pass its answer
back as additionalContext.

Exit 0 always; never block the search.
"""

import sys
from pathlib import Path

# Plugin root holds the graph_augment package when not pip-installed
PLUGIN_ROOT = Path(__file__).resolve().parent.parent
if str(PLUGIN_ROOT) not in sys.path:
    sys.path.insert(0, str(PLUGIN_ROOT))


if __name__ == "__main__":
    try:
        from graph_augment.cli import main
        main(sys.argv[1:])
    except Exception as exc:
        print(f"graph-augment: hook failed to start: {exc}", file=sys.stderr)
    sys.exit(0)
