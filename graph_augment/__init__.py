"""
graph-augment - code-graph context for search tool calls
"""

from .models import HookEvent, ToolInvocation, ToolKind
from .config import Config
from .locator import IndexLocator
from .extractor import PatternExtractor
from .collaborator import AugmentCollaborator
from .gate import AugmentationGate

__all__ = [
    'HookEvent', 'ToolInvocation', 'ToolKind', 'Config',
    'IndexLocator', 'PatternExtractor', 'AugmentCollaborator', 'AugmentationGate',
]
