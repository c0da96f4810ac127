"""
Core Derivation Layer

RESPONSIBILITY: Keys, link extraction, hierarchy index, reference graph
ALLOWED INPUTS: Normalized Record / RecordSet contracts
OUTPUTS: ChildIndex, TreeNode, ResolvedLink (immutable)

WHAT THIS LAYER MUST NOT DO:
============================
- Read host context shapes (that's the ingestion layer's job)
- Compute coordinates or labels for display (visualization layer)
- Mutate or cache records between calls
"""

from .keys import (
    RecordSet, key_of, is_reference_token, display_name_of, UNKNOWN_LABEL,
)
from .links import extract_tokens, extract_all_links, fold_field
from .hierarchy import ChildIndex, TreeNode, HierarchyIndexer
from .references import LinkStatus, ResolvedLink, ReferenceGraphBuilder

__all__ = [
    'RecordSet', 'key_of', 'is_reference_token', 'display_name_of', 'UNKNOWN_LABEL',
    'extract_tokens', 'extract_all_links', 'fold_field',
    'ChildIndex', 'TreeNode', 'HierarchyIndexer',
    'LinkStatus', 'ResolvedLink', 'ReferenceGraphBuilder',
]
