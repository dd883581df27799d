"""Hierarchy management."""
from .tree_builder import TreeBuilder
from .shortcut_expander import ShortcutExpander, ShortcutExpansionCache, anchor_entry

__all__ = [
    'TreeBuilder',
    'ShortcutExpander',
    'ShortcutExpansionCache',
    'anchor_entry',
]
