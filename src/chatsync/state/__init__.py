"""State/store layer.

This package is the single source of truth for the shared snapshot: local
edits, remote poll results and accepted transcript updates are all applied
through :class:`~chatsync.state.store.SharedStateStore`.
"""
