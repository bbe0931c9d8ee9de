"""State layer.

Owns everything observers may read: the orchestrator's command state,
the bounded command history and the cached vehicle status.
"""
