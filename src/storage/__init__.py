"""Storage engine boundary.

This module wraps the engine's snapshot, clone, send and destroy commands
behind a typed interface with structured error kinds.
"""
