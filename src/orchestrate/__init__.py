"""Top-level run modes.

This module wires seeds, plants, churn threads and the lifecycle
scheduler into the long-running ``io`` and ``backup`` modes.
"""
