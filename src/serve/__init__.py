"""HTTP serving components.

This module exposes the Flask ingestion endpoint and the process-level
wiring that runs it next to the batch persister.
"""
