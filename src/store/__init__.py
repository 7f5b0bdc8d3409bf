"""Payload persistence layer.

This module writes accepted payloads to the output directory tree and
runs the background batch persister that drains the ingestion queue.
"""
