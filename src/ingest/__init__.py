"""Request acceptance layer.

This module checks origins, validates JSON bodies and queues accepted
payloads for the persistence layer.
"""
