"""
Shared utilities for Entity Icons.
"""
