"""
Service layer for Entity Icons.
"""
