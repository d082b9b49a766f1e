# tests/unit/__init__.py
"""
Unit tests for Meeting Intelligence.

Pure functions (clock boundaries, classifier, dedup guard) and configuration
loading, tested without the store or the HTTP layer.
"""
