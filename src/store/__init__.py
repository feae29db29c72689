"""Relational storage layer.

This package owns the SQLite store handle, the schema declaration,
and the SDK client built on top of them.
"""
