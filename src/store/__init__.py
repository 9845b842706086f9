"""Tabular storage layer.

This package owns the in-memory row/column model: header registry, row
store, metadata fields, reconciliation, filtering and the container facade.
"""
