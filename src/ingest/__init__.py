"""Delimited source ingestion.

This package reads and writes physical lines and translates between row
and column layouts and logical records.
"""
