"""Cascading cleanup pipeline.

This module selects stale documents, strips references to them,
and tombstones them so deletions replicate downstream.
"""
