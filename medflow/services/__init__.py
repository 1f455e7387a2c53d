"""Aggregation, graph building and import services."""
