# rational3d/domain/__init__.py
"""Geometry domain model."""
