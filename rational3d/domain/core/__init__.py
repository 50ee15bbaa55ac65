# rational3d/domain/core/__init__.py
"""Scalars, errors and precision settings."""
