# rational3d/domain/geometry/__init__.py
"""Primitives and the intersection and distance engines.

Modules import each other directly; nothing is re-exported here.
"""
