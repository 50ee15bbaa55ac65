# rational3d/utils/__init__.py
"""Model base class and the shape arena."""
