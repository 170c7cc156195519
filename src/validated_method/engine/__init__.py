"""Engine layer: matching, validation, and return checking.

The engine may import from domain and config.
It must never import from method.
"""
