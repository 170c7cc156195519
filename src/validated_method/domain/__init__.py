"""Domain layer: kinds, descriptors, and schema variants.

This layer depends only on the stdlib and the error taxonomy.
It must never import from engine, config, or method.
"""
