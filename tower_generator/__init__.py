"""
Procedural tower generator.

Builds stacked, biome-decorated towers as plain descriptor data that a
rendering collaborator converts into drawable objects.
"""

__version__ = "0.1.0"
