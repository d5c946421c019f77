"""
Exceptions raised by the tower generator.
"""


class TowerGeneratorError(Exception):
    pass


class InvalidConfigurationError(TowerGeneratorError, ValueError):
    """A configuration value lies outside its closed set or is malformed."""
    pass
