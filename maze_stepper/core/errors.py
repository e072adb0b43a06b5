class ConfigurationError(ValueError):
    """Raised when a solver cannot be built from the grid's current markers."""
