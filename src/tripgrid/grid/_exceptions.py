class GridError(ValueError):
    """Base exception for invalid grid configuration and day windows."""
