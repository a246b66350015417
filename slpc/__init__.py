"""slpc - markup-to-application build compiler."""

__version__ = "0.1.0"
