"""Two-player chess with an optional computer opponent."""

__version__ = "1.0.0"
