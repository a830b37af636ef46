"""PhiloReader - Interactive trilingual reader for philosophical texts."""

__version__ = "0.1.0"
