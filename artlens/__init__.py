"""ArtLens: identify artworks and monuments from a photograph."""

__version__ = "0.3.0"
