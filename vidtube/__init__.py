"""VidTube API: a video sharing backend built with FastAPI."""

__version__ = "1.0.0"
