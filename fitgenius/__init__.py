"""FitGenius: workout logging, body-weight tracking and AI coaching client."""

__version__ = "1.0.0"
