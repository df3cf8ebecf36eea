"""rot-detector - Detect dependency rot in your projects."""

__version__ = "1.0.0"
