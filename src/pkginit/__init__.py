"""Interactive scaffolding for new npm projects."""

__version__ = "0.1.0"
