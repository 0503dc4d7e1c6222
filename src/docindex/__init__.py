"""DocIndex - series index and link checker for Markdown collections."""

__version__ = "0.1.0"
