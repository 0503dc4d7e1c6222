"""Loading Markdown documents from disk."""
