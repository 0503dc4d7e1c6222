"""Document scanning, link extraction, validation and series indexing."""
