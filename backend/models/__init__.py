"""Document layouts for the document store."""
