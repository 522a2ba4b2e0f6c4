"""Domain models (value objects, result records and errors)."""
