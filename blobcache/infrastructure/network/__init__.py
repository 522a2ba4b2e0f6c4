"""Network tier: retrieves payloads from their origin on a cache miss."""
