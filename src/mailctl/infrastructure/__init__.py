"""Infrastructure layer: the in-memory store, its schema and id counters."""
