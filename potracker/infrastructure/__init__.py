"""Infrastructure adapters: document store backends."""
