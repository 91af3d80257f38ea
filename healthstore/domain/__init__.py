"""Domain models and deterministic demo fixtures."""
