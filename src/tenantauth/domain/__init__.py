"""Domain layer - entities, value objects and pure authorization logic."""
