"""Template use cases."""
