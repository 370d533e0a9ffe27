"""Rule use cases."""
