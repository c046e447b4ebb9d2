"""Client utilities."""
