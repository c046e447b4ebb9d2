"""Server utilities: configuration and logging."""
