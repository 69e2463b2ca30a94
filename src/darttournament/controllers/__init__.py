"""Tournament business logic."""
