"""Git repository helpers."""
