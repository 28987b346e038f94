"""Version ordering helpers."""
