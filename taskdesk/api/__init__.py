"""HTTP surface for the task service."""
