"""TaskDesk engine — configuration, errors, logging and health checks."""
