"""Service Layer - orchestrates core stages and owns their logging."""
