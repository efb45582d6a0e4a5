"""Project configuration (settings and validators)."""
