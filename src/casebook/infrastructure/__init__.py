"""Infrastructure package: database and persistence."""
