"""casebook-service: versioned cases and per-user case sharing."""

__version__ = "1.0.0"
