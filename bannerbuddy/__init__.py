"""Banner Buddy: bannières de notification configurables (sticky/ticker)."""

__version__ = "1.0.0"
