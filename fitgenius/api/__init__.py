"""Reference data-persistence backend."""
