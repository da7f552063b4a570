"""Service layer: cache engine, metrics, AI requesters and backend client."""
