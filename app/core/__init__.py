"""Settings, database sessions, password and token security, and survey vocabularies."""
