"""Core infrastructure: configuration, logging, errors, database and state machines."""
