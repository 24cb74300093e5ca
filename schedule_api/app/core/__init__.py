"""Core infrastructure: settings, logging, database, errors and dates."""
