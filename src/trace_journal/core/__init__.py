"""Core infrastructure: configuration, exceptions, logging and the CLI."""
