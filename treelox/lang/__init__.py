"""Embedding surface: error reporting, sessions and the interactive shell."""
