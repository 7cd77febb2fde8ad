"""Headless mode: JSON-lines protocol over stdin/stdout for programmatic drivers."""
