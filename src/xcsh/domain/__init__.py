"""Domain layer: tiers, argument parsing, errors, and the domain catalog.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
