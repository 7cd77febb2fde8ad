"""Infrastructure layer: HTTP transport and subscription fetchers.

This layer depends on stdlib, third-party libs (httpx), and domain value
types. It must never import from services, commands, or output.
"""
