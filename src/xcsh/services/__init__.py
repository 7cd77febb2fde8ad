"""Service layer: sessions, command registry, dispatch, and handlers.

Services may import from domain and infrastructure layers.
They must never import from commands, repl, or headless.
"""
