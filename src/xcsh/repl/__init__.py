"""Interactive shell front-end."""
