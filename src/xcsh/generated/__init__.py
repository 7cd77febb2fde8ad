"""Static tables produced offline from the upstream OpenAPI specs."""
