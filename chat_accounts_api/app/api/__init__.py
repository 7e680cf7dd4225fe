"""HTTP layer: routers, handlers and request validation."""
