"""HTTP layer: shared dependencies and the versioned routers."""
