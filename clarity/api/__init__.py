"""HTTP API: request/response models, routers and dependencies."""
