"""FastAPI routers, dependencies and response schemas."""
