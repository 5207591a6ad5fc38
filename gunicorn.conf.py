"""Gunicorn config for container deployment."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each worker holds its own receipt snapshot; writes go through the JSON file,
# so keep a single worker unless receipts live behind a shared store.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

timeout = 60
graceful_timeout = 30
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
