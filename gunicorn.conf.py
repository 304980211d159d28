"""
Gunicorn configuration for the schemaguard registry.

    gunicorn -c gunicorn.conf.py

Env vars that override defaults:
  PORT       — TCP port to bind (default: 8000)
  WORKERS    — number of worker processes (default: 2)
  LOG_LEVEL  — server log level, shared with the application (default: INFO)
"""
import os

wsgi_app = "schemaguard.main:app"

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

workers = int(os.environ.get("WORKERS", "2"))

# Each worker runs Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

# Workers import the app after fork; each opens its own database engine.
preload_app = False

keepalive = 5

# Validation is CPU-only and fast; a stuck worker is a bug.
timeout = 30

loglevel = os.environ.get("LOG_LEVEL", "INFO").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
