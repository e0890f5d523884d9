"""
Gunicorn configuration for the Recovery Insights API.

Run with:  gunicorn -c gunicorn.conf.py
Env vars that override defaults:
  PORT     TCP port to bind (the platform usually injects it)
  WORKERS  number of worker processes (default: 2)
"""
import os

wsgi_app = "recovery_insights.main:app"

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Insight generation is CPU-bound but small; two workers fit a 512 MB container.
workers = int(os.environ.get("WORKERS", "2"))

# ASGI app served by Uvicorn workers under Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# A journal of a few thousand days analyses in milliseconds; anything near
# this limit is a stuck worker.
timeout = 60

# stdout only; the app logger writes there too.
loglevel = "info"
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
