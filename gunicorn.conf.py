"""Gunicorn configuration for the setting store API."""

from __future__ import annotations

import multiprocessing
import os

wsgi_app = "settingstore.main:app"

port = os.getenv("PORT", "8000")
bind = f"0.0.0.0:{port}"

# Each request builds its own setting cache, so threads share nothing
workers = int(os.getenv("GUNICORN_WORKERS", max(2, multiprocessing.cpu_count() // 2)))
worker_class = "gthread"
threads = int(os.getenv("GUNICORN_THREADS", "4"))

timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
