"""
Gunicorn Configuration

Runs the judging automation API under Uvicorn workers.

    gunicorn awards_backend.main:app -c deploy/gunicorn.conf.py

Batch endpoints (assign, shortlist-all, remind) send one SMTP message per
judge or entry inside the request, so the worker timeout is longer than a
plain CRUD service would need. Raise AWARDS_WORKER_TIMEOUT for large rounds.
"""
import os

bind = os.environ.get("BIND", "0.0.0.0:8000")

# Each worker owns its own async engine; SQLite deployments should stay at 1
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = int(os.environ.get("AWARDS_WORKER_TIMEOUT", "300"))
graceful_timeout = 30
keepalive = 5

accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

proc_name = "awards-judging"


def when_ready(server):
    server.log.info(f"Judging automation API ready on {bind} ({workers} workers, timeout {timeout}s)")


def worker_abort(worker):
    worker.log.warning(f"Worker {worker.pid} aborted after {timeout}s - a batch run may be incomplete")
