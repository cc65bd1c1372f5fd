# Gunicorn configuration file for production deployment
# Run with: gunicorn --config gunicorn.conf.py wsgi:app

import os

# Server socket
bind = os.getenv('GUNICORN_BIND', '0.0.0.0:5000')
backlog = 2048

# Worker processes
# The memory backend lives inside one process; raise workers only with STORAGE_BACKEND=sql.
workers = int(os.getenv('GUNICORN_WORKERS', '1'))
threads = int(os.getenv('GUNICORN_THREADS', '4'))
worker_class = "gthread"
timeout = 60
keepalive = 2

loglevel = os.getenv('GUNICORN_LOG_LEVEL', 'info')
accesslog = os.getenv('GUNICORN_ACCESS_LOG', '-')  # stdout
errorlog = os.getenv('GUNICORN_ERROR_LOG', '-')    # stderr
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'
proc_name = 'clinicdesk'
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190

# Graceful shutdown
graceful_timeout = 30


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("clinicdesk is ready to serve requests")


def worker_int(worker):
    """Called when a worker receives the SIGINT or SIGQUIT signal."""
    worker.log.info("Worker received INT or QUIT signal")


def on_exit(server):
    """Called just before exiting."""
    server.log.info("clinicdesk is shutting down")
