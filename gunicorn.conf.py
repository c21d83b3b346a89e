# Gunicorn configuration file
# Used with: gunicorn -c gunicorn.conf.py run:app

bind = "0.0.0.0:8000"
workers = 4
timeout = 30

# Each worker builds its own app, engine and Redis client
preload_app = False

# Logging to stdout/stderr, next to the app's own log lines
accesslog = "-"
errorlog = "-"
loglevel = "info"

proc_name = "saveit"
