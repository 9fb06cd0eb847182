import os

# Renders are CPU-bound and share no state, so workers scale with cores.
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))

# Bind
bind = os.environ.get("BIND", "0.0.0.0:8080")

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

# Image-heavy reports can take a while to decode and paint
timeout = 180
