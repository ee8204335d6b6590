"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 1 -b 0.0.0.0:8000 wsgi:app

Keep a single worker: the stores assume one writer at a time.
"""

from tally import create_app

app = create_app()
