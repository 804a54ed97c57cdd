"""
Quote Stream API.

Serves a health check and a Server-Sent Events endpoint that pushes a
random quote to each connected client every few seconds.
"""

__version__ = "1.0.0"
