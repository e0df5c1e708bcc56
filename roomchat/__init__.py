"""
Data access for the chat application.

Resolves users by access token, persists user identities and lists rooms with their latest activity.
https://supabase.com/docs/reference/python/introduction
"""

import logging


def setup_logging(dev_mode: bool = False):
    """Set up logging for the process using this package."""
    dt_fmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("[{asctime}] [{levelname:<8}] {name}: {message}", dt_fmt, style="{")

    logging.root.setLevel(logging.DEBUG if dev_mode else logging.INFO)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logging.root.addHandler(stream_handler)

    if not dev_mode:
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("postgrest").setLevel(logging.WARNING)
