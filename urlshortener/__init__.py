"""URL shortener service: get-or-create short codes for long URLs."""

__version__ = "0.1.0"
