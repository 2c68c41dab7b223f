"""Local File Server: browse, upload and download a directory tree over HTTP."""

__version__ = "1.0.0"

APP_NAME = "Local File Server"
