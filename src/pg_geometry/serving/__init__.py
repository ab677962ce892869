"""HTTP service for the EWKB codec."""

from .api import create_app, run_server

__all__ = ['create_app', 'run_server']
