"""
Dimensional Server
==================

HTTP handlers over the quantity engine.
"""

from .routes import app, create_app

__all__ = ['app', 'create_app']
