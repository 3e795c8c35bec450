"""
Application package initializer.

This package contains the FastAPI application factory and its
submodules.  The project is organised into a handful of small pieces:
``core`` holds configuration, logging, errors and the record store;
``schemas`` defines the wire models; ``services`` holds the member
operations shared by both front‑ends; ``api`` exposes the JSON API
and ``site`` the server‑rendered HTML forms.
"""

from .main import create_app  # noqa: F401
