"""
Top‑level package for the Member Registry.

This file makes ``member_registry_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``member_registry_api.app.main``.  The command line entry point
lives in :mod:`member_registry_api.cli`.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
