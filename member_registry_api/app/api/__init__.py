"""
API package containing versioned JSON routes.

A version subpackage exposes a top‑level ``router`` which includes all
of its endpoints.  The v1 router is mounted under ``/api`` by the
application factory.
"""
