"""
Server‑rendered HTML front‑end.

Plain HTML forms drive the same member operations as the JSON API.
Successful mutations redirect back to the listing page; failures are
rendered through the ``error`` template.
"""
