"""
Version 1 of the JSON API.

This subpackage bundles the member endpoints.  Breaking changes to the
envelope or routes should go into a new version subpackage.
"""
