"""
Service layer abstraction.

Services hold the member operations that both the JSON API and the
HTML site perform: ID assignment, name validation and the existence
checks around updates and deletes.
"""
