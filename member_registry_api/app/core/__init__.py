"""Configuration, logging, error types and the record store."""
