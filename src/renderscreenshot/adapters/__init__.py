"""Adapters – integrations with third-party libraries."""
