"""Integrations with third-party data libraries."""
