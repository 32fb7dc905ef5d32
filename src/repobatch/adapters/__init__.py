"""Adapters connecting the domain to storage, HTTP providers, and files."""
