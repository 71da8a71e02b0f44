"""ACME dns-01 hook for Google ACME DNS and name.com."""

__version__ = "0.1.0"
