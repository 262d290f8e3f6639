"""Secrets Manager access-policy authorization service."""

__version__ = "0.1.0"
