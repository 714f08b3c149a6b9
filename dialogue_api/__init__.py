"""Dialogue API: access control and dialogue management service."""
