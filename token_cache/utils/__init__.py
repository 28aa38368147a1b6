"""Shared utilities for the token cache."""
