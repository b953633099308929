"""Shared persistence, result, logging and metrics helpers for the upload services."""
