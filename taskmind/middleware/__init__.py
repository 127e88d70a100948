"""Logging and middleware setup."""
