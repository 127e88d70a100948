"""Dependency injection for the application."""
