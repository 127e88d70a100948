"""Application factory."""
from taskmind.app.factory import create_app

__all__ = ["create_app"]
