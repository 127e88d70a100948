"""
taskmind - AI-assisted task management exposed over the Model Context Protocol.
"""

__version__ = "2.0.0"
