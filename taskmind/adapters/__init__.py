"""
Adapters for external collaborators.
"""
from .llm_client import CompletionOracle, HTTPCompletionOracle

__all__ = ['CompletionOracle', 'HTTPCompletionOracle']
