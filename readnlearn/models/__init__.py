"""
Persistence models for the ReadNLearn anchor service.
"""

from .phrase import SavedPhrase

__all__ = ["SavedPhrase"]
