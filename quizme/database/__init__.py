"""
Database Module

This module provides database configuration and models for the QuizMe backend.
"""

from quizme.database.base import Base, ModelBase, metadata
from quizme.database.models import DocumentRecord

__all__ = ['Base', 'ModelBase', 'metadata', 'DocumentRecord']
