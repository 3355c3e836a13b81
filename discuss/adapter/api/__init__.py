"""Comments API client adapter."""

from .client import HttpCommentRepository

__all__ = ["HttpCommentRepository"]
