"""Comment domain exports."""
from .entity import Comment
from .repository import CommentNotFoundError, CommentRepository

__all__ = ["Comment", "CommentRepository", "CommentNotFoundError"]
