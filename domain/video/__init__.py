"""Video domain exports."""
from .entity import Video
from .repository import VideoNotFoundError, VideoRepository

__all__ = ["Video", "VideoRepository", "VideoNotFoundError"]
