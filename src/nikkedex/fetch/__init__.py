# ABOUTME: Network collaborators for the wiki: page fetching and portrait storage
# ABOUTME: Pipeline Stage 0: URLs → parsed documents and local image files

from .images import ImageProcessor, make_thumbnail
from .wiki import WikiClient

__all__ = [
    "ImageProcessor",
    "WikiClient",
    "make_thumbnail",
]
