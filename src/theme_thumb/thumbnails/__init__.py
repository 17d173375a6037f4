"""Thumbnails — cached cursor and icon theme previews for the current scale."""

from theme_thumb.thumbnails.service import ThumbnailService

__all__ = ["ThumbnailService"]
