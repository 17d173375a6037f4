"""Exception hierarchy for theme-thumb."""


class ThumbError(Exception):
    """Base exception for all theme-thumb errors."""


class ValidationError(ThumbError):
    """Raised when an asset id or parameter is rejected."""


class FileSystemError(ThumbError):
    """Raised when the cache tree cannot be created or written."""


class CacheDirError(FileSystemError):
    """Raised when a cache directory cannot be created."""


class ThumbnailWriteError(FileSystemError):
    """Raised when a composited thumbnail cannot be encoded or saved."""


class GenerationError(ThumbError):
    """Raised when a thumbnail cannot be generated."""


class NoImagesError(GenerationError):
    """Raised when no candidate of any group could be decoded."""


class DecodeError(ThumbError):
    """Raised when an asset file is malformed or in an unsupported format."""
