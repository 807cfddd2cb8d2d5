"""Exceptions raised by the media utilities."""


class MediaUtilsError(Exception):
    """Base class for all media utility errors."""


class InvalidArgumentError(MediaUtilsError, ValueError):
    """Raised when a caller passes an argument outside its valid range."""


class ConfigurationError(MediaUtilsError):
    """Raised when a required credential or setting is missing."""


class HTTPServiceError(MediaUtilsError):
    """Raised when a hosted API answers with an error response.

    Args:
        message: Error description
        status_code: HTTP status code of the response, if any
        retry_after: Seconds the service asked us to wait, if given
    """

    def __init__(self, message, status_code=None, retry_after=None):
        super().__init__(message)
        self.status_code = status_code
        self.retry_after = retry_after


class TranslationError(HTTPServiceError):
    """Raised when the translation API fails or returns nothing."""


class DownloadError(HTTPServiceError):
    """Raised when a file download fails."""


class ImageUploadError(HTTPServiceError):
    """Raised when the image host rejects an upload."""


class VideoProcessingError(MediaUtilsError):
    """Raised when ffmpeg fails to process a video."""


class YtDlpError(MediaUtilsError):
    """Raised when the yt-dlp binary exits with an error."""

    def __init__(self, message, returncode=None, stderr=""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ClipboardUnavailableError(MediaUtilsError):
    """Raised when no clipboard tool is available on this platform."""
