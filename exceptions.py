"""Custom exception classes for trackstitch."""

from __future__ import annotations

from typing import Optional


class TrackStitchError(Exception):
    """Base exception for all trackstitch errors."""

    pass


class ConfigError(TrackStitchError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigError):
    """Raised when configuration file is invalid or corrupted."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration fails schema validation."""

    def __init__(self, message: str, validation_errors: Optional[list] = None):
        self.validation_errors = validation_errors or []
        super().__init__(message)


class TrackError(TrackStitchError):
    """Base exception for track and track set errors."""

    def __init__(self, message: str, track_id: Optional[int] = None):
        self.track_id = track_id
        super().__init__(message)


class TrackIOError(TrackError):
    """Raised when a track set file cannot be read or written."""

    pass


class MatchError(TrackStitchError):
    """Raised when a feature matcher receives unusable input."""

    pass
