"""Custom exceptions for photocurator.

This module defines domain-specific exceptions that provide better
error handling and more informative error messages than generic exceptions.
Missing signals and insufficient data are never raised; they resolve to
neutral values or ineligibility results. Exceptions are reserved for
configuration mistakes and collaborator failures.
"""


class PhotoCuratorError(Exception):
    """Base exception for all photocurator errors."""

    pass


class InvalidConfigError(PhotoCuratorError):
    """Raised when a configuration object fails validation."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration for '{field}': {reason}")


class AnalysisError(PhotoCuratorError):
    """Base exception for per-photo analysis errors."""

    pass


class DetectionError(AnalysisError):
    """Raised when the face detection collaborator fails for a photo."""

    def __init__(self, photo_id: str, reason: str):
        self.photo_id = photo_id
        self.reason = reason
        super().__init__(f"Face detection failed for photo {photo_id}: {reason}")


class IdentityMatchError(AnalysisError):
    """Raised when the person matching collaborator fails for a photo."""

    def __init__(self, photo_id: str, reason: str):
        self.photo_id = photo_id
        self.reason = reason
        super().__init__(f"Person matching failed for photo {photo_id}: {reason}")


class AnalysisCancelledError(AnalysisError):
    """Raised when an in-flight batch of analyses is cancelled."""

    def __init__(self, completed: int = 0, total: int = 0):
        self.completed = completed
        self.total = total
        msg = "Photo analysis cancelled"
        if total:
            msg += f" after {completed}/{total} photos"
        super().__init__(msg)


class CompositingError(PhotoCuratorError):
    """Base exception for face compositor failures."""

    def __init__(self, person_id: str, reason: str = ""):
        self.person_id = person_id
        self.reason = reason
        msg = f"Compositing failed for person {person_id}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class AlignmentFailedError(CompositingError):
    """Raised when source and destination faces cannot be aligned."""

    pass


class BlendFailedError(CompositingError):
    """Raised when the aligned face cannot be blended into the base photo."""

    pass


class CollectionLoadError(PhotoCuratorError):
    """Raised when a photo collection file cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load collection from {path}: {reason}")
