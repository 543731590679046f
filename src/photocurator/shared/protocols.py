"""Interfaces of the external collaborators the curation core consumes.

Face detection, person matching and pixel compositing all live outside
this package. Any object with the matching method can be passed in.
"""

from typing import Any, Optional, Protocol, Sequence, Union, runtime_checkable

from photocurator.shared.models import FaceObservation, FaceQuality, Photo, PersonFaceReplacement


@runtime_checkable
class FaceDetector(Protocol):
    def detect(self, photo: Photo) -> Sequence[FaceObservation]:
        """Return every face found in the photo. Raise on detection failure."""
        ...


@runtime_checkable
class AsyncFaceDetector(Protocol):
    async def detect(self, photo: Photo) -> Sequence[FaceObservation]:
        ...


Detector = Union[FaceDetector, AsyncFaceDetector]


@runtime_checkable
class PersonMatcher(Protocol):
    def match(self, photo: Photo, faces: Sequence[FaceQuality]) -> Sequence[Optional[str]]:
        """Return one person id per face, in face order. None means unmatched."""
        ...


@runtime_checkable
class FaceCompositor(Protocol):
    def composite(self, replacement: PersonFaceReplacement) -> Any:
        """Blend the source face into the destination photo.

        Returns an opaque handle to the composite. Raises
        ``AlignmentFailedError`` or ``BlendFailedError``.
        """
        ...
