"""Photo type detection from faces, scene labels, lighting and metadata."""

import logging
from typing import Iterable, Set

from photocurator.shared.constants import CATEGORIZATION, SCREENSHOT
from photocurator.shared.models import Photo, PhotoType, TechnicalQualityScore

logger = logging.getLogger(__name__)


def _matches_any(labels: Iterable[str], keywords: Iterable[str]) -> bool:
    keywords = tuple(keywords)
    return any(keyword in label for label in labels for keyword in keywords)


def screenshot_score(photo: Photo) -> int:
    """Score metadata hints that a photo is a screenshot. 5 or more is a screenshot."""
    metadata = photo.metadata
    score = 0

    if photo.location is None:
        score += SCREENSHOT.NO_LOCATION_POINTS
    if metadata.camera_model is None:
        score += SCREENSHOT.NO_CAMERA_POINTS
    if not metadata.has_exposure_metadata:
        score += SCREENSHOT.NO_EXPOSURE_METADATA_POINTS

    ratio = metadata.aspect_ratio
    if ratio is not None and any(
        abs(ratio - screen_ratio) < SCREENSHOT.RATIO_TOLERANCE
        for screen_ratio in SCREENSHOT.SCREEN_RATIOS
    ):
        score += SCREENSHOT.SCREEN_RATIO_POINTS

    asset_id = (photo.asset_id or "").lower()
    if asset_id and any(keyword in asset_id for keyword in SCREENSHOT.KEYWORDS):
        score += SCREENSHOT.KEYWORD_POINTS

    size = (metadata.width, metadata.height)
    if size in SCREENSHOT.RESOLUTIONS or size[::-1] in SCREENSHOT.RESOLUTIONS:
        score += SCREENSHOT.EXACT_RESOLUTION_POINTS

    return score


def is_screenshot(photo: Photo) -> bool:
    return screenshot_score(photo) >= SCREENSHOT.THRESHOLD


class PhotoCategorizer:
    """
    Detects the content type of a photo.

    A photo can match several types; the primary type is the first match in
    a fixed priority order and selects the composite score weights.
    """

    def categorize(
        self,
        photo: Photo,
        technical: TechnicalQualityScore,
        face_count: int,
    ) -> Set[PhotoType]:
        if photo.signals.photo_type is not None:
            return {photo.signals.photo_type}

        categories: Set[PhotoType] = set()

        if face_count == 1:
            categories.add(PhotoType.PORTRAIT)
        elif face_count > 1:
            categories.add(PhotoType.GROUP_PHOTO)
            if face_count > CATEGORIZATION.EVENT_FACE_COUNT:
                categories.add(PhotoType.EVENT)

        if self._is_utility(photo):
            categories.add(PhotoType.UTILITY)
            return categories

        categories |= self._categorize_by_scene(photo)
        categories |= self._categorize_by_lighting(photo, technical)
        categories |= self._categorize_by_technical(technical, face_count)
        return categories

    def primary_type(
        self,
        photo: Photo,
        technical: TechnicalQualityScore,
        face_count: int,
    ) -> PhotoType:
        categories = self.categorize(photo, technical, face_count)
        for name in CATEGORIZATION.PRIORITY:
            photo_type = PhotoType(name)
            if photo_type in categories:
                return photo_type

        if face_count == 1:
            return PhotoType.PORTRAIT
        if face_count > 1:
            return PhotoType.GROUP_PHOTO
        return PhotoType.LANDSCAPE

    @staticmethod
    def _is_utility(photo: Photo) -> bool:
        if photo.signals.is_utility is not None:
            return photo.signals.is_utility
        if is_screenshot(photo):
            logger.debug("Photo %s looks like a screenshot (score=%d)", photo.photo_id, screenshot_score(photo))
            return True
        return False

    @staticmethod
    def _categorize_by_scene(photo: Photo) -> Set[PhotoType]:
        labels = [label.lower() for label in photo.signals.scene_labels]
        if not labels:
            return set()

        categories: Set[PhotoType] = set()
        if _matches_any(labels, CATEGORIZATION.LANDSCAPE_KEYWORDS):
            categories.update((PhotoType.LANDSCAPE, PhotoType.OUTDOOR))
        if _matches_any(labels, CATEGORIZATION.INDOOR_KEYWORDS):
            categories.add(PhotoType.INDOOR)
        if _matches_any(labels, CATEGORIZATION.ACTION_KEYWORDS):
            categories.add(PhotoType.ACTION)
        if _matches_any(labels, CATEGORIZATION.CLOSE_UP_KEYWORDS):
            categories.add(PhotoType.CLOSE_UP)
        return categories

    @staticmethod
    def _categorize_by_lighting(photo: Photo, technical: TechnicalQualityScore) -> Set[PhotoType]:
        categories: Set[PhotoType] = set()
        hour = photo.timestamp.hour

        in_golden_hour = any(start <= hour <= end for start, end in CATEGORIZATION.GOLDEN_HOUR_RANGES)
        if in_golden_hour and technical.overall > CATEGORIZATION.GOLDEN_HOUR_MIN_TECHNICAL:
            categories.add(PhotoType.GOLDEN_HOUR)

        at_night = hour < CATEGORIZATION.NIGHT_BEFORE_HOUR or hour > CATEGORIZATION.NIGHT_AFTER_HOUR
        if technical.exposure < CATEGORIZATION.LOW_LIGHT_EXPOSURE_BELOW and at_night:
            categories.add(PhotoType.LOW_LIGHT)

        return categories

    @staticmethod
    def _categorize_by_technical(technical: TechnicalQualityScore, face_count: int) -> Set[PhotoType]:
        categories: Set[PhotoType] = set()

        if (
            technical.sharpness < CATEGORIZATION.ACTION_SHARPNESS_BELOW
            and technical.exposure > CATEGORIZATION.ACTION_EXPOSURE_ABOVE
        ):
            categories.add(PhotoType.ACTION)

        if (
            face_count >= CATEGORIZATION.GROUP_EVENT_FACE_COUNT
            and technical.exposure > CATEGORIZATION.EVENT_EXPOSURE_ABOVE
        ):
            categories.add(PhotoType.EVENT)

        return categories
