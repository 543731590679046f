"""Photo scoring: technical, face and context components plus the weighted composite."""

import logging
from datetime import datetime
from typing import Optional, Sequence

from photocurator.core.categorizer import PhotoCategorizer
from photocurator.extraction.face_analyzer import FaceQualityAnalyzer
from photocurator.shared.config import AnalysisConfig
from photocurator.shared.constants import SCORING
from photocurator.shared.models import (
    FaceObservation,
    Photo,
    PhotoScore,
    PhotoSignals,
    TechnicalQualityScore,
)

logger = logging.getLogger(__name__)


def _signal(value: Optional[float]) -> float:
    return SCORING.NEUTRAL_SIGNAL if value is None else value


def score_technical(signals: PhotoSignals) -> TechnicalQualityScore:
    """Technical quality from the external sharpness, exposure and composition signals."""
    return TechnicalQualityScore(
        sharpness=_signal(signals.sharpness),
        exposure=_signal(signals.exposure),
        composition=_signal(signals.composition),
    )


def score_context(signals: PhotoSignals) -> float:
    return _signal(signals.context)


class PhotoScorer:
    """
    Scores a single photo.

    Scoring logic:
    - Technical score: mean of sharpness, exposure and composition
    - Face score: photo-level summary of every analyzed face
    - Context score: external context signal
    - Overall: type-specific weighting of the three
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        analyzer: Optional[FaceQualityAnalyzer] = None,
        categorizer: Optional[PhotoCategorizer] = None,
    ):
        self.analyzer = analyzer or FaceQualityAnalyzer(config)
        self.categorizer = categorizer or PhotoCategorizer()

    def score_photo(
        self,
        photo: Photo,
        observations: Sequence[FaceObservation],
        calculated_at: Optional[datetime] = None,
    ) -> Photo:
        """
        Analyze faces and attach all scores to the photo.

        Args:
            photo: Photo to score
            observations: Faces detected in the photo (may be empty)
            calculated_at: Timestamp recorded on the score (defaults to now)

        Returns:
            New Photo record with face analysis, technical, face and
            composite scores attached.
        """
        faces = self.analyzer.analyze_all(photo.photo_id, observations)
        face_score = self.analyzer.summarize(faces)
        technical = score_technical(photo.signals)
        context = score_context(photo.signals)
        photo_type = self.categorizer.primary_type(photo, technical, len(faces))

        photo_score = PhotoScore.calculate(
            technical=technical.overall,
            face=face_score.composite_score,
            context=context,
            photo_type=photo_type,
            calculated_at=calculated_at,
        )

        logger.debug(
            "Scored photo %s: type=%s, technical=%.3f, face=%.3f, context=%.3f, overall=%.3f",
            photo.photo_id,
            photo_type.value,
            photo_score.technical,
            photo_score.face,
            photo_score.context,
            photo_score.overall,
        )

        return photo.with_face_analysis(faces, face_score).with_scores(
            technical_score=technical,
            face_score=face_score,
            photo_score=photo_score,
        )
