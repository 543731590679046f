"""Tests for photo scoring."""

import pytest
from unittest.mock import Mock

from photocurator.core.scorer import PhotoScorer, score_context, score_technical
from photocurator.shared.models import PhotoSignals, PhotoType

from tests.helpers import BASE_TIME, make_observation, make_photo, make_screenshot


class TestComponentScores:
    def test_technical_is_mean_of_signals(self):
        technical = score_technical(PhotoSignals(sharpness=0.9, exposure=0.6, composition=0.3))
        assert technical.overall == pytest.approx(0.6)

    def test_missing_signals_are_neutral(self):
        technical = score_technical(PhotoSignals())
        assert (technical.sharpness, technical.exposure, technical.composition) == (0.5, 0.5, 0.5)
        assert score_context(PhotoSignals()) == 0.5

    def test_context_signal(self):
        assert score_context(PhotoSignals(context=0.9)) == 0.9


class TestScorePhoto:
    def test_portrait(self):
        scorer = PhotoScorer()
        photo = make_photo(signals=PhotoSignals(sharpness=0.8, exposure=0.8, composition=0.8, context=0.5))
        scored = scorer.score_photo(photo, [make_observation()], calculated_at=BASE_TIME)

        assert scored.is_analyzed
        assert scored.face_count == 1
        assert scored.photo_score.photo_type is PhotoType.PORTRAIT
        assert scored.photo_score.technical == pytest.approx(0.8)
        assert scored.photo_score.face == scored.face_score.composite_score
        expected = 0.8 * 0.4 + scored.face_score.composite_score * 0.4 + 0.5 * 0.2
        assert scored.photo_score.overall == pytest.approx(expected)
        assert scored.photo_score.calculated_at == BASE_TIME

    def test_group_photo(self):
        scored = PhotoScorer().score_photo(
            make_photo(), [make_observation(face_index=i) for i in range(3)]
        )
        assert scored.photo_score.photo_type is PhotoType.GROUP_PHOTO
        assert scored.face_count == 3

    def test_no_faces_defaults_to_landscape(self):
        scored = PhotoScorer().score_photo(make_photo(), [])
        assert scored.is_analyzed
        assert scored.face_score.face_count == 0
        assert scored.photo_score.face == 0.5
        assert scored.photo_score.photo_type is PhotoType.LANDSCAPE
        assert scored.photo_score.overall == pytest.approx(0.5)

    def test_screenshot_is_utility(self):
        scored = PhotoScorer().score_photo(make_screenshot(), [])
        assert scored.photo_score.photo_type is PhotoType.UTILITY
        assert 0.1 <= scored.photo_score.overall <= 0.3

    def test_explicit_photo_type_wins(self):
        photo = make_photo(signals=PhotoSignals(photo_type=PhotoType.ACTION))
        scored = PhotoScorer().score_photo(photo, [make_observation()])
        assert scored.photo_score.photo_type is PhotoType.ACTION

    def test_uses_injected_categorizer(self):
        categorizer = Mock()
        categorizer.primary_type.return_value = PhotoType.CLOSE_UP
        scored = PhotoScorer(categorizer=categorizer).score_photo(make_photo(), [])
        assert scored.photo_score.photo_type is PhotoType.CLOSE_UP
        categorizer.primary_type.assert_called_once()

    def test_original_photo_untouched(self):
        photo = make_photo()
        PhotoScorer().score_photo(photo, [make_observation()])
        assert not photo.is_scored
        assert not photo.is_analyzed
