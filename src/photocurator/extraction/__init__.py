"""Face analysis package: landmark metrics and per-face quality records."""

from photocurator.extraction.face_analyzer import FaceQualityAnalyzer

__all__ = ['FaceQualityAnalyzer']
