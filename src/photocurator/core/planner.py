"""Perfect-moment eligibility and per-person face replacement planning.

A cluster is a candidate for a "perfect moment" when the same people
appear across several shots with different facial quality. For every
person whose best face is clearly better than their worst, the planner
proposes replacing their face in the base photo with the best one.
"""

import logging
from collections import Counter
from typing import Dict, List, Mapping, Optional, Sequence, Set

from photocurator.core.curation import ClusterCurator
from photocurator.shared.config import PlannerConfig
from photocurator.shared.constants import PLANNER
from photocurator.shared.models import (
    EligibilityReason,
    FaceQuality,
    ImprovementType,
    PerfectMomentEligibility,
    PerfectMomentPlan,
    PersonFaceQualityAnalysis,
    PersonFaceReplacement,
    Photo,
    PhotoCluster,
)

logger = logging.getLogger(__name__)

# Photo id -> one person id per face, in face order (None = unmatched)
Identities = Mapping[str, Sequence[Optional[str]]]


def faces_by_person(photo: Photo, person_ids: Sequence[Optional[str]]) -> Dict[str, FaceQuality]:
    """
    Map each identified person to their face in one photo.

    When the same person id is attached to several faces, the face with the
    highest capture quality is kept (ties: lowest face index).
    """
    faces = photo.face_qualities or ()
    if len(person_ids) != len(faces):
        logger.warning(
            "Photo %s has %d faces but %d identities, matching by position",
            photo.photo_id, len(faces), len(person_ids),
        )

    result: Dict[str, FaceQuality] = {}
    for face, person_id in zip(faces, person_ids):
        if person_id is None:
            continue
        current = result.get(person_id)
        if current is None:
            result[person_id] = face
            continue

        logger.warning(
            "Person %s matched to faces %d and %d in photo %s, keeping one",
            person_id, current.face_index, face.face_index, photo.photo_id,
        )
        if (face.capture_quality, -face.face_index) > (current.capture_quality, -current.face_index):
            result[person_id] = face
    return result


class PerfectMomentPlanner:
    """
    Decides whether a cluster can produce a perfect moment and plans the
    face replacements.

    Eligibility checks run in a fixed order and the first failing check
    determines the reason.
    """

    def __init__(self, config: Optional[PlannerConfig] = None):
        self.config = config or PlannerConfig()
        self.config.validate()

    def evaluate_eligibility(
        self,
        cluster: PhotoCluster,
        photos_by_id: Mapping[str, Photo],
        identities: Optional[Identities],
    ) -> PerfectMomentEligibility:
        if cluster.size < self.config.min_photos:
            return self._ineligible(cluster, EligibilityReason.INSUFFICIENT_PHOTOS)

        photos: List[Photo] = []
        for photo_id in cluster.photo_ids:
            photo = photos_by_id.get(photo_id)
            if photo is None or not photo.is_analyzed:
                logger.debug("Cluster %s: photo %s has no face analysis", cluster.cluster_id, photo_id)
                return self._ineligible(cluster, EligibilityReason.PROCESSING_ERROR)
            photos.append(photo)

        if identities is None or any(p.photo_id not in identities for p in photos):
            return self._ineligible(cluster, EligibilityReason.INCONSISTENT_PEOPLE)

        people = [set(faces_by_person(p, identities[p.photo_id])) for p in photos]
        if not self._people_consistent(people):
            return self._ineligible(cluster, EligibilityReason.INCONSISTENT_PEOPLE)

        for photo in photos:
            for face in photo.face_qualities:
                if face.capture_quality < self.config.min_face_capture_quality:
                    logger.debug(
                        "Cluster %s: face %d of %s has capture quality %.2f",
                        cluster.cluster_id, face.face_index, photo.photo_id, face.capture_quality,
                    )
                    return self._ineligible(cluster, EligibilityReason.LOW_QUALITY_PHOTOS)

        analyses = self._analyze(photos, identities)
        if not any(a.quality_gain > self.config.min_rank_spread for a in analyses):
            return self._ineligible(cluster, EligibilityReason.NO_FACE_VARIATIONS)

        potential = self._overall_potential(analyses)
        eligibility = PerfectMomentEligibility.eligible(max(PLANNER.ELIGIBLE_MIN_CONFIDENCE, potential))
        logger.debug("Cluster %s eligible (confidence=%.2f)", cluster.cluster_id, eligibility.confidence)
        return eligibility

    def analyze_people(
        self,
        cluster: PhotoCluster,
        photos_by_id: Mapping[str, Photo],
        identities: Identities,
    ) -> List[PersonFaceQualityAnalysis]:
        """Per-person best/worst face analysis for everyone seen at least twice."""
        photos = [
            photos_by_id[pid]
            for pid in cluster.photo_ids
            if pid in photos_by_id and photos_by_id[pid].is_analyzed and pid in identities
        ]
        return self._analyze(photos, identities)

    def is_candidate(self, analysis: PersonFaceQualityAnalysis) -> bool:
        return (
            analysis.improvement_potential > self.config.min_improvement_potential
            and analysis.quality_gain > self.config.min_quality_gain
        )

    def plan(
        self,
        cluster: PhotoCluster,
        photos_by_id: Mapping[str, Photo],
        identities: Optional[Identities],
        base_photo_id: Optional[str] = None,
    ) -> PerfectMomentPlan:
        """
        Build the replacement plan for a cluster.

        Args:
            cluster: Cluster to plan for
            photos_by_id: Lookup of analyzed photos
            identities: Person id per face, per photo
            base_photo_id: Photo receiving the replacements. Defaults to the
                cluster's representative.

        Returns:
            PerfectMomentPlan. Ineligible clusters get a plan without
            replacements.
        """
        if base_photo_id is None:
            base_photo_id = ClusterCurator().rank_cluster(cluster, photos_by_id).representative_id
        elif base_photo_id not in cluster.photo_ids:
            raise ValueError(f"Base photo {base_photo_id} is not in cluster {cluster.cluster_id}")

        eligibility = self.evaluate_eligibility(cluster, photos_by_id, identities)
        if not eligibility.is_eligible:
            return PerfectMomentPlan(
                cluster_id=cluster.cluster_id,
                eligibility=eligibility,
                base_photo_id=base_photo_id,
            )

        analyses = self.analyze_people(cluster, photos_by_id, identities)
        candidates = [a for a in analyses if self.is_candidate(a)]

        base_photo = photos_by_id[base_photo_id]
        base_faces = faces_by_person(base_photo, identities[base_photo_id])

        replacements = []
        for analysis in candidates:
            destination = base_faces.get(analysis.person_id)
            if destination is None:
                logger.debug("Person %s not in base photo %s", analysis.person_id, base_photo_id)
                continue
            if analysis.best_face.photo_id == base_photo_id:
                logger.debug("Person %s already at their best in %s", analysis.person_id, base_photo_id)
                continue
            replacements.append(self._replacement(analysis, base_photo_id, destination))

        replacements.sort(
            key=lambda r: (-r.expected_improvement, -r.confidence, r.improvement_type.priority)
        )

        plan = PerfectMomentPlan(
            cluster_id=cluster.cluster_id,
            eligibility=eligibility,
            base_photo_id=base_photo_id,
            person_analyses=tuple(analyses),
            replacements=tuple(replacements),
            overall_improvement_potential=self._overall_potential(analyses),
            estimated_processing_time=(
                PLANNER.BASE_PROCESSING_SECONDS
                + PLANNER.PER_PERSON_SECONDS * len(analyses)
                + PLANNER.PER_CANDIDATE_SECONDS * len(candidates)
            ),
        )

        logger.info(
            "Planned cluster %s: %d people, %d replacements (%d feasible), potential=%.2f",
            cluster.cluster_id,
            len(analyses),
            len(replacements),
            len(plan.feasible_replacements),
            plan.overall_improvement_potential,
        )
        return plan

    def replacement_confidence(self, source: FaceQuality, destination: FaceQuality) -> float:
        gain = source.rank - destination.rank
        confidence = PLANNER.CONFIDENCE_SOURCE_WEIGHT * source.rank
        confidence += min(PLANNER.CONFIDENCE_GAIN_CAP, PLANNER.CONFIDENCE_GAIN_FACTOR * gain)
        if source.eye_state.both_open and not destination.eye_state.both_open:
            confidence += PLANNER.CONFIDENCE_EYES_BONUS
        if source.face_angle.is_optimal:
            confidence += PLANNER.CONFIDENCE_ANGLE_BONUS
        return min(1.0, confidence)

    def is_feasible(self, source: FaceQuality, destination: FaceQuality, confidence: float) -> bool:
        return (
            source.face_angle.is_compatible_for_alignment(destination.face_angle)
            and confidence > self.config.min_feasible_confidence
            and source.rank > destination.rank
        )

    def _replacement(
        self,
        analysis: PersonFaceQualityAnalysis,
        base_photo_id: str,
        destination: FaceQuality,
    ) -> PersonFaceReplacement:
        source = analysis.best_face
        confidence = self.replacement_confidence(source, destination)
        return PersonFaceReplacement(
            person_id=analysis.person_id,
            source_face=source,
            destination_photo_id=base_photo_id,
            destination_face=destination,
            improvement_type=ImprovementType.from_issue(destination.primary_issue),
            confidence=confidence,
            is_feasible=self.is_feasible(source, destination, confidence),
        )

    def _analyze(self, photos: Sequence[Photo], identities: Identities) -> List[PersonFaceQualityAnalysis]:
        faces: Dict[str, List[FaceQuality]] = {}
        for photo in photos:
            for person_id, face in faces_by_person(photo, identities[photo.photo_id]).items():
                faces.setdefault(person_id, []).append(face)

        analyses = []
        for person_id in sorted(faces):
            person_faces = faces[person_id]
            if len(person_faces) < 2:
                continue
            # max/min keep the first of equal ranks, i.e. the earliest photo
            best = max(person_faces, key=lambda f: f.rank)
            worst = min(person_faces, key=lambda f: f.rank)
            analyses.append(
                PersonFaceQualityAnalysis(
                    person_id=person_id,
                    all_faces=tuple(person_faces),
                    best_face=best,
                    worst_face=worst,
                    improvement_potential=best.rank - worst.rank,
                )
            )
        return analyses

    def _overall_potential(self, analyses: Sequence[PersonFaceQualityAnalysis]) -> float:
        candidates = [a for a in analyses if self.is_candidate(a)]
        if not candidates:
            return 0.0
        return sum(a.improvement_potential for a in candidates) / len(candidates)

    @staticmethod
    def _people_consistent(people: Sequence[Set[str]]) -> bool:
        """Everyone seen in more than half the photos forms the core group; every photo must share someone with it."""
        counts = Counter(person for persons in people for person in persons)
        majority = {person for person, count in counts.items() if count * 2 > len(people)}
        if not majority:
            return False
        return all(persons & majority for persons in people)

    @staticmethod
    def _ineligible(cluster: PhotoCluster, reason: EligibilityReason) -> PerfectMomentEligibility:
        logger.debug("Cluster %s ineligible: %s", cluster.cluster_id, reason.value)
        return PerfectMomentEligibility.ineligible(reason)
