"""
Perfect Moment Example

Plans face replacements for one burst and hands them to a compositor.
The compositor here only records what it was asked to do; a real one
would align and blend pixels and raise AlignmentFailedError or
BlendFailedError when it cannot.
"""

import logging

from photocurator import CurationPipeline
from photocurator.shared.exceptions import AlignmentFailedError
from photocurator.utils import load_collection

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


class RecordingCompositor:
    def composite(self, replacement):
        if not replacement.source_face.face_angle.is_optimal:
            raise AlignmentFailedError(replacement.person_id, "source face is turned away")
        return (
            f"{replacement.destination_photo_id} with {replacement.person_id}'s face "
            f"from {replacement.source_face.photo_id}"
        )


def main():
    collection = load_collection("photos/collection.json")
    pipeline = CurationPipeline()
    result = pipeline.run(collection.photos, collection.observations, collection.identities)

    for plan in result.plans:
        if not plan.eligibility.is_eligible:
            continue

        print(f"\n{plan.cluster_id}: base photo {plan.base_photo_id}")
        for outcome in pipeline.apply_replacements(plan, RecordingCompositor()):
            if outcome.succeeded:
                print(f"  ✓ {outcome.composite}")
            else:
                print(f"  ✗ {outcome.error}")


if __name__ == "__main__":
    main()
