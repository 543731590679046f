"""
Async Usage Example - curate_photos_async()

Face detection usually runs on a remote model. Any object with an
``async def detect(photo)`` method can be passed as the detector; photos
are detected concurrently and scored in worker threads.
"""

import asyncio
import logging
from datetime import datetime, timedelta

from photocurator import FaceObservation, Photo, curate_photos_async

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


class RemoteDetector:
    """Stand-in for a network face detection client."""

    async def detect(self, photo):
        await asyncio.sleep(0.1)
        return [
            FaceObservation(
                face_index=0,
                bounding_box=(0.35, 0.25, 0.3, 0.4),
                yaw=5.0,
                capture_quality=0.6 + 0.1 * int(photo.photo_id[-1]),
            )
        ]


async def main():
    start = datetime(2024, 6, 1, 18, 0, 0)
    photos = [
        Photo(photo_id=f"IMG_000{i}", timestamp=start + timedelta(seconds=i), fingerprint=bytes(8))
        for i in range(1, 4)
    ]

    result = await curate_photos_async(photos, detector=RemoteDetector())

    for ranking in result.rankings:
        print(f"{ranking.cluster_id}: {ranking.representative_id}")
        for ranked in ranking.top(3):
            print(f"  {ranked.rank}. {ranked.photo_id} ({ranked.score:.3f})")


if __name__ == "__main__":
    asyncio.run(main())
