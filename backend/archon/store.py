import logging
import threading

from archon.agent.artifacts import ArchitectureReview

logger = logging.getLogger(__name__)


class ReviewStore:
    """
    Process-lifetime review storage keyed by review id.
    Safe to share between concurrent requests; everything is lost on restart.

    Reviews are copied on the way in and on the way out, so a stored review
    cannot be changed through an object a caller still holds.
    """

    def __init__(self) -> None:
        self._reviews: dict[str, ArchitectureReview] = {}
        self._lock = threading.Lock()

    def save(self, review: ArchitectureReview) -> None:
        snapshot = review.model_copy(deep=True)
        with self._lock:
            self._reviews[snapshot.id] = snapshot
        logger.info("Stored review %s", snapshot.id)

    def find_by_id(self, review_id: str) -> ArchitectureReview | None:
        with self._lock:
            review = self._reviews.get(review_id)
        return review.model_copy(deep=True) if review is not None else None

    def find_all(self) -> list[ArchitectureReview]:
        with self._lock:
            reviews = list(self._reviews.values())
        return [review.model_copy(deep=True) for review in reviews]

    def __len__(self) -> int:
        with self._lock:
            return len(self._reviews)
