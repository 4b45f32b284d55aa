"""
Rating Store - canonical star rating per word.

Three tiers back each rating:
1. In-memory map (read path, updated synchronously)
2. Local durable cache (device-wide JSON map under PROGRESS_CACHE_KEY)
3. Remote progress store (per learner, only when an identity is configured)

Effective rating precedence: remote > local cache > 0.
Writes go to memory immediately and are written through to the local cache
and the remote store in the background (best-effort, at-most-once).
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, Mapping, Optional

from core.constants import MIN_STARS, PROGRESS_CACHE_KEY
from core.errors import PersistenceError
from core.progress.database import RemoteProgressStore
from core.progress.local_cache import LocalCache
from core.progress.write_queue import WriteQueue
from core.schemas import Word, clamp_stars

logger = logging.getLogger(__name__)


def merge_ratings(
    remote: Optional[Mapping[str, int]],
    local: Mapping[str, int]
) -> dict[str, int]:
    """
    Merge the local and remote rating maps.

    Remote values win for every word present in both; local values fill
    the gaps; words in neither map are left out (read as 0).
    """
    merged = {word_id: clamp_stars(stars) for word_id, stars in local.items()}
    if remote:
        merged.update({word_id: clamp_stars(stars) for word_id, stars in remote.items()})
    return merged


def parse_progress_map(raw: Optional[str]) -> dict[str, int]:
    """Decode the cached {word_id: stars} JSON, treating corrupt data as empty."""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.info("Ignoring corrupt local progress map")
        return {}
    if not isinstance(data, dict):
        return {}
    return {str(word_id): clamp_stars(stars) for word_id, stars in data.items()}


class RatingStore:
    """
    Owns the star rating of every word for one learner.
    """

    def __init__(
        self,
        local_cache: LocalCache,
        remote: Optional[RemoteProgressStore] = None,
        learner_id: Optional[str] = None,
        write_queue: Optional[WriteQueue] = None,
    ) -> None:
        self._local_cache = local_cache
        self._remote = remote
        self._learner_id = learner_id
        self._write_queue = write_queue or WriteQueue()
        self._ratings: dict[str, int] = {}

    @property
    def remote_enabled(self) -> bool:
        return self._remote is not None and self._learner_id is not None

    def load(self) -> dict[str, int]:
        """
        Populate the in-memory map from the durable tiers.

        A failing tier is logged and skipped; the other tier still applies.
        """
        try:
            local = parse_progress_map(self._local_cache.get(PROGRESS_CACHE_KEY))
        except PersistenceError as e:
            logger.warning("Local progress unavailable: %s", e)
            local = {}

        remote = None
        if self.remote_enabled:
            try:
                remote = self._remote.load_ratings(self._learner_id)
            except PersistenceError as e:
                logger.warning("Remote progress unavailable, using local cache: %s", e)

        self._ratings = merge_ratings(remote, local)
        return dict(self._ratings)

    def get_rating(self, word_id: str) -> int:
        return self._ratings.get(word_id, MIN_STARS)

    def set_rating(self, word_id: str, stars: int) -> int:
        """
        Set a word's rating.

        Out-of-range values are clamped. The in-memory map changes before this
        returns; durable writes are queued.

        Returns:
            The stored (clamped) rating
        """
        stars = clamp_stars(stars)
        self._ratings[word_id] = stars

        payload = json.dumps(self._ratings)
        self._write_queue.submit(
            f"save local progress for {word_id}",
            self._local_cache.set,
            PROGRESS_CACHE_KEY,
            payload,
        )
        if self.remote_enabled:
            self._write_queue.submit(
                f"upsert rating {word_id} for learner {self._learner_id}",
                self._remote.upsert_rating,
                self._learner_id,
                word_id,
                stars,
            )
        return stars

    def attach(self, words: Iterable[Word]) -> list[Word]:
        """Return copies of the words carrying their effective ratings."""
        return [word.with_stars(self.get_rating(word.id)) for word in words]

    def ratings(self) -> dict[str, int]:
        return dict(self._ratings)
