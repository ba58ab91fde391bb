from typing import Iterable, Optional, Set


class AttemptTracker:
    """
    Tracks which quizzes each user has already attempted.

    Built from score records; a quiz counts as taken as soon as one record
    exists for the (user, quiz) pair. Used only to gate new sessions, never
    to deduplicate leaderboard totals.
    """

    def __init__(self, records: Optional[Iterable] = None):
        self._taken = {}
        for record in records or []:
            self.mark_taken(record.user_id, record.quiz_id)

    def taken_quiz_ids(self, user_id: int) -> Set[int]:
        return set(self._taken.get(user_id, set()))

    def has_taken(self, user_id: int, quiz_id: int) -> bool:
        return quiz_id in self._taken.get(user_id, set())

    def mark_taken(self, user_id: int, quiz_id: int) -> None:
        self._taken.setdefault(user_id, set()).add(quiz_id)

    def clear(self) -> None:
        self._taken.clear()
