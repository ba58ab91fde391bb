from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional


@dataclass
class ScoreRow:
    """A score record joined with the username of its owner"""

    record_id: int
    user_id: int
    username: str
    quiz_id: int
    score: int
    created_at: Optional[datetime] = None


@dataclass
class LeaderboardEntry:
    username: str
    score: int
    rank: int


def _tiebreak_key(row: ScoreRow):
    # Rows without a timestamp sort after timestamped ones, then by id
    return (row.created_at is None, row.created_at or datetime.min, row.record_id)


def dense_rank(scores: List[int]) -> List[int]:
    """
    Assign dense ranks to scores that are already sorted in descending order.

    Tied scores share a rank and the next distinct score gets the previous
    rank plus one: [50, 50, 30] -> [1, 1, 2].
    """
    ranks: List[int] = []
    previous = None
    rank = 0
    for score in scores:
        if previous is None or score != previous:
            rank += 1
            previous = score
        ranks.append(rank)
    return ranks


class LeaderboardEngine:
    """Builds ranked standings out of raw score records"""

    def __init__(self, excluded_username: Optional[str] = "testuser", limit: int = 10):
        self.excluded_username = excluded_username
        self.limit = limit

    def _eligible(self, rows: Iterable[ScoreRow]) -> List[ScoreRow]:
        return [row for row in rows if row.username != self.excluded_username]

    def _rank(self, ordered: List[tuple]) -> List[LeaderboardEntry]:
        ranks = dense_rank([score for _, score in ordered])
        entries = [
            LeaderboardEntry(username=username, score=score, rank=rank)
            for (username, score), rank in zip(ordered, ranks)
        ]
        return entries[: self.limit]

    def compute_global(self, rows: Iterable[ScoreRow]) -> List[LeaderboardEntry]:
        """
        Sum every record per user and rank users by their total.

        Repeated attempts at the same quiz are all counted.
        """
        totals: Dict[int, int] = {}
        first_seen: Dict[int, ScoreRow] = {}
        usernames: Dict[int, str] = {}

        for row in self._eligible(rows):
            totals[row.user_id] = totals.get(row.user_id, 0) + row.score
            usernames[row.user_id] = row.username
            earliest = first_seen.get(row.user_id)
            if earliest is None or _tiebreak_key(row) < _tiebreak_key(earliest):
                first_seen[row.user_id] = row

        user_ids = sorted(
            totals,
            key=lambda uid: (-totals[uid], _tiebreak_key(first_seen[uid])),
        )
        return self._rank([(usernames[uid], totals[uid]) for uid in user_ids])

    def compute_per_quiz(
        self, rows: Iterable[ScoreRow], quiz_id: int
    ) -> List[LeaderboardEntry]:
        """Rank individual records of one quiz without summing attempts"""
        quiz_rows = [row for row in self._eligible(rows) if row.quiz_id == quiz_id]
        quiz_rows.sort(key=lambda row: (-row.score, _tiebreak_key(row)))
        return self._rank([(row.username, row.score) for row in quiz_rows])
