import heapq
import itertools
from collections import namedtuple

__all__ = ["Candidate", "Frontier", "generate_frontier"]

Candidate = namedtuple("Candidate", ("col", "row", "friction", "cost"))
Candidate.__doc__ = """A proposed relaxation of a cost cell.

The friction at ``(col, row)`` is carried along so that it does not need to
be read again when the candidate is processed.
"""


class Frontier:
    """Min-priority queue of :class:`Candidate` records keyed on cost.

    Several candidates for the same cell may be queued at once. Candidates
    with equal cost come out in the order they were inserted.
    """

    __slots__ = ("_heap", "_counter")

    def __init__(self, candidates=()):
        self._heap = []
        self._counter = itertools.count()
        for candidate in candidates:
            self.insert(candidate)

    def insert(self, candidate):
        candidate = Candidate(*candidate)
        heapq.heappush(
            self._heap, (candidate.cost, next(self._counter), candidate)
        )

    def extract_min(self):
        if not self._heap:
            raise IndexError("extract_min from an empty frontier")
        return heapq.heappop(self._heap)[-1]

    def is_empty(self):
        return not self._heap

    def __len__(self):
        return len(self._heap)

    def __bool__(self):
        return bool(self._heap)

    def __repr__(self):
        return f"Frontier(size={len(self._heap)})"


def generate_frontier(friction, sources=()):
    """Build a frontier seeded with zero-cost candidates at `sources`.

    Parameters
    ----------
    friction : Grid
        The friction grid. Used to look up the friction at each source.
    sources : sequence of (col, row)
        The source cells. These are assumed to be inside `friction`.

    Returns
    -------
    Frontier

    """
    return Frontier(
        Candidate(col, row, friction.get_value(col, row), 0.0)
        for col, row in sources
    )
