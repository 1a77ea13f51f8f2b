"""
Selection session for interactive callers.

Tracks the two picked features and the hybrid computed for them:

    no_selection -> one_selected -> both_selected (hybrid computed)
                 <- clear() ------------------------

Every change of selection bumps a generation counter. A result is only
committed when the request that produced it still carries the latest
generation, so a slow, stale computation can never overwrite the hybrid of
a newer pair.
"""

from dataclasses import dataclass
from enum import Enum

from shapeblend.config import load_config
from shapeblend.geo.projection import make_projection
from shapeblend.pipeline import hybridize_by_name
from shapeblend.tracer import get_tracer


class SelectionState(str, Enum):
    """Where the session is in the pick-two lifecycle."""
    NO_SELECTION = "no_selection"
    ONE_SELECTED = "one_selected"
    BOTH_SELECTED = "both_selected"


@dataclass(frozen=True)
class HybridRequest:
    """Snapshot of the pair a computation was started for."""
    generation: int
    first: str
    second: str


class HybridSession:
    """
    Selection state plus the last committed hybrid.

    The session never computes incrementally: every committed result comes
    from a full pipeline run for one exact pair.
    """

    def __init__(self, catalog, project=None, config=None):
        self.catalog = catalog
        self.config = config or load_config()
        self.project = project or make_projection(self.config.projection)
        self.first = None
        self.second = None
        self.result = None
        self._generation = 0

    @property
    def generation(self):
        return self._generation

    @property
    def state(self):
        picked = sum(1 for name in (self.first, self.second) if name)
        if picked == 2:
            return SelectionState.BOTH_SELECTED
        if picked == 1:
            return SelectionState.ONE_SELECTED
        return SelectionState.NO_SELECTION

    def _changed(self):
        self._generation += 1
        self.result = None
        get_tracer().event(
            f"Selection changed: first={self.first!r} second={self.second!r} state={self.state.value}",
            level="DEBUG",
        )

    def select_first(self, name):
        self.first = name or None
        self._changed()

    def select_second(self, name):
        self.second = name or None
        self._changed()

    def clear(self):
        self.first = None
        self.second = None
        self._changed()

    def begin_request(self):
        """Snapshot the current pair, or None when fewer than two are picked."""
        if self.state != SelectionState.BOTH_SELECTED:
            return None
        return HybridRequest(self._generation, self.first, self.second)

    def is_current(self, request):
        return (
            request is not None
            and request.generation == self._generation
            and (request.first, request.second) == (self.first, self.second)
        )

    def commit(self, request, result):
        """
        Store result if request is still the latest one.

        Returns:
            True when committed, False when the result was stale and dropped
        """
        if not self.is_current(request):
            get_tracer().event(
                f"Discarding stale hybrid for generation {getattr(request, 'generation', None)} "
                f"(current {self._generation})",
                level="DEBUG",
            )
            return False

        self.result = result
        return True

    def refresh(self):
        """
        Recompute the hybrid for the current pair and commit it.

        Returns the committed HybridResult, or None with fewer than two picks.
        """
        request = self.begin_request()
        if request is None:
            return None

        result = hybridize_by_name(
            self.catalog, request.first, request.second,
            project=self.project, config=self.config,
        )
        self.commit(request, result)
        return self.result
