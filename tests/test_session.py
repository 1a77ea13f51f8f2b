"""Tests for the selection session."""

import pytest

from shapeblend.geo.catalog import FeatureCatalog
from shapeblend.models import HybridStatus
from shapeblend.session import HybridSession, SelectionState

from conftest import identity_projection


@pytest.fixture
def session(sample_features, small_config):
    return HybridSession(FeatureCatalog(sample_features), project=identity_projection, config=small_config)


class TestSelectionState:
    """Tests for the pick-two lifecycle."""

    def test_starts_empty(self, session):
        assert session.state == SelectionState.NO_SELECTION
        assert session.generation == 0
        assert session.begin_request() is None

    def test_one_then_two(self, session):
        session.select_first("Squareland")
        assert session.state == SelectionState.ONE_SELECTED

        session.select_second("Trianglia")
        assert session.state == SelectionState.BOTH_SELECTED
        assert session.generation == 2

    def test_second_only_counts_as_one(self, session):
        session.select_second("Trianglia")

        assert session.state == SelectionState.ONE_SELECTED
        assert session.refresh() is None

    def test_clear(self, session):
        session.select_first("Squareland")
        session.select_second("Trianglia")
        session.refresh()

        session.clear()

        assert session.state == SelectionState.NO_SELECTION
        assert session.result is None
        assert session.first is None and session.second is None

    def test_empty_name_deselects(self, session):
        session.select_first("Squareland")
        session.select_first("")

        assert session.state == SelectionState.NO_SELECTION


class TestCommit:
    """Tests for last-selection-wins result handling."""

    def test_refresh_computes_hybrid(self, session):
        session.select_first("Squareland")
        session.select_second("Trianglia")

        result = session.refresh()

        assert result is session.result
        assert result.status == HybridStatus.OK
        assert result.names == ["Squareland", "Trianglia"]

    def test_stale_result_discarded(self, session):
        session.select_first("Squareland")
        session.select_second("Trianglia")
        stale = session.begin_request()

        session.select_second("Octagonia")
        current = session.begin_request()

        assert session.commit(current, "newest") is True
        assert session.commit(stale, "older") is False
        assert session.result == "newest"

    def test_reselecting_same_pair_still_invalidates(self, session):
        session.select_first("Squareland")
        session.select_second("Trianglia")
        request = session.begin_request()

        session.select_second("Trianglia")

        assert not session.is_current(request)
        assert session.commit(request, "late") is False
        assert session.result is None

    def test_selection_change_drops_result(self, session):
        session.select_first("Squareland")
        session.select_second("Trianglia")
        session.refresh()

        session.select_first("Octagonia")

        assert session.result is None

    def test_commit_none_request(self, session):
        assert session.commit(None, "anything") is False

    def test_missing_feature_committed_as_not_found(self, session):
        session.select_first("Squareland")
        session.select_second("Atlantis")

        result = session.refresh()

        assert result.status == HybridStatus.NOT_FOUND
        assert result.is_empty
