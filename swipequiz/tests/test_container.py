"""
Tests for the state container.

Tests:
- Default snapshot
- One notification per update
- Snapshots are replaced, never mutated
- Subscription management
"""

from ..engine_core.container import StateContainer
from ..engine_core.state import GameState


class TestStateContainer:
    """Tests for StateContainer."""

    def test_initial_state(self):
        """Starts with no game and loading."""
        container = StateContainer()

        assert container.state == GameState(game=None, is_loading=True)
        assert container.initialize() == container.state

    def test_update_notifies_once(self, two_card_game):
        """Several field changes in one update produce one notification."""
        container = StateContainer()
        seen = []
        container.subscribe(seen.append)

        def apply(draft):
            draft.game = two_card_game
            draft.is_loading = False

        container.update(apply)

        assert len(seen) == 1
        assert seen[0].game == two_card_game
        assert seen[0].is_loading is False

    def test_noop_update_still_notifies(self):
        """An update that changes nothing still commits and notifies."""
        container = StateContainer()
        seen = []
        container.subscribe(seen.append)

        container.update(lambda draft: None)

        assert len(seen) == 1
        assert seen[0] == container.state

    def test_observers_see_complete_snapshot(self, two_card_game):
        """Observers never see game set without loading cleared."""
        container = StateContainer()
        seen = []
        container.subscribe(lambda s: seen.append((s.game is not None, s.is_loading)))

        def apply(draft):
            draft.game = two_card_game
            draft.is_loading = False

        container.update(apply)

        assert seen == [(True, False)]

    def test_snapshot_replaced_not_mutated(self, two_card_game):
        """Old snapshots keep their values."""
        container = StateContainer()
        before = container.state

        def apply(draft):
            draft.game = two_card_game
            draft.is_loading = False

        after = container.update(apply)

        assert before is not after
        assert before.game is None
        assert before.is_loading is True
        assert container.state is after

    def test_unsubscribe(self):
        """Unsubscribed observers get no more snapshots."""
        container = StateContainer()
        seen = []
        unsubscribe = container.subscribe(seen.append)

        container.update(lambda draft: None)
        unsubscribe()
        container.update(lambda draft: None)

        assert len(seen) == 1

    def test_clear_observers(self):
        """clear_observers drops everyone."""
        container = StateContainer()
        seen = []
        container.subscribe(seen.append)
        container.subscribe(seen.append)

        container.clear_observers()
        container.update(lambda draft: None)

        assert seen == []
