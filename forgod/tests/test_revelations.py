"""
Tests for the revelation system.
"""

from ..engine_core.dice import ScriptedDiceRoller
from ..engine_core.events import EventType
from ..engine_core.hex import HexCoord
from ..engine_core.revelations import (
    CombatObservation,
    can_complete_revelation,
    complete_revelation,
    draw_revelation,
    draw_revelations,
    process_event_revelations,
)
from ..engine_core.state import GamePhase, HeroState, RevelationSource
from ..engine_core.definitions.revelations import REVELATIONS, REVELATIONS_BY_ID


def hold(state, player_id, *revelation_ids, **changes):
    """Put cards in a hero's hand."""
    player = state.get_player(player_id)
    cards = tuple(REVELATIONS_BY_ID[rid] for rid in revelation_ids)
    return state.with_player(player._copy_with(revelations=cards, **changes))


class TestDeck:
    """Tests for drawing."""

    def test_deck_contents(self):
        """Nine angel and ten demon cards."""
        assert len(REVELATIONS) == 19
        assert sum(1 for r in REVELATIONS if r.source == RevelationSource.ANGEL) == 9
        assert sum(1 for r in REVELATIONS if r.source == RevelationSource.DEMON) == 10

    def test_draw_moves_card(self, game):
        """Drawing moves a card of the source from deck to hand."""
        state, card = draw_revelation(game, "r1", RevelationSource.DEMON, ScriptedDiceRoller(picks=[1]))
        assert card.id == "demon-2"
        assert len(state.revelation_deck) == 18
        assert card not in state.revelation_deck
        assert state.get_player("r1").revelations == (card,)

    def test_draw_from_empty_source(self, game):
        """No matching cards draws nothing."""
        state = game._copy_with(revelation_deck=())
        new_state, card = draw_revelation(state, "r1", RevelationSource.ANGEL, ScriptedDiceRoller())
        assert card is None
        assert new_state is state

    def test_draw_many_stops_when_empty(self, game):
        """draw_revelations stops at an exhausted source."""
        state = game._copy_with(revelation_deck=(REVELATIONS_BY_ID["angel-1"],))
        state, events = draw_revelations(state, "r1", RevelationSource.ANGEL, 3, ScriptedDiceRoller())
        assert len(events) == 1
        assert events[0].event_type == EventType.REVELATION_DRAWN


class TestTaskCards:
    """Tests for action-completed cards."""

    def test_temple_offering(self, game):
        """Angel offerings need the temple and a sacrifice."""
        state = hold(game, "r1", "angel-2", position=HexCoord(0, 0), sacrifices=1)
        result = complete_revelation(state, "r1", "angel-2", ScriptedDiceRoller())

        assert result.success
        rogue = result.state.get_player("r1")
        assert rogue.faith_score == 1
        assert rogue.sacrifices == 0
        assert [r.id for r in rogue.completed_revelations] == ["angel-2"]
        # One extra angel card is drawn from the same source
        assert len(rogue.revelations) == 1
        assert rogue.revelations[0].source == RevelationSource.ANGEL

    def test_offering_needs_sacrifice(self, game):
        state = hold(game, "r1", "angel-2", position=HexCoord(0, 0))
        assert not can_complete_revelation(state, state.get_player("r1"), REVELATIONS_BY_ID["angel-2"])
        result = complete_revelation(state, "r1", "angel-2", ScriptedDiceRoller())
        assert not result.success
        assert result.state is state

    def test_offering_needs_temple(self, game):
        state = hold(game, "r1", "angel-2", sacrifices=1)
        assert not complete_revelation(state, "r1", "angel-2", ScriptedDiceRoller()).success

    def test_castle_tribute_corrupts(self, game):
        """Demon tributes add devil score and corruption."""
        state = hold(game, "r1", "demon-1", position=HexCoord(0, -8), sacrifices=2)
        result = complete_revelation(state, "r1", "demon-1", ScriptedDiceRoller())

        rogue = result.state.get_player("r1")
        assert rogue.state == HeroState.CORRUPT
        assert rogue.corrupt_dice == 1
        assert rogue.devil_score == 1
        assert rogue.sacrifices == 1

    def test_card_not_in_hand(self, game):
        result = complete_revelation(game, "r1", "demon-5", ScriptedDiceRoller())
        assert not result.success

    def test_event_cards_not_completable_by_action(self, game):
        """Event cards complete themselves."""
        state = hold(game, "r1", "demon-4")
        result = complete_revelation(state, "r1", "demon-4", ScriptedDiceRoller())
        assert not result.success

    def test_highest_level(self, game):
        """Growth needs the highest level (ties count)."""
        state = hold(game, "r1", "demon-5")
        assert complete_revelation(state, "r1", "demon-5", ScriptedDiceRoller()).success

    def test_game_end_card(self, game):
        """Slay the Demon King ends the game for its holder."""
        state = hold(game, "r1", "angel-9", position=HexCoord(0, -8), faith_score=5)
        result = complete_revelation(state, "r1", "angel-9", ScriptedDiceRoller())

        assert result.success
        assert result.state.phase == GamePhase.GAME_OVER
        assert result.state.winner_id == "r1"
        assert result.state.victory_type == "revelation"
        assert result.events[-1].event_type == EventType.GAME_OVER


class TestEventCards:
    """Tests for automatically completed cards."""

    def _observe(self, **kwargs):
        base = dict(
            attacker_id="r1",
            target_id="w1",
            target_is_monster=False,
            target_died=False,
            attacker_was_holy=True,
        )
        base.update(kwargs)
        return CombatObservation(**base)

    def test_first_strike(self, game):
        """Attacking a hero while holy completes First Strike."""
        state = hold(game, "r1", "demon-4")
        state, events = process_event_revelations(state, self._observe(), ScriptedDiceRoller())

        rogue = state.get_player("r1")
        assert "demon-4" in [r.id for r in rogue.completed_revelations]
        assert rogue.corrupt_dice == 2
        assert rogue.is_corrupt
        assert events[0].event_type == EventType.REVELATION_COMPLETED

    def test_village_raid_needs_village(self, game):
        state = hold(game, "r1", "demon-6")
        state, events = process_event_revelations(state, self._observe(), ScriptedDiceRoller())
        assert events == []

        state, events = process_event_revelations(
            state, self._observe(target_on_village=True), ScriptedDiceRoller(),
        )
        assert events[0].revelation_id == "demon-6"

    def test_slay_balrog_ends_game(self, game):
        """Killing the balrog while holy with Slay the Balrog wins."""
        state = hold(game, "r1", "angel-6")
        observation = self._observe(target_id="balrog", target_is_monster=True, target_died=True)
        state, events = process_event_revelations(state, observation, ScriptedDiceRoller())

        assert state.is_game_over
        assert state.winner_id == "r1"

    def test_other_hero_cards_untouched(self, game):
        """Only the attacker's hand is checked."""
        state = hold(game, "w1", "demon-4")
        state, events = process_event_revelations(state, self._observe(), ScriptedDiceRoller())
        assert events == []
        assert state.get_player("w1").has_revelation("demon-4")
