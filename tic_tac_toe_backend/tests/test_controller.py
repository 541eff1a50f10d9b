"""Tests for the front-end facing controller."""

import asyncio
import random

from tictactoe import core
from tictactoe.controller import GameController, checked_difficulty
from tictactoe.database import HISTORY_KEY, SCORES_KEY, MemoryStore
from tictactoe.models import MoveRecord, Scores, Tally


def test_unknown_difficulty_falls_back_to_medium():
    assert checked_difficulty('hard') == 'hard'
    assert checked_difficulty('easy') == 'easy'
    assert checked_difficulty('bogus') == 'medium'
    assert checked_difficulty(None) == 'medium'


def test_unknown_difficulty_still_lets_the_ai_answer():
    controller = GameController(difficulty='bogus', think_delay=0, rng=random.Random(3))

    async def scenario():
        assert await controller.make_move(4)
        await controller.settle()
        game = controller.game()
        assert len(game.moves) == 2
        assert game.state == 'awaiting_move'
        assert game.current_player == 'X'

        assert await controller.make_move(core.empty_cells(controller.session.board)[0])
        await controller.settle()
        assert len(controller.game().moves) == 4

    asyncio.run(scenario())
    assert controller.settings().difficulty == 'medium'


def test_unknown_difficulty_with_ai_opening():
    controller = GameController(difficulty='bogus', think_delay=0)
    controller.select_player_mark('O')
    assert len(controller.game().moves) == 1
    assert controller.game().current_player == 'O'


def test_select_difficulty_rejects_unknown_level():
    controller = GameController(think_delay=0)
    controller.select_difficulty('hard')
    assert controller.session.difficulty == 'hard'
    controller.select_difficulty('impossible')
    assert controller.settings().difficulty == 'medium'
    assert controller.session.difficulty == 'medium'


def test_undo_after_unreadable_history_keeps_saved_tallies():
    saved = Scores(single=Tally(X=5, O=2), multi=Tally(X=3))
    store = MemoryStore({
        HISTORY_KEY: "{not json",
        SCORES_KEY: saved.model_dump_json(),
    })
    controller = GameController(store=store, think_delay=0)

    async def scenario():
        await controller.load()
        assert controller.history == []
        session = controller.session
        session.moves = [
            MoveRecord(mark=mark, index=index)
            for mark, index in [('X', 0), ('O', 3), ('X', 1), ('O', 4)]
        ]
        session.board = core.replay(session.moves)
        session.current_player = 'X'

        assert await controller.make_move(2)
        assert controller.scores.single.X == 6
        assert await controller.undo_move()

    asyncio.run(scenario())
    assert controller.scores == saved
    assert controller.history == []
    assert Scores.model_validate_json(store.data[SCORES_KEY]) == saved


def test_settings_are_written_through_and_loaded():
    store = MemoryStore()

    async def scenario():
        first = GameController(store=store, think_delay=0)
        await first.set_player_name('O', "Grace")
        await first.set_sound_enabled(False)

        second = GameController(store=store, think_delay=0)
        await second.load()
        return second

    controller = asyncio.run(scenario())
    assert controller.names.o_name == "Grace"
    assert controller.settings().sound_enabled is False
