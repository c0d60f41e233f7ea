from game_context import GameContext


def _result(outcome, scores):
    return {"minigame": "needle_stop", "outcome": outcome, "details": {"scores": scores}}


def test_empty_result_is_ignored():
    ctx = GameContext()
    ctx.apply_result()
    assert ctx.stats["rounds"] == 0
    assert ctx.stats["best_score"] is None


def test_single_player_rounds():
    ctx = GameContext()
    ctx.last_result = _result("scored", [72, None])
    ctx.apply_result()
    ctx.last_result = _result("perfect", [100, None])
    ctx.apply_result()
    ctx.last_result = _result("scored", [40, None])
    ctx.apply_result()
    assert ctx.stats["rounds"] == 3
    assert ctx.stats["best_score"] == 100
    assert ctx.stats["perfects"] == 1
    assert ctx.stats["wins"] == [0, 0]


def test_two_player_results():
    ctx = GameContext()
    for outcome, scores in (
        ("player1", [90, 67]),
        ("player2", [10, 100]),
        ("tie", [50, 50]),
        ("player2", [0, 3]),
    ):
        ctx.last_result = _result(outcome, scores)
        ctx.apply_result()
    assert ctx.stats["wins"] == [1, 2]
    assert ctx.stats["ties"] == 1
    assert ctx.stats["perfects"] == 1
    assert "wins=1-2" in repr(ctx)


def test_quit_without_scores_does_not_count():
    ctx = GameContext()
    ctx.last_result = {"minigame": "needle_stop", "outcome": "quit", "details": {}}
    ctx.apply_result()
    assert ctx.stats["rounds"] == 0


def test_playtime():
    ctx = GameContext()
    ctx.add_playtime(0.5)
    ctx.add_playtime(0.25)
    assert ctx.summary()["stats"]["total_time"] == 0.75
