import pytest

from minigames.needle_stop.scoring import (
    resolve_winner,
    score_angle,
    score_text,
    turn_text,
    winner_text,
)


def test_perfect_and_edges():
    assert score_angle(90) == 100
    assert score_angle(0) == 0
    assert score_angle(180) == 0


@pytest.mark.parametrize("d", [0, 0.4, 1, 13.5, 30, 45, 89.9, 90])
def test_symmetric(d):
    assert score_angle(90 + d) == score_angle(90 - d)


def test_non_increasing_away_from_center():
    scores = [score_angle(90 + d / 4) for d in range(0, 361)]
    assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_only_center_scores_full_marks():
    assert score_angle(90.4) == 100  # rounds to 100
    assert score_angle(91) == 99
    assert score_angle(60) == 67


def test_out_of_range_is_clamped():
    assert score_angle(-30) == 0
    assert score_angle(400) == 0


def test_resolve_winner():
    assert resolve_winner(100, 67) == 0
    assert resolve_winner(12, 80) == 1
    assert resolve_winner(50, 50) is None


def test_texts():
    assert score_text(72) == "Your Score: 72"
    assert score_text(72, 1) == "Player 2 Score: 72"
    assert turn_text(0) == "Player 1's Turn"
    assert winner_text(0) == "Player 1 Wins!"
    assert winner_text(1) == "Player 2 Wins!"
    assert winner_text(None) == "It's a Tie!"
