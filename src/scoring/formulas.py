"""
Round Scoring Formulas

Pure arithmetic used to turn a round's raw inputs into scores:
- value_factor: quadratic weighting of a player's raw value
- raw_score: a player's score from their own inputs and the round aggregate
- zero-sum correction: the round winner absorbs the residual
"""


def value_factor(value):
    """
    Quadratic weighting of a raw round value: (v^2 + 3v) / 2.

    value_factor(0) == 0 and the function is strictly increasing for v >= 0.
    v * (v + 3) is always even, so integer values give integer factors.
    """
    return (value * value + 3 * value) / 2


def total_value_factor(values):
    """Sum of value factors over all players of a round (TVF)."""
    return sum(value_factor(v) for v in values)


def raw_score(total_players, total_value_factor, player_value_factor, player_points):
    """
    Score of one player before the winner correction.

    Applied to every player, including the winner (whose points are 0).
    """
    return player_value_factor * total_players - (total_value_factor + player_points)


def apply_winner_correction(raw_scores, winner):
    """
    Overwrite the winner's score so the round sums to zero.

    Args:
        raw_scores: Per-player raw scores
        winner: Index of the round winner

    Returns:
        New list where scores[winner] == -(sum of every other score)
    """
    scores = list(raw_scores)
    sum_of_others = sum(score for i, score in enumerate(scores) if i != winner)
    scores[winner] = -sum_of_others
    return scores
