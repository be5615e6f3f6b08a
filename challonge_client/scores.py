"""
Match outcome derived from per game score strings
"""

from typing import Any, Iterable, Tuple

from .config import TIE


def parse_score(score: str) -> Tuple[int, int]:
    """
    Split an "x-y" score into the two players' points. A missing side counts
    as zero.

    # Examples
    >>> parse_score("3-1")
    (3, 1)
    >>> parse_score("-2")
    (0, 2)
    """
    player1, player2 = score.split("-")
    return int(player1 or 0), int(player2 or 0)


def tally(scores: Iterable[str]) -> Tuple[int, int]:
    """
    Count the games won by each player. A drawn game counts for neither.
    """
    player1_wins = player2_wins = 0
    for score in scores:
        player1, player2 = parse_score(score)
        if player1 > player2:
            player1_wins += 1
        elif player1 < player2:
            player2_wins += 1

    return player1_wins, player2_wins


def resolve_winner(scores: Iterable[str], player1_id: Any, player2_id: Any):
    """
    Return the id of the player that won the most games, or `TIE` when both
    won the same number. No games at all is a tie.

    # Examples
    >>> resolve_winner(["3-1", "3-2", "1-3"], 10, 20)
    10
    >>> resolve_winner([], 10, 20)
    'tie'
    """
    player1_wins, player2_wins = tally(scores)
    if player1_wins > player2_wins:
        return player1_id
    if player2_wins > player1_wins:
        return player2_id
    return TIE
