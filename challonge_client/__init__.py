"""
Asynchronous client for the Challonge tournament API.

# Overview
Challonge (https://challonge.com) hosts brackets for single and double
elimination, round robin and swiss tournaments. This package wraps its v1 REST
API (https://api.challonge.com/v1) in a small set of objects, one per kind of
resource:

- `Challonge`, the entry point, lists, shows and creates tournaments
- `Tournament` manages participants and matches, and moves the tournament
  through its lifecycle
- `Participant` can be updated, checked in and removed
- `Match` takes score reports and owns its attachments
- `Attachment` is a link or description attached to a match

Every object keeps a snapshot of the resource as Challonge last returned it.
Operations make at most one request and replace the snapshot with the
response.

## Validation
Arguments are checked before anything is sent. Known arguments with invalid
values raise `ValidationError`, unknown arguments are logged and dropped.
Match winners are never reported directly: they are worked out from the game
scores.

## Errors
Requests that Challonge rejects raise `ChallongeException`, with every error
message reported by the server. Operations on a destroyed entity raise
`DestroyedError` without making a request.

# Examples
    async with Challonge(api_key) as challonge:
        tournament = await challonge.create({
            "name": "Sample Tournament",
            "url": "sample_tournament_1",
        })
        await tournament.add_participant({"name": "alice"})
        await tournament.add_participant({"name": "bob"})
        await tournament.start()

        match, = await tournament.matches(state="open")
        await match.update(["3-1", "3-2", "1-3"])
"""

from .attachment import Attachment
from .client import Challonge
from .config import TIE, config
from .entity import Lifecycle
from .exceptions import (
    ChallongeError,
    ChallongeException,
    DestroyedError,
    InvalidApiKeyError,
    ValidationError
)
from .match import Match
from .participant import Participant
from .tournament import Tournament, TournamentState
from .transport import Response, Transport

__version__ = "0.1.0"
__author__ = "Alex Kerr"
__license__ = "Artistic-2.0"

__all__ = (
    "Attachment",
    "Challonge",
    "ChallongeError",
    "ChallongeException",
    "DestroyedError",
    "InvalidApiKeyError",
    "Lifecycle",
    "Match",
    "Participant",
    "Response",
    "TIE",
    "Tournament",
    "TournamentState",
    "Transport",
    "ValidationError",
    "config",
)
