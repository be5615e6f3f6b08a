from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, Iterable, List

from .config import config
from .decorators import requires_active, with_logger
from .entity import DestroyableEntity
from .match import Match
from .participant import Participant
from .validation import (
    MATCH_INDEX_FILTERS,
    PARTICIPANT_FIELDS,
    TOURNAMENT_FIELDS,
    require_any,
    validate_arguments,
    validate_filters
)


class TournamentState(str, Enum):
    PENDING = "pending"
    CHECKING_IN = "checking_in"
    CHECKED_IN = "checked_in"
    IN_PROGRESS = "in_progress"
    ENDED = "ended"


def validate_participant_arguments(args: Mapping) -> Dict[str, Any]:
    data = validate_arguments(args, PARTICIPANT_FIELDS)
    require_any(data, "name", "challonge_username", "email")
    return data


@with_logger
class Tournament(DestroyableEntity):
    """
    A tournament owned by the authenticated user.

    # Lifecycle
    A tournament starts out `pending`. Once check in opens it is
    `checking_in`, and `process_check_ins` moves it to `checked_in`, while
    `abort_check_in` returns it to `pending`. `start` puts it `in_progress`
    (Challonge requires at least two participants) and `finalize` ends it.
    `reset` clears all scores and attachments so the tournament can be edited
    and started again.

    After `destroy` the tournament is gone for good and every further
    operation raises `DestroyedError` without making a request.
    """
    kind = "tournament"
    fields = TOURNAMENT_FIELDS

    @property
    def identifier(self) -> str:
        """The id Challonge uses in request paths, e.g. "subdomain-url" """
        url = self._snapshot.get("url") or self.id
        subdomain = self._snapshot.get("subdomain")
        if subdomain:
            return f"{subdomain}-{url}"
        return str(url)

    @property
    def path(self) -> str:
        return f"/tournaments/{self.identifier}.json"

    @property
    def state(self) -> str:
        return self._snapshot.get("state")

    async def _transition(self, action: str, state: str):
        old_state = self.state
        response = await self.transport.post(
            f"/tournaments/{self.identifier}/{action}.json"
        )
        if not self._store(response):
            self._snapshot["state"] = state

        self._logger.info(
            "Tournament %s: %s -> %s", self.identifier, old_state, self.state
        )
        return self

    @requires_active
    async def process_check_ins(self):
        """
        Mark participants that have not checked in as inactive. Only valid
        while the tournament is checking in.
        """
        return await self._transition(
            "process_check_ins", TournamentState.CHECKED_IN.value
        )

    @requires_active
    async def abort_check_in(self):
        """
        Stop the check in process and return the tournament to `pending`,
        making every participant active and not checked in.
        """
        return await self._transition(
            "abort_check_in", TournamentState.PENDING.value
        )

    @requires_active
    async def start(self):
        return await self._transition(
            "start", TournamentState.IN_PROGRESS.value
        )

    @requires_active
    async def finalize(self):
        """Finalize a tournament whose matches have all been scored"""
        return await self._transition("finalize", TournamentState.ENDED.value)

    @requires_active
    async def reset(self):
        return await self._transition(
            "reset", config.TOURNAMENT_STATE_AFTER_RESET
        )

    @requires_active
    async def participants(self) -> List[Participant]:
        response = await self.transport.get(
            f"/tournaments/{self.identifier}/participants.json"
        )
        return [
            Participant(participant, self.transport)
            for participant in response.json() or []
        ]

    @requires_active
    async def participant(self, participant_id: int) -> Participant:
        response = await self.transport.get(
            f"/tournaments/{self.identifier}/participants/{participant_id}.json"
        )
        return Participant(response.json(), self.transport)

    @requires_active
    async def add_participant(self, args: Mapping) -> Participant:
        data = validate_participant_arguments(args)
        response = await self.transport.post(
            f"/tournaments/{self.identifier}/participants.json",
            json={Participant.kind: data}
        )
        return Participant(response.json(), self.transport)

    @requires_active
    async def bulk_add_participants(
        self,
        participants: Iterable[Mapping]
    ) -> List[Participant]:
        """
        Add several participants in one request. Nothing is sent unless every
        participant is valid.
        """
        data = [validate_participant_arguments(args) for args in participants]
        response = await self.transport.post(
            f"/tournaments/{self.identifier}/participants/bulk_add.json",
            json={"participants": data}
        )
        return [
            Participant(participant, self.transport)
            for participant in response.json() or []
        ]

    @requires_active
    async def randomize_participants(self) -> List[Participant]:
        """Shuffle the seeds. Only possible before the tournament starts."""
        response = await self.transport.post(
            f"/tournaments/{self.identifier}/participants/randomize.json"
        )
        return [
            Participant(participant, self.transport)
            for participant in response.json() or []
        ]

    @requires_active
    async def matches(self, **filters) -> List[Match]:
        params = validate_filters(filters, MATCH_INDEX_FILTERS)
        response = await self.transport.get(
            f"/tournaments/{self.identifier}/matches.json",
            params=params
        )
        return [Match(match, self.transport) for match in response.json() or []]

    @requires_active
    async def match(self, match_id: int) -> Match:
        response = await self.transport.get(
            f"/tournaments/{self.identifier}/matches/{match_id}.json"
        )
        return Match(response.json(), self.transport)
