from .decorators import requires_active, with_logger
from .entity import DestroyableEntity
from .validation import PARTICIPANT_FIELDS


@with_logger
class Participant(DestroyableEntity):
    """
    A participant of a tournament.

    Destroying a participant before the tournament has started removes it and
    fills in its seed. Once the tournament is underway Challonge marks it
    inactive instead and forfeits its remaining matches.
    """
    kind = "participant"
    fields = PARTICIPANT_FIELDS

    @property
    def tournament_id(self):
        return self._snapshot.get("tournament_id")

    @property
    def path(self) -> str:
        return f"/tournaments/{self.tournament_id}/participants/{self.id}.json"

    @requires_active
    async def check_in(self):
        """Check the participant in, during the tournament's check in window"""
        response = await self.transport.post(
            f"/tournaments/{self.tournament_id}/participants/{self.id}/check_in.json"
        )
        if not self._store(response):
            self._snapshot["checked_in"] = True
        return self

    @requires_active
    async def undo_check_in(self):
        response = await self.transport.post(
            f"/tournaments/{self.tournament_id}/participants/{self.id}/undo_check_in.json"
        )
        if not self._store(response):
            self._snapshot["checked_in"] = False
        return self
