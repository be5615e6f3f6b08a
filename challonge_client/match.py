from collections.abc import Mapping
from typing import Any, Dict, List, Sequence, Union

from .attachment import Attachment, validate_attachment_arguments
from .decorators import requires_active, with_logger
from .entity import Entity
from .scores import resolve_winner
from .validation import validate_match_arguments


@with_logger
class Match(Entity):
    """
    A match between two participants of a tournament.

    Scores are reported as one "x-y" string per game, x being player 1's
    score. The winner is always worked out from the scores and can not be
    given directly. Challonge does not delete matches, so there is no
    `destroy`.
    """
    kind = "match"

    @property
    def tournament_id(self):
        return self._snapshot.get("tournament_id")

    @property
    def path(self) -> str:
        return f"/tournaments/{self.tournament_id}/matches/{self.id}.json"

    @property
    def attachments_path(self) -> str:
        return f"/tournaments/{self.tournament_id}/matches/{self.id}/attachments"

    @requires_active
    async def update(self, args: Union[Sequence[str], Mapping]):
        """
        Report the scores of the match.

        `args` is either a list of scores, or a mapping holding `scores_csv`
        and optionally `player1_votes` and `player2_votes`.

        # Examples
            await match.update(["1-3", "3-2", "3-0"])
            await match.update({
                "scores_csv": ["1-3", "3-2", "3-0"],
                "player1_votes": 2,
            })
        """
        scores, votes = validate_match_arguments(args)

        winner_id = resolve_winner(
            scores,
            self._snapshot.get("player1_id"),
            self._snapshot.get("player2_id")
        )
        data: Dict[str, Any] = {
            "winner_id": winner_id,
            "scores_csv": ",".join(scores),
        }
        data.update(votes)

        self._logger.debug(
            "Reporting scores %s for match %s, winner %s",
            data["scores_csv"], self.id, winner_id
        )
        response = await self.transport.put(self.path, json={self.kind: data})
        self._store(response)
        return self

    @requires_active
    async def attachments(self) -> List[Attachment]:
        response = await self.transport.get(f"{self.attachments_path}.json")
        return [
            Attachment(attachment, self.transport, self.tournament_id)
            for attachment in response.json() or []
        ]

    @requires_active
    async def attachment(self, attachment_id: int) -> Attachment:
        response = await self.transport.get(
            f"{self.attachments_path}/{attachment_id}.json"
        )
        return Attachment(response.json(), self.transport, self.tournament_id)

    @requires_active
    async def add_attachment(self, args: Mapping) -> Attachment:
        """
        Attach a url and/or a description to the match.
        """
        data = validate_attachment_arguments(args)
        response = await self.transport.post(
            f"{self.attachments_path}.json",
            json={Attachment.kind: data}
        )
        return Attachment(response.json(), self.transport, self.tournament_id)
