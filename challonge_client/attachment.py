from collections.abc import Mapping
from typing import Any, Dict

from .decorators import requires_active, with_logger
from .entity import DestroyableEntity
from .transport import Transport
from .validation import ATTACHMENT_FIELDS, require_any, validate_arguments


def validate_attachment_arguments(args: Mapping) -> Dict[str, Any]:
    """An attachment needs at least a url or a description"""
    data = validate_arguments(args, ATTACHMENT_FIELDS)
    require_any(data, "url", "description")
    return data


@with_logger
class Attachment(DestroyableEntity):
    """
    A link or a description attached to a match. The match must belong to a
    tournament that accepts attachments.
    """
    kind = "match_attachment"
    fields = ATTACHMENT_FIELDS

    def __init__(
        self,
        snapshot: Dict[str, Any],
        transport: Transport,
        tournament_id: Any
    ):
        super().__init__(snapshot, transport)
        # Challonge does not include the tournament in the attachment itself
        self.tournament_id = tournament_id

    @property
    def match_id(self):
        return self._snapshot.get("match_id")

    @property
    def path(self) -> str:
        return (
            f"/tournaments/{self.tournament_id}/matches/{self.match_id}"
            f"/attachments/{self.id}.json"
        )

    @requires_active
    async def update(self, args: Mapping):
        data = validate_attachment_arguments(args)
        response = await self.transport.put(self.path, json={self.kind: data})
        self._store(response)
        return self
