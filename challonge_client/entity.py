from collections.abc import Mapping
from enum import Enum, unique
from typing import Any, Dict, Optional

from .decorators import requires_active, with_logger
from .transport import Response, Transport
from .validation import Schema, validate_arguments


@unique
class Lifecycle(Enum):
    ACTIVE = 1
    DESTROYED = 2


@with_logger
class Entity:
    """
    Base class for objects backed by a Challonge resource.

    Holds the snapshot of the resource as it was last returned by Challonge.
    Reading the snapshot never makes a request, `attributes` always does.
    """
    # Key the resource is wrapped in by the API, e.g. {"tournament": {...}}
    kind = "entity"
    fields: Schema = {}

    def __init__(self, snapshot: Dict[str, Any], transport: Transport):
        self._snapshot = self.unwrap(snapshot)
        self.transport = transport
        self.lifecycle = Lifecycle.ACTIVE

    @classmethod
    def unwrap(cls, payload: Any) -> Dict[str, Any]:
        if isinstance(payload, Mapping) and cls.kind in payload:
            return dict(payload[cls.kind])
        return dict(payload or {})

    @property
    def path(self) -> str:
        raise NotImplementedError()  # pragma: no cover

    @property
    def id(self) -> Optional[int]:
        return self._snapshot.get("id")

    @property
    def snapshot(self) -> Dict[str, Any]:
        return self._snapshot

    @property
    def is_destroyed(self) -> bool:
        return self.lifecycle is Lifecycle.DESTROYED

    def __getitem__(self, key: str) -> Any:
        return self._snapshot[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self._snapshot.get(key, default)

    def _store(self, response: Response) -> bool:
        """Replace the snapshot with the one in the response body, if any"""
        payload = response.json()
        if not payload:
            return False
        self._snapshot = self.unwrap(payload)
        return True

    @requires_active
    async def attributes(self) -> Dict[str, Any]:
        """
        Fetch the latest version of the resource, replacing the snapshot.
        """
        response = await self.transport.get(self.path)
        self._store(response)
        return self._snapshot

    @requires_active
    async def update(self, args: Mapping):
        data = validate_arguments(args, self.fields)
        response = await self.transport.put(self.path, json={self.kind: data})
        self._store(response)
        return self

    def __repr__(self) -> str:
        state = "" if not self.is_destroyed else ", destroyed"
        return f"{type(self).__name__}(id={self.id!r}{state})"


@with_logger
class DestroyableEntity(Entity):
    """
    An entity that can be deleted on Challonge. Matches can not, so they
    derive from `Entity` directly.
    """

    @requires_active
    async def destroy(self) -> None:
        await self.transport.delete(self.path)
        self.lifecycle = Lifecycle.DESTROYED
        self._logger.info("Destroyed %s %s", self.kind, self.id)
