from collections.abc import Mapping
from typing import List, Optional

from .config import config
from .decorators import with_logger
from .exceptions import (
    ChallongeException,
    InvalidApiKeyError,
    ValidationError
)
from .tournament import Tournament
from .transport import Transport
from .validation import (
    TOURNAMENT_FIELDS,
    TOURNAMENT_INDEX_FILTERS,
    validate_arguments,
    validate_filters
)


@with_logger
class Challonge:
    """
    Entry point to the Challonge API for the user owning `api_key`.

    # Examples
        async with Challonge(api_key) as challonge:
            tournaments = await challonge.index(state="pending")
    """
    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[Transport] = None
    ):
        self.api_key = api_key or config.CHALLONGE_API_KEY
        self.transport = transport or Transport(self.api_key)

    async def initialize(self) -> None:
        """
        Check that Challonge accepts the API key.
        """
        try:
            await self.transport.get("/tournaments.json")
        except ChallongeException as e:
            if e.status != 401:
                raise
            self._logger.error("Challonge API key is invalid")
            raise InvalidApiKeyError(e.status) from e

    async def shutdown(self) -> None:
        await self.transport.close()

    async def __aenter__(self):
        try:
            await self.initialize()
        except BaseException:
            await self.shutdown()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.shutdown()

    async def index(self, **filters) -> List[Tournament]:
        """
        List the tournaments of the user.

        Filters:
            state: "all", "pending", "in_progress" or "ended"
            type: "single_elimination", "double_elimination", "round_robin"
                or "swiss"
            created_after, created_before: "YYYY-MM-DD" or a `date`
            subdomain: only tournaments under this subdomain
        """
        params = validate_filters(filters, TOURNAMENT_INDEX_FILTERS)
        response = await self.transport.get("/tournaments.json", params=params)
        return [
            Tournament(tournament, self.transport)
            for tournament in response.json() or []
        ]

    async def show(self, tournament) -> Tournament:
        """Get a single tournament by its id or url"""
        response = await self.transport.get(f"/tournaments/{tournament}.json")
        return Tournament(response.json(), self.transport)

    async def create(self, args: Mapping) -> Tournament:
        """
        Create a new tournament. `name` and `url` are required.
        """
        data = validate_arguments(args, TOURNAMENT_FIELDS)
        for required in ("name", "url"):
            if not data.get(required):
                raise ValidationError(
                    required, data.get(required), "is required"
                )

        response = await self.transport.post(
            "/tournaments.json",
            json={Tournament.kind: data}
        )
        tournament = Tournament(response.json(), self.transport)
        self._logger.info("Created tournament %s", tournament.identifier)
        return tournament
