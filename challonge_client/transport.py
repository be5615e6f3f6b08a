import json
from typing import Any, Dict, List, NamedTuple, Optional

import aiohttp

from .config import TRACE, config
from .decorators import with_logger
from .exceptions import ChallongeException


class Response(NamedTuple):
    status: int
    body: str

    def json(self) -> Any:
        if not self.body.strip():
            return None
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise ChallongeException(
                self.status, f"Response body is not valid JSON: {e}"
            ) from e

    def errors(self) -> List[str]:
        """The error messages Challonge reported for a failed request"""
        try:
            data = self.json()
        except ChallongeException:
            data = None

        if isinstance(data, dict) and "errors" in data:
            errors = data["errors"]
            if isinstance(errors, list):
                return [str(error) for error in errors]
            return [str(errors)]

        return [f"Request failed with status {self.status}"]


@with_logger
class Transport:
    """
    Makes requests against the Challonge REST API.

    The API key is sent as a query parameter on every request. Every call
    returns the status code together with the raw response body.
    """
    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.api_key = api_key
        self.base_url = base_url or config.CHALLONGE_API_URL
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None
    ) -> Response:
        query = {"api_key": self.api_key}
        if params:
            query.update(params)

        kwargs: Dict[str, Any] = {"params": query}
        if json is not None:
            kwargs["headers"] = {"Content-Type": "application/json"}
            kwargs["json"] = json

        self._logger.log(TRACE, "%s %s %s", method, path, json)
        session = self._get_session()
        async with session.request(method, self.base_url + path, **kwargs) as resp:
            response = Response(resp.status, await resp.text())

        self._logger.log(TRACE, "%s %s -> %i", method, path, response.status)
        return response

    async def call(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None
    ) -> Response:
        """
        Like `request`, but a status above 300 is logged and raised as a
        `ChallongeException` carrying every error message from the body.
        """
        response = await self.request(method, path, params=params, json=json)
        if response.status > 300:
            errors = response.errors()
            for error in errors:
                self._logger.error("Challonge returned error: %s", error)
            raise ChallongeException(response.status, *errors)

        return response

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None):
        return await self.call("GET", path, params=params)

    async def post(self, path: str, json: Optional[Any] = None):
        return await self.call("POST", path, json=json)

    async def put(self, path: str, json: Optional[Any] = None):
        return await self.call("PUT", path, json=json)

    async def delete(self, path: str):
        return await self.call("DELETE", path)

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
