"""
A fake Challonge API for the integration tests.

Only implements as much of Challonge as the tests need: tournaments,
participants, and matches for a single elimination bracket of two.
"""

import itertools

import pytest
from aiohttp import web

from challonge_client import Challonge, Transport

API_KEY = "integration_api_key"


class FakeChallonge(object):
    def __init__(self, host, port):
        self.host = host
        self.port = port
        self.requests = []
        self.tournaments = {}
        self.participants = {}
        self.matches = {}
        self._ids = itertools.count(1)

    @property
    def base_url(self):
        return f"http://{self.host}:{self.port}/v1"

    def find_tournament(self, identifier):
        for tournament in self.tournaments.values():
            if identifier in (tournament["url"], str(tournament["id"])):
                return tournament
        raise web.HTTPNotFound(
            text='{"errors": ["Requested tournament not found"]}',
            content_type="application/json"
        )


def errors(status, *messages):
    return web.json_response({"errors": list(messages)}, status=status)


def build_app(handle: FakeChallonge) -> web.Application:
    routes = web.RouteTableDef()

    @web.middleware
    async def check_api_key(request, handler):
        body = await request.json() if request.can_read_body else None
        handle.requests.append((request.method, request.path, body))
        if request.query.get("api_key") != API_KEY:
            return errors(401, "Invalid API key")
        return await handler(request)

    @routes.get("/v1/tournaments.json")
    async def index(request):
        tournaments = list(handle.tournaments.values())
        state = request.query.get("state", "all")
        if state != "all":
            tournaments = [t for t in tournaments if t["state"] == state]
        return web.json_response([{"tournament": t} for t in tournaments])

    @routes.post("/v1/tournaments.json")
    async def create(request):
        data = (await request.json())["tournament"]
        if any(t["url"] == data["url"] for t in handle.tournaments.values()):
            return errors(422, "URL has already been taken")
        tournament = {
            "id": next(handle._ids),
            "state": "pending",
            "subdomain": None,
            "tournament_type": "single elimination",
            "participants_count": 0,
            **data,
        }
        handle.tournaments[tournament["id"]] = tournament
        return web.json_response({"tournament": tournament})

    @routes.get("/v1/tournaments/{tournament}/participants.json")
    async def participants(request):
        tournament = handle.find_tournament(request.match_info["tournament"])
        return web.json_response([
            {"participant": p}
            for p in handle.participants.values()
            if p["tournament_id"] == tournament["id"]
        ])

    @routes.post("/v1/tournaments/{tournament}/participants.json")
    async def add_participant(request):
        tournament = handle.find_tournament(request.match_info["tournament"])
        data = (await request.json())["participant"]
        tournament["participants_count"] += 1
        participant = {
            "id": next(handle._ids),
            "tournament_id": tournament["id"],
            "seed": tournament["participants_count"],
            "active": True,
            **data,
        }
        handle.participants[participant["id"]] = participant
        return web.json_response({"participant": participant})

    @routes.get("/v1/tournaments/{tournament}/matches.json")
    async def matches(request):
        tournament = handle.find_tournament(request.match_info["tournament"])
        return web.json_response([
            {"match": m}
            for m in handle.matches.values()
            if m["tournament_id"] == tournament["id"]
        ])

    @routes.get("/v1/tournaments/{tournament}/matches/{match_id}.json")
    async def show_match(request):
        match = handle.matches.get(int(request.match_info["match_id"]))
        if match is None:
            return errors(404, "Requested match not found")
        return web.json_response({"match": match})

    @routes.put("/v1/tournaments/{tournament}/matches/{match_id}.json")
    async def update_match(request):
        match = handle.matches.get(int(request.match_info["match_id"]))
        if match is None:
            return errors(404, "Requested match not found")
        if match["state"] != "open":
            return errors(422, "Match is not open")
        data = (await request.json())["match"]
        match.update(data)
        match["state"] = "complete"
        if data["winner_id"] != "tie":
            match["loser_id"] = (
                match["player2_id"]
                if data["winner_id"] == match["player1_id"]
                else match["player1_id"]
            )
        return web.json_response({"match": match})

    @routes.post("/v1/tournaments/{tournament}/{action}.json")
    async def transition(request):
        tournament = handle.find_tournament(request.match_info["tournament"])
        action = request.match_info["action"]
        if action == "start":
            players = [
                p for p in handle.participants.values()
                if p["tournament_id"] == tournament["id"]
            ]
            if len(players) < 2:
                return errors(
                    422, "Tournaments need at least 2 participants to start"
                )
            match_id = next(handle._ids)
            handle.matches[match_id] = {
                "id": match_id,
                "tournament_id": tournament["id"],
                "player1_id": players[0]["id"],
                "player2_id": players[1]["id"],
                "winner_id": None,
                "loser_id": None,
                "scores_csv": "",
                "round": 1,
                "state": "open",
            }
            tournament["state"] = "in_progress"
        elif action == "finalize":
            tournament["state"] = "ended"
        elif action == "reset":
            for match_id in [
                m["id"] for m in handle.matches.values()
                if m["tournament_id"] == tournament["id"]
            ]:
                del handle.matches[match_id]
            tournament["state"] = "pending"
        else:
            return errors(404, f"Unknown action {action}")
        return web.json_response({"tournament": tournament})

    @routes.get("/v1/tournaments/{tournament}.json")
    async def show(request):
        tournament = handle.find_tournament(request.match_info["tournament"])
        return web.json_response({"tournament": tournament})

    @routes.put("/v1/tournaments/{tournament}.json")
    async def update(request):
        tournament = handle.find_tournament(request.match_info["tournament"])
        tournament.update((await request.json())["tournament"])
        return web.json_response({"tournament": tournament})

    @routes.delete("/v1/tournaments/{tournament}.json")
    async def destroy(request):
        tournament = handle.find_tournament(request.match_info["tournament"])
        del handle.tournaments[tournament["id"]]
        return web.json_response({"tournament": tournament})

    app = web.Application(middlewares=[check_api_key])
    app.add_routes(routes)
    return app


@pytest.fixture
async def challonge_server():
    handle = FakeChallonge("localhost", 7080)

    runner = web.AppRunner(build_app(handle))

    await runner.setup()
    site = web.TCPSite(runner, handle.host, handle.port)
    await site.start()

    yield handle

    await runner.cleanup()


@pytest.fixture
async def challonge(challonge_server):
    transport = Transport(API_KEY, base_url=challonge_server.base_url)
    async with Challonge(API_KEY, transport=transport) as challonge:
        yield challonge
