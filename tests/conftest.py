"""
This module is the 'top level' configuration for all the tests.

Unit tests talk to a `Transport` whose `request` method is mocked, so every
request the library would make can be inspected, and counted, without a
network. The integration tests in ``integration_tests`` run against a fake
Challonge server instead.
"""

import json
import logging
from typing import Any
from unittest import mock

import pytest

from challonge_client import (
    Attachment,
    Match,
    Participant,
    Response,
    Tournament,
    Transport
)
from challonge_client.config import TRACE

logging.getLogger().setLevel(TRACE)


def pytest_configure(config):
    config.addinivalue_line(
        "addopts", "--strict-markers"
    )


def make_response(status: int = 200, payload: Any = None) -> Response:
    return Response(status, "" if payload is None else json.dumps(payload))


def make_tournament_snapshot(**kwargs) -> dict:
    snapshot = {
        "id": 1,
        "name": "Sample Tournament 1",
        "url": "sample_tournament_1",
        "subdomain": None,
        "tournament_type": "single elimination",
        "state": "pending",
        "pts_for_match_win": "1.0",
        "participants_count": 0,
    }
    snapshot.update(kwargs)
    return snapshot


def make_participant_snapshot(**kwargs) -> dict:
    snapshot = {
        "id": 16543993,
        "tournament_id": 1,
        "name": "alice",
        "seed": 1,
        "active": True,
        "checked_in": False,
        "misc": None,
    }
    snapshot.update(kwargs)
    return snapshot


def make_match_snapshot(**kwargs) -> dict:
    snapshot = {
        "id": 23575258,
        "tournament_id": 1,
        "player1_id": 16543993,
        "player2_id": 16543997,
        "winner_id": None,
        "loser_id": None,
        "scores_csv": "",
        "round": 1,
        "state": "open",
    }
    snapshot.update(kwargs)
    return snapshot


def make_attachment_snapshot(**kwargs) -> dict:
    snapshot = {
        "id": 4,
        "match_id": 23575258,
        "url": "https://example.com/results.png",
        "description": "Results",
        "asset_file_name": None,
    }
    snapshot.update(kwargs)
    return snapshot


@pytest.fixture
def transport():
    transport = Transport("api_key", base_url="https://challonge.test/v1")
    transport.request = mock.AsyncMock(return_value=make_response(200))
    return transport


@pytest.fixture
def tournament(transport) -> Tournament:
    return Tournament({"tournament": make_tournament_snapshot()}, transport)


@pytest.fixture
def participant(transport) -> Participant:
    return Participant({"participant": make_participant_snapshot()}, transport)


@pytest.fixture
def match(transport) -> Match:
    return Match({"match": make_match_snapshot()}, transport)


@pytest.fixture
def attachment(transport) -> Attachment:
    return Attachment(
        {"match_attachment": make_attachment_snapshot()},
        transport,
        tournament_id=1
    )
