"""
Argument validation for requests sent to Challonge.

Every schema maps a field name to a `Field` describing which kind of value
the field accepts and, optionally, a refinement check applied to the
normalised value. Validation happens before any request is made, so a
rejected argument never reaches the network.

Unknown entity arguments are dropped with a warning. Known arguments with a
bad value raise `ValidationError`.
"""

import logging
import re
from collections.abc import Mapping
from enum import Enum, unique
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from .exceptions import ValidationError

_logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"\d*", re.ASCII)
DECIMAL_PATTERN = re.compile(r"\d*\.?\d*", re.ASCII)
BOOLEAN_PATTERN = re.compile(r"true|false", re.IGNORECASE)
SLUG_PATTERN = re.compile(r"[A-Za-z0-9_]*")
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
SCORE_PATTERN = re.compile(r"\d*-\d*", re.ASCII)


@unique
class FieldKind(Enum):
    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATETIME = "datetime"


class Field(NamedTuple):
    kind: FieldKind
    check: Optional[Callable[[str], bool]] = None
    reason: str = "is invalid"


def one_of(*choices: str) -> Callable[[str], bool]:
    """Case insensitive membership check"""
    allowed = {choice.lower() for choice in choices}
    return lambda value: value.lower() in allowed


def max_length(limit: int) -> Callable[[str], bool]:
    return lambda value: len(value) <= limit


def matches(pattern: re.Pattern) -> Callable[[str], bool]:
    return lambda value: pattern.fullmatch(value) is not None


def _string(value: Any) -> Tuple[bool, Any]:
    return True, value if isinstance(value, str) else str(value)


def _integer(value: Any) -> Tuple[bool, Any]:
    if isinstance(value, bool):
        return False, value
    return INTEGER_PATTERN.fullmatch(str(value)) is not None, value


def _decimal(value: Any) -> Tuple[bool, Any]:
    text = str(value)
    if isinstance(value, bool) or DECIMAL_PATTERN.fullmatch(text) is None:
        return False, value
    # A lone "." or "" formats as zero
    number = float(text) if text.strip(".") else 0.0
    return True, f"{number:.1f}"


def _boolean(value: Any) -> Tuple[bool, Any]:
    text = str(value)
    if BOOLEAN_PATTERN.fullmatch(text) is None:
        return False, value
    return True, text.lower()


def _datetime(value: Any) -> Tuple[bool, Any]:
    if hasattr(value, "isoformat"):
        return True, value.isoformat()
    return True, value


_NORMALIZERS = {
    FieldKind.STRING: _string,
    FieldKind.INTEGER: _integer,
    FieldKind.DECIMAL: _decimal,
    FieldKind.BOOLEAN: _boolean,
    FieldKind.DATETIME: _datetime,
}

_KIND_REASONS = {
    FieldKind.INTEGER: "is not a valid integer",
    FieldKind.DECIMAL: "is not a valid decimal",
    FieldKind.BOOLEAN: "is not valid. It should be 'true' or 'false'",
}


Schema = Dict[str, Field]

TOURNAMENT_FIELDS: Schema = {
    "name": Field(
        FieldKind.STRING,
        max_length(60),
        "is longer than 60 characters"
    ),
    "tournament_type": Field(
        FieldKind.STRING,
        one_of(
            "single elimination",
            "double elimination",
            "round robin",
            "swiss"
        )
    ),
    "url": Field(
        FieldKind.STRING,
        matches(SLUG_PATTERN),
        "is not a valid URL"
    ),
    "subdomain": Field(
        FieldKind.STRING,
        matches(SLUG_PATTERN),
        "is not a valid subdomain"
    ),
    "description": Field(FieldKind.STRING),
    "game_name": Field(FieldKind.STRING),
    "ranked_by": Field(
        FieldKind.STRING,
        one_of(
            "match wins",
            "game wins",
            "points scored",
            "points difference",
            "custom"
        )
    ),
    "swiss_rounds": Field(FieldKind.INTEGER),
    "signup_cap": Field(FieldKind.INTEGER),
    "check_in_duration": Field(FieldKind.INTEGER),
    "pts_for_match_win": Field(FieldKind.DECIMAL),
    "pts_for_match_tie": Field(FieldKind.DECIMAL),
    "pts_for_game_win": Field(FieldKind.DECIMAL),
    "pts_for_game_tie": Field(FieldKind.DECIMAL),
    "pts_for_bye": Field(FieldKind.DECIMAL),
    "rr_pts_for_match_win": Field(FieldKind.DECIMAL),
    "rr_pts_for_match_tie": Field(FieldKind.DECIMAL),
    "rr_pts_for_game_win": Field(FieldKind.DECIMAL),
    "rr_pts_for_game_tie": Field(FieldKind.DECIMAL),
    "open_signup": Field(FieldKind.BOOLEAN),
    "hold_third_place_match": Field(FieldKind.BOOLEAN),
    "accept_attachments": Field(FieldKind.BOOLEAN),
    "hide_forum": Field(FieldKind.BOOLEAN),
    "show_rounds": Field(FieldKind.BOOLEAN),
    "private": Field(FieldKind.BOOLEAN),
    "notify_users_when_matches_open": Field(FieldKind.BOOLEAN),
    "notify_users_when_the_tournament_ends": Field(FieldKind.BOOLEAN),
    "sequential_pairings": Field(FieldKind.BOOLEAN),
    "start_at": Field(FieldKind.DATETIME),
}

PARTICIPANT_FIELDS: Schema = {
    "name": Field(FieldKind.STRING),
    "challonge_username": Field(FieldKind.STRING),
    "email": Field(FieldKind.STRING),
    "invite_name_or_email": Field(FieldKind.STRING),
    "misc": Field(
        FieldKind.STRING,
        max_length(255),
        "is longer than 255 characters"
    ),
    "seed": Field(FieldKind.INTEGER),
}

MATCH_VOTE_FIELDS: Schema = {
    "player1_votes": Field(FieldKind.INTEGER),
    "player2_votes": Field(FieldKind.INTEGER),
}

ATTACHMENT_FIELDS: Schema = {
    "url": Field(FieldKind.STRING),
    "description": Field(FieldKind.STRING),
}

TOURNAMENT_INDEX_FILTERS: Schema = {
    "state": Field(
        FieldKind.STRING,
        one_of("all", "pending", "in_progress", "ended")
    ),
    "type": Field(
        FieldKind.STRING,
        one_of(
            "single_elimination",
            "double_elimination",
            "round_robin",
            "swiss"
        )
    ),
    "created_after": Field(
        FieldKind.DATETIME,
        matches(DATE_PATTERN),
        "is not a date in the format YYYY-MM-DD"
    ),
    "created_before": Field(
        FieldKind.DATETIME,
        matches(DATE_PATTERN),
        "is not a date in the format YYYY-MM-DD"
    ),
    "subdomain": Field(
        FieldKind.STRING,
        matches(SLUG_PATTERN),
        "is not a valid subdomain"
    ),
}

MATCH_INDEX_FILTERS: Schema = {
    "state": Field(
        FieldKind.STRING,
        one_of("all", "pending", "open", "complete")
    ),
    "participant_id": Field(FieldKind.INTEGER),
}


def validate_field(name: str, value: Any, field: Field) -> Any:
    """
    Check a single value against its field descriptor and return the
    normalised value.
    """
    ok, normalized = _NORMALIZERS[field.kind](value)
    if not ok:
        raise ValidationError(
            name, value, _KIND_REASONS.get(field.kind, "is invalid")
        )

    if field.check is not None and not field.check(str(normalized)):
        raise ValidationError(name, value, field.reason)

    return normalized


def validate_arguments(args: Mapping, schema: Schema) -> Dict[str, Any]:
    """
    Validate entity arguments against `schema`.

    Returns a new dict holding the normalised known arguments. Unknown
    arguments are logged and left out. Arguments set to `None` are treated
    as absent.
    """
    if not isinstance(args, Mapping):
        raise TypeError(
            f"Expected a mapping of arguments, got {type(args).__name__}"
        )

    validated = {}
    for name, value in args.items():
        field = schema.get(name)
        if field is None:
            _logger.warning("Ignoring unknown argument '%s'", name)
            continue
        if value is None:
            continue
        validated[name] = validate_field(name, value, field)

    return validated


def validate_filters(filters: Mapping, schema: Schema) -> Dict[str, Any]:
    """
    Validate the query filters of a listing request. Unlike entity
    arguments, an unknown filter is an error.
    """
    for name in filters:
        if name not in schema:
            raise ValidationError(name, filters[name], "is not a valid option")

    return validate_arguments(filters, schema)


def validate_scores(scores: Any) -> List[str]:
    """
    Check that `scores` is a sequence of "x-y" strings, one per game.
    """
    if isinstance(scores, str) or not isinstance(scores, (list, tuple)):
        raise ValidationError(
            "scores_csv", scores, "is required as a list of scores"
        )

    for score in scores:
        if not isinstance(score, str) or SCORE_PATTERN.fullmatch(score) is None:
            raise ValidationError(
                "scores_csv",
                score,
                'must be in the format "x-y", where x and y are integers'
            )

    return list(scores)


def validate_match_arguments(args: Any) -> Tuple[List[str], Dict[str, Any]]:
    """
    Validate the arguments of a match update.

    `args` is either a bare sequence of score strings, or a mapping holding
    `scores_csv` and optional vote overrides. Returns the scores and the
    validated vote fields.
    """
    if isinstance(args, Mapping):
        scores = validate_scores(args.get("scores_csv"))
        votes = validate_arguments(
            {key: value for key, value in args.items() if key != "scores_csv"},
            MATCH_VOTE_FIELDS
        )
        return scores, votes

    if isinstance(args, (list, tuple)):
        return validate_scores(args), {}

    raise TypeError(
        f"Expected a list of scores or a mapping, got {type(args).__name__}"
    )


def require_any(args: Mapping, *names: str) -> None:
    """Raise unless at least one of `names` has a value in `args`"""
    if not any(args.get(name) not in (None, "") for name in names):
        listed = "', '".join(names)
        raise ValidationError(
            names[0], None, f"is required. Provide one of '{listed}'"
        )
