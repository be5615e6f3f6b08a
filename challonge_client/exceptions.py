"""
Common exception definitions
"""


class ChallongeError(Exception):
    """
    Base class for every error raised by this library.
    """


class ValidationError(ChallongeError, ValueError):
    """
    An argument was rejected locally, before any request was made.
    """
    def __init__(self, field, value, reason, *args, **kwargs):
        super().__init__(f"Value {value!r} for argument '{field}' {reason}")
        self.field = field
        self.value = value
        self.reason = reason


class ChallongeException(ChallongeError):
    """
    Challonge rejected a request. Each server supplied error message is
    available in `errors`.
    """
    def __init__(self, status, *errors):
        super().__init__(*errors)
        self.status = status
        self.errors = list(errors)

    def __str__(self):
        return f"[{self.status}] " + "; ".join(self.errors)


class DestroyedError(ChallongeError):
    """
    The entity has been destroyed and can not be operated on any more.
    """
    def __init__(self, kind="entity"):
        name = kind.replace("_", " ").capitalize()
        super().__init__(f"{name} has been destroyed")
        self.kind = kind


class InvalidApiKeyError(ChallongeException):
    """
    Challonge refused the configured API key.
    """
    def __init__(self, status=401):
        super().__init__(status, "Challonge API key is invalid")
