"""
Client config variables
"""

import logging
import os

import yaml

from .decorators import with_logger

# Logging setup
TRACE = 5
logging.addLevelName(TRACE, "TRACE")
logging.getLogger("aiohttp").setLevel(logging.INFO)

# Winner id sent for a match where both players won the same number of games
TIE = "tie"

# Never written to the log
SECRET_KEYS = ("CHALLONGE_API_KEY",)


@with_logger
class ConfigurationStore:
    def __init__(self):
        """
        Change default values here.
        """
        self.LOG_LEVEL = "INFO"

        self.CHALLONGE_API_URL = "https://api.challonge.com/v1"
        # Used by `Challonge` when no key is passed explicitly
        self.CHALLONGE_API_KEY = ""
        # Total seconds allowed for a single request
        self.REQUEST_TIMEOUT = 30

        # Challonge does not return the tournament after a reset, so the
        # cached state is set to this value instead.
        self.TOURNAMENT_STATE_AFTER_RESET = "ended"

        self._defaults = {
            key: value for key, value in vars(self).items() if key.isupper()
        }
        self.refresh()

    def _load_file(self) -> dict:
        config_file = os.getenv("CONFIGURATION_FILE")
        if config_file is None:
            return {}

        try:
            with open(config_file) as f:
                values = yaml.safe_load(f)
        except FileNotFoundError:
            self._logger.warning("No configuration file found at %s", config_file)
            return {}

        if values is None:
            self._logger.info(
                "Configuration file at %s appears to be empty", config_file
            )
            return {}
        return values

    def refresh(self) -> None:
        """
        Reset every value to its default, then apply the file named by
        `CONFIGURATION_FILE`. A change of `LOG_LEVEL` takes effect at once.
        """
        new_values = {**self._defaults, **self._load_file()}
        old_log_level = self.LOG_LEVEL

        for key, new_value in new_values.items():
            old_value = getattr(self, key, None)
            if new_value == old_value:
                continue
            if key in SECRET_KEYS:
                self._logger.info("New value for %s", key)
            else:
                self._logger.info(
                    "New value for %s: %r -> %r", key, old_value, new_value
                )
            setattr(self, key, new_value)

        if self.LOG_LEVEL != old_log_level:
            self.apply_log_level()

    def apply_log_level(self) -> None:
        logging.getLogger().setLevel(self.LOG_LEVEL)


config = ConfigurationStore()
