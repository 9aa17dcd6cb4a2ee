"""Runtime settings, read from a dotenv file and the process environment."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from oracle_slow_query_alert.domain import SlowSessionPredicate
from oracle_slow_query_alert.exceptions import ConfigurationError
from oracle_slow_query_alert.input.oracle import DatabaseConfig

REQUIRED_DB_VARIABLES = ("DB_USER", "DB_PASS", "DB_HOST", "DB_PORT", "DB_SERVICE", "DB_HOST_SLAVE")
WEBHOOK_VARIABLE = "SLACK_WEBHOOK_ENDPOINT"


@dataclass(frozen=True, slots=True)
class Settings:
    primary: DatabaseConfig
    replica: DatabaseConfig
    webhook_url: str | None
    primary_label: str = "primary"
    replica_label: str = "replica"
    predicate: SlowSessionPredicate = SlowSessionPredicate()

    @classmethod
    def from_env(cls, environ: Mapping[str, str], require_webhook: bool = True) -> "Settings":
        """Build settings from environment variables.

        The replica shares user, password, port and service with the primary
        and differs only in host (DB_HOST_SLAVE). Values are not validated
        beyond being present.

        Raises:
            ConfigurationError: If required variables are missing or the
                thresholds are not positive integers.
        """
        required = list(REQUIRED_DB_VARIABLES)
        if require_webhook:
            required.append(WEBHOOK_VARIABLE)

        missing = [name for name in required if not environ.get(name)]
        if missing:
            raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

        primary = DatabaseConfig(
            user=environ["DB_USER"],
            password=environ["DB_PASS"],
            host=environ["DB_HOST"],
            port=environ["DB_PORT"],
            service=environ["DB_SERVICE"],
        )

        return cls(
            primary=primary,
            replica=primary.with_host(environ["DB_HOST_SLAVE"]),
            webhook_url=environ.get(WEBHOOK_VARIABLE) or None,
            primary_label=environ.get("PRIMARY_LABEL") or "primary",
            replica_label=environ.get("REPLICA_LABEL") or "replica",
            predicate=_predicate_from_env(environ),
        )


def _predicate_from_env(environ: Mapping[str, str]) -> SlowSessionPredicate:
    defaults = SlowSessionPredicate()
    try:
        return SlowSessionPredicate(
            min_elapsed_minutes=int(
                environ.get("SLOW_QUERY_MINUTES") or defaults.min_elapsed_minutes
            ),
            min_wait_seconds=int(
                environ.get("SLOW_QUERY_WAIT_SECONDS") or defaults.min_wait_seconds
            ),
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid slow query threshold: {exc}") from exc


def load_settings(env_file: str | Path = ".env", require_webhook: bool = True) -> Settings:
    """Load the dotenv file into the environment and build Settings from it.

    Variables already set in the environment take precedence over the file.
    """
    path = Path(env_file)
    if not path.is_file():
        raise ConfigurationError(f"Environment file not found: {path}")

    load_dotenv(path)
    return Settings.from_env(os.environ, require_webhook=require_webhook)
