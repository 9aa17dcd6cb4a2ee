import json
import os
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from click.testing import CliRunner

from oracle_slow_query_alert import __version__
from oracle_slow_query_alert.cli import build_pipeline, cli
from oracle_slow_query_alert.config import Settings
from oracle_slow_query_alert.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    QueryExecutionError,
)
from oracle_slow_query_alert.input import OracleSessionClient
from oracle_slow_query_alert.output import ConsoleAlertOutput, SlackWebhookOutput

WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"

ENV = {
    "DB_USER": "monitor",
    "DB_PASS": "s3cret",
    "DB_HOST": "db1.internal",
    "DB_PORT": "1521",
    "DB_SERVICE": "ORCLPDB1",
    "DB_HOST_SLAVE": "db2.internal",
    "SLACK_WEBHOOK_ENDPOINT": WEBHOOK_URL,
}


def make_row(sid: int, serial: int, minutes: float) -> tuple:
    return (
        sid,
        serial,
        "APP",
        "web-01",
        "python",
        "abc",
        "SELECT 1",
        "db file sequential read",
        "User I/O",
        0,
        minutes,
        "ACTIVE",
        f"ALTER SYSTEM KILL SESSION '{sid},{serial}' IMMEDIATE;",
    )


def ok_response() -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.status_code = 200
    response.raise_for_status = lambda: None
    return response


@pytest.fixture
def env_file(tmp_path):
    saved = {key: os.environ.pop(key) for key in list(ENV) if key in os.environ}
    path = tmp_path / ".env"
    path.write_text("\n".join(f"{key}={value}" for key, value in ENV.items()))
    yield path
    for key in ENV:
        os.environ.pop(key, None)
    os.environ.update(saved)


@pytest.fixture(autouse=True)
def no_logger_setup():
    with patch("oracle_slow_query_alert.cli.setup_logger") as mock_setup:
        yield mock_setup


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_no_slow_queries_exits_zero_without_posting(env_file):
    with (
        patch.object(OracleSessionClient, "fetch_rows", new_callable=AsyncMock) as mock_fetch,
        patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post,
    ):
        mock_fetch.return_value = []
        result = CliRunner().invoke(cli, ["--env", str(env_file)])

    assert result.exit_code == 0, result.output
    assert mock_fetch.await_count == 2
    mock_post.assert_not_called()


def test_slow_queries_are_posted(env_file):
    with (
        patch.object(OracleSessionClient, "fetch_rows", new_callable=AsyncMock) as mock_fetch,
        patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post,
    ):
        mock_fetch.side_effect = [[make_row(1, 2, 45.0)], [make_row(3, 4, 31.0)]]
        mock_post.return_value = ok_response()
        result = CliRunner().invoke(cli, ["--env", str(env_file)])

    assert result.exit_code == 0, result.output
    mock_post.assert_awaited_once()
    assert mock_post.call_args.args[0] == WEBHOOK_URL
    text = json.loads(mock_post.call_args.kwargs["content"])["text"]
    assert text.index("detected on primary") < text.index("detected on replica")
    assert "ALTER SYSTEM KILL SESSION '1,2' IMMEDIATE;" in text
    assert "ALTER SYSTEM KILL SESSION '3,4' IMMEDIATE;" in text


def test_delivery_failure_still_exits_zero(env_file):
    with (
        patch.object(OracleSessionClient, "fetch_rows", new_callable=AsyncMock) as mock_fetch,
        patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post,
    ):
        mock_fetch.side_effect = [[make_row(1, 2, 45.0)], []]
        mock_post.side_effect = httpx.ConnectError("Connection refused")
        result = CliRunner().invoke(cli, ["--env", str(env_file)])

    assert result.exit_code == 0, result.output


@pytest.mark.parametrize(
    "error",
    [
        DatabaseConnectionError("no listener", target="primary"),
        QueryExecutionError("ORA-00942", target="primary"),
    ],
)
def test_detection_failure_exits_one_before_replica(env_file, error):
    with (
        patch.object(OracleSessionClient, "fetch_rows", new_callable=AsyncMock) as mock_fetch,
        patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post,
    ):
        mock_fetch.side_effect = [error, [make_row(3, 4, 31.0)]]
        result = CliRunner().invoke(cli, ["--env", str(env_file)])

    assert result.exit_code == 1
    assert mock_fetch.await_count == 1
    mock_post.assert_not_called()


def test_missing_env_file_exits_one(tmp_path):
    result = CliRunner().invoke(cli, ["--env", str(tmp_path / "nope.env")])
    assert result.exit_code == 1


def test_dry_run_prints_instead_of_posting(env_file):
    with (
        patch.object(OracleSessionClient, "fetch_rows", new_callable=AsyncMock) as mock_fetch,
        patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post,
    ):
        mock_fetch.side_effect = [[make_row(1, 2, 45.0)], []]
        result = CliRunner().invoke(cli, ["--env", str(env_file), "--dry-run"])

    assert result.exit_code == 0, result.output
    mock_post.assert_not_called()
    assert "*Slow queries detected on primary*" in result.output


def test_logger_configured_from_options(env_file, no_logger_setup):
    with patch.object(OracleSessionClient, "fetch_rows", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.return_value = []
        CliRunner().invoke(cli, ["--env", str(env_file), "-v", "--log-file", "probe.log"])

    no_logger_setup.assert_called_once_with(verbose=True, log_file="probe.log")


class TestBuildPipeline:
    @pytest.fixture
    def settings(self) -> Settings:
        return Settings.from_env(ENV)

    def test_inputs_are_primary_then_replica(self, settings: Settings) -> None:
        pipeline = build_pipeline(settings)
        assert [source.label for source in pipeline._inputs] == ["primary", "replica"]

    def test_slack_output_by_default(self, settings: Settings) -> None:
        pipeline = build_pipeline(settings)
        assert [type(output) for output in pipeline._outputs] == [SlackWebhookOutput]

    def test_console_output_for_dry_run(self, settings: Settings) -> None:
        pipeline = build_pipeline(settings, dry_run=True)
        assert [type(output) for output in pipeline._outputs] == [ConsoleAlertOutput]

    def test_dry_run_needs_no_webhook(self) -> None:
        settings = Settings.from_env(
            {k: v for k, v in ENV.items() if k != "SLACK_WEBHOOK_ENDPOINT"}, require_webhook=False
        )
        pipeline = build_pipeline(settings, dry_run=True)
        assert [type(output) for output in pipeline._outputs] == [ConsoleAlertOutput]

    def test_missing_webhook_is_not_replaced_by_console(self) -> None:
        settings = Settings.from_env(
            {k: v for k, v in ENV.items() if k != "SLACK_WEBHOOK_ENDPOINT"}, require_webhook=False
        )
        with pytest.raises(ConfigurationError, match="SLACK_WEBHOOK_ENDPOINT"):
            build_pipeline(settings)
