"""
Command line entry point, meant to be run once per schedule tick.

Exit status is 0 whenever both databases were observed, whether or not an
alert was sent or delivered, and 1 when configuration or detection failed.
"""
import asyncio
import sys

import click
from loguru import logger

from oracle_slow_query_alert import __version__
from oracle_slow_query_alert.config import WEBHOOK_VARIABLE, Settings, load_settings
from oracle_slow_query_alert.core import SlowQueryPipeline
from oracle_slow_query_alert.exceptions import ConfigurationError, DetectionError
from oracle_slow_query_alert.input import OracleSessionClient, OracleSlowSessionInput
from oracle_slow_query_alert.output import AlertOutput, ConsoleAlertOutput, SlackWebhookOutput
from oracle_slow_query_alert.utils.logger import setup_logger


def build_pipeline(settings: Settings, dry_run: bool = False) -> SlowQueryPipeline:
    """Wire the primary and replica finders and the alert output."""
    inputs = [
        OracleSlowSessionInput(
            OracleSessionClient(settings.primary, settings.primary_label, settings.predicate)
        ),
        OracleSlowSessionInput(
            OracleSessionClient(settings.replica, settings.replica_label, settings.predicate)
        ),
    ]

    outputs: list[AlertOutput]
    if dry_run:
        outputs = [ConsoleAlertOutput()]
    elif settings.webhook_url is None:
        raise ConfigurationError(f"{WEBHOOK_VARIABLE} is required unless --dry-run is given")
    else:
        outputs = [SlackWebhookOutput(settings.webhook_url)]

    return SlowQueryPipeline(inputs, outputs)


@click.command()
@click.version_option(version=__version__, prog_name="oracle-slow-query-alert")
@click.option(
    "--env",
    "-e",
    "env_file",
    default=".env",
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Path of the environment file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug output")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also log to this file")
@click.option("--dry-run", is_flag=True, help="Print the alert instead of posting it to Slack")
def cli(env_file, verbose, log_file, dry_run):
    """Report Oracle sessions running or waiting abnormally long to Slack."""
    setup_logger(verbose=verbose, log_file=log_file)

    logger.info("Loading environment from {}", env_file)
    try:
        settings = load_settings(env_file, require_webhook=not dry_run)
        pipeline = build_pipeline(settings, dry_run=dry_run)
    except ConfigurationError as e:
        logger.error("Configuration error: {}", e)
        sys.exit(1)

    try:
        result = asyncio.run(pipeline.run())
    except DetectionError as e:
        logger.error("Slow query detection failed: {}", e)
        sys.exit(1)

    if result.total:
        logger.info("{} slow session(s) reported", result.total)


def main():
    cli()


if __name__ == "__main__":
    main()
