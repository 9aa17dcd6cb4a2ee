from dataclasses import dataclass, field
from typing import Any

import oracledb
from loguru import logger

from oracle_slow_query_alert.domain import SlowSessionPredicate
from oracle_slow_query_alert.exceptions import DatabaseConnectionError, QueryExecutionError


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Connection settings for one monitored Oracle database."""

    user: str
    password: str = field(repr=False)
    host: str
    port: str
    service: str

    @property
    def dsn(self) -> str:
        """Easy Connect string, without credentials."""
        return f"{self.host}:{self.port}/{self.service}"

    def with_host(self, host: str) -> "DatabaseConfig":
        return DatabaseConfig(
            user=self.user,
            password=self.password,
            host=host,
            port=self.port,
            service=self.service,
        )


class OracleSessionClient:
    """Runs the slow session detection query against one Oracle database.

    Each call to fetch_rows() opens its own connection, runs exactly one
    query and closes the connection again, on success and on failure.

    Rows come back as tuples in COLUMNS order, longest-running first:

        sid, serial#, username, machine, program, sql_id, sql_text, event,
        wait_class, seconds_in_wait, minutes_running, status, kill_session_sql

    Errors:
    - DatabaseConnectionError when no session can be established
    - QueryExecutionError when the detection query fails
    Neither is retried.
    """

    COLUMNS = (
        "sid",
        "serial#",
        "username",
        "machine",
        "program",
        "sql_id",
        "sql_text",
        "event",
        "wait_class",
        "seconds_in_wait",
        "minutes_running",
        "status",
        "kill_session_sql",
    )

    SLOW_SESSION_SQL = """
    WITH long_running_queries AS (
        SELECT
            s.sid,
            s.serial#,
            s.username,
            s.machine,
            s.program,
            s.sql_id,
            q.sql_text,
            s.event,
            s.wait_class,
            s.seconds_in_wait,
            ROUND((SYSDATE - s.sql_exec_start) * 24 * 60, 2) AS minutes_running,
            s.status
        FROM
            v$session s
        JOIN
            v$sqlarea q ON s.sql_id = q.sql_id
        WHERE
            {where}
    )
    SELECT
        lrq.*,
        'ALTER SYSTEM KILL SESSION ''' || lrq.sid || ',' || lrq.serial# || ''' IMMEDIATE;' AS kill_session_sql
    FROM
        long_running_queries lrq
    ORDER BY
        lrq.minutes_running DESC
    """

    def __init__(
        self,
        config: DatabaseConfig,
        label: str,
        predicate: SlowSessionPredicate | None = None,
        connect_timeout: float = 20.0,
    ) -> None:
        self.config = config
        self.label = label
        self.predicate = predicate or SlowSessionPredicate()
        self.connect_timeout = connect_timeout

    @property
    def sql(self) -> str:
        return self.SLOW_SESSION_SQL.format(where=self.predicate.where_clause("s"))

    async def fetch_rows(self) -> list[tuple[Any, ...]]:
        logger.debug("Connecting to {} at {}", self.label, self.config.dsn)
        try:
            connection = await oracledb.connect_async(
                user=self.config.user,
                password=self.config.password,
                dsn=self.config.dsn,
                tcp_connect_timeout=self.connect_timeout,
            )
        except oracledb.Error as exc:
            raise DatabaseConnectionError(
                f"Could not connect to {self.label} ({self.config.dsn}): {exc}",
                target=self.label,
            ) from exc

        try:
            try:
                rows = await connection.fetchall(self.sql)
            except oracledb.Error as exc:
                raise QueryExecutionError(
                    f"Slow session query failed on {self.label}: {exc}",
                    target=self.label,
                ) from exc
        finally:
            await connection.close()

        logger.debug("{} returned {} row(s)", self.label, len(rows))
        return list(rows)
