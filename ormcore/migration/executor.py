"""Apply rendered migration statements through a database connection."""

from collections.abc import Sequence

from ormcore.config import settings
from ormcore.database.interfaces import DatabaseConnection
from ormcore.exceptions import MigrationFailedError
from ormcore.log import get_logger
from ormcore.migration.operations import MigrationPlan
from ormcore.migration.renderer import SchemaRenderer

logger = get_logger(__name__)


class MigrationExecutor:
    """Executes migration plans and table maintenance statements."""

    def __init__(
        self,
        connection: DatabaseConnection,
        renderer: SchemaRenderer | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            connection: Connected database connection
            renderer: DDL renderer; defaults to one for the connection's
                dialect honoring ``settings.quote_identifiers``
        """
        self.connection = connection
        self.renderer = renderer or SchemaRenderer.for_dialect(
            connection.dialect, settings.quote_identifiers
        )

    def apply(self, statements: Sequence[str]) -> bool:
        """Execute statements strictly in order, stopping at the first failure.

        Statements that ran before a failure stay applied.

        Args:
            statements: Ordered SQL statements

        Returns:
            True when the final statement succeeded (or there was none)

        Raises:
            MigrationFailedError: If a statement fails; later statements are
                not attempted
        """
        for index, statement in enumerate(statements):
            logger.debug(f"Executing migration statement #{index}: {statement}")
            try:
                self.connection.execute(statement)
            except Exception as e:
                logger.error(f"Migration statement #{index} failed: {statement}: {e}")
                raise MigrationFailedError(index, statement, str(e)) from e

        if statements:
            logger.info(f"Applied {len(statements)} migration statement(s)")
        return True

    def migrate(self, plan: MigrationPlan) -> bool:
        """Render a plan with the connection's dialect and apply it."""
        statements = self.renderer.render(plan)
        if not statements:
            logger.debug(f"Table '{plan.table}' is up to date")
        return self.apply(statements)

    def drop_table(self, table: str) -> bool:
        """Drop a table.

        Returns:
            True on success, False if the statement failed
        """
        statement = self.renderer.drop_table_sql(table)
        try:
            self.connection.execute(statement)
        except Exception as e:
            logger.warning(f"Failed to drop table '{table}': {e}")
            return False
        logger.info(f"Dropped table '{table}'")
        return True

    def truncate(self, table: str, cascade: bool = False) -> int:
        """Remove every row of a table inside a transaction.

        Args:
            table: Table name
            cascade: Also truncate referencing tables (PostgreSQL only)

        Returns:
            Number of affected rows as reported by the backend
        """
        statement = self.renderer.truncate_sql(table, cascade)
        with self.connection.transaction():
            affected = self.connection.execute(statement)
        logger.info(f"Truncated table '{table}'")
        return affected
