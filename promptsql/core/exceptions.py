"""
Errors raised by the schema catalog and the prompt-to-query engine.

Routes translate them into JSON responses:
    TableNotFound        -> 404 (table routes) / 400 (query route)
    QueryExecutionError  -> 500 with the driver message in "details"
    SchemaDiscoveryError -> never reaches a route; logged at startup and
                            the catalog stays empty
"""


class PromptSQLError(Exception):
    """Base class for everything this package raises on purpose."""


class SchemaDiscoveryError(PromptSQLError):
    """The metadata query itself failed (connection lost, missing privilege)."""


class TableNotFound(PromptSQLError):
    """Requested table is not part of the discovered catalog."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(f"Table '{table}' not found")


class UnknownColumnError(PromptSQLError):
    """A query was about to reference a column the catalog does not know."""

    def __init__(self, table: str, column: str):
        self.table = table
        self.column = column
        super().__init__(f"Column '{column}' is not part of table '{table}'")


class QueryExecutionError(PromptSQLError):
    """The database rejected or failed a generated statement."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
