"""promptsql - schema introspection and prompt-to-SQL over HTTP."""

__version__ = "0.1.0"
