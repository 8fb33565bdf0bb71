"""Exceptions raised by the authorization engine."""


class StoreError(Exception):
    """The permission store could not answer a query.

    Raised when the backend is unreachable, the schema is missing or
    malformed, or a query fails to execute. It is never used to signal a
    denial: callers decide whether an outage means "deny", "retry" or
    "fail the request".

    Attributes:
        query: Name of the store query that failed (e.g., 'exists_grant').
    """

    def __init__(self, message: str, query: str = None):
        super().__init__(message)
        self.query = query
