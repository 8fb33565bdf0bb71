"""
Relational permission store.

Translates the three authorization questions into SQL against the
``permissions`` and ``role_assignments`` tables:

    - Does a user hold a grant for (model_class, method), wildcard included?
    - Which model classes does a user hold any grant on?
    - Which methods does a user hold on a model class?

Queries go through an injected ``QueryRunner``. The default runner uses a
Django database connection, but any object providing the same interface
can be used (e.g., a runner bound to a read replica).

Each query template is rendered once per backend connection: table names
are quoted for the backend and the one-row limit uses the backend's own
syntax. Only the rendered SQL text is cached; results never are.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Hashable, Sequence

from django.db import Error as DatabaseError
from django.db import connections
from django.utils.connection import ConnectionDoesNotExist

from rbac_authz.engine.exceptions import StoreError
from rbac_authz.models import Permission, RoleAssignment

logger = logging.getLogger(__name__)

EXISTS_GRANT = "exists_grant"
DISTINCT_CLASSES_FOR_USER = "distinct_classes_for_user"
METHODS_FOR_USER_AND_CLASS = "methods_for_user_and_class"

QUERY_TEMPLATES = {
    EXISTS_GRANT: (
        "SELECT p.id FROM {permissions} p, {role_assignments} r "
        "WHERE r.user_id = %s "
        "AND p.model_class = %s "
        "AND (p.method = %s OR p.method = %s) "
        "AND p.auth_role_id = r.auth_role_id "
        "{limit_one}"
    ),
    DISTINCT_CLASSES_FOR_USER: (
        "SELECT DISTINCT p.model_class FROM {permissions} p, {role_assignments} r "
        "WHERE r.user_id = %s "
        "AND r.auth_role_id = p.auth_role_id"
    ),
    METHODS_FOR_USER_AND_CLASS: (
        "SELECT p.method FROM {permissions} p, {role_assignments} r "
        "WHERE r.user_id = %s "
        "AND p.model_class = %s "
        "AND p.auth_role_id = r.auth_role_id"
    ),
}


class QueryRunner(ABC):
    """Abstract handle able to run parameterized queries against a backend.

    Implementations must acquire whatever connection they need for the
    duration of a single call and release it on every exit path.
    """

    @property
    @abstractmethod
    def connection_key(self) -> Hashable:
        """Identify the backend connection prepared queries are bound to."""

    @abstractmethod
    def prepare(self, template: str) -> str:
        """Render a query template for this backend.

        Args:
            template: One of ``QUERY_TEMPLATES`` with ``{permissions}``,
                ``{role_assignments}`` and ``{limit_one}`` placeholders.

        Returns:
            str: SQL text ready to be executed with ``%s`` parameters.
        """

    @abstractmethod
    def fetch_value(self, sql: str, params: Sequence[Any]) -> Any:
        """Return the first column of the first row, or None without rows."""

    @abstractmethod
    def fetch_column(self, sql: str, params: Sequence[Any]) -> list:
        """Return the first column of every row, in backend order."""


class DjangoQueryRunner(QueryRunner):
    """Query runner backed by a Django database connection alias."""

    def __init__(self, db_alias: str = "default"):
        self.db_alias = db_alias

    @property
    def connection(self):
        # Django connections are per thread, so concurrent requests never share a cursor.
        return connections[self.db_alias]

    @property
    def connection_key(self) -> Hashable:
        return (self.db_alias, self.connection.vendor)

    def prepare(self, template: str) -> str:
        quote_name = self.connection.ops.quote_name
        return template.format(
            permissions=quote_name(Permission._meta.db_table),
            role_assignments=quote_name(RoleAssignment._meta.db_table),
            limit_one=self.connection.ops.limit_offset_sql(0, 1),
        )

    def fetch_value(self, sql: str, params: Sequence[Any]) -> Any:
        with self.connection.cursor() as cursor:
            cursor.execute(sql, params)
            row = cursor.fetchone()
        return row[0] if row else None

    def fetch_column(self, sql: str, params: Sequence[Any]) -> list:
        with self.connection.cursor() as cursor:
            cursor.execute(sql, params)
            rows = cursor.fetchall()
        return [row[0] for row in rows]


class PermissionStore:
    """Read-only access to role and permission facts.

    Attributes:
        runner (QueryRunner): Handle used to execute the queries.
    """

    def __init__(self, runner: QueryRunner):
        self.runner = runner
        self._prepared = {}
        self._lock = threading.Lock()

    def prepared_query(self, name: str) -> str:
        """Get the SQL text for ``name``, rendering it for the current connection if needed.

        Args:
            name: One of the keys of ``QUERY_TEMPLATES``.

        Returns:
            str: The backend specific SQL text.
        """
        key = (self.runner.connection_key, name)
        sql = self._prepared.get(key)
        if sql is None:
            with self._lock:
                sql = self._prepared.get(key)
                if sql is None:
                    sql = self.runner.prepare(QUERY_TEMPLATES[name])
                    self._prepared[key] = sql
                    logger.debug(f"Prepared query {name} for connection {key[0]}")
        return sql

    def exists_grant(self, user_id, model_class: str, method: str) -> bool:
        """Check whether any role of ``user_id`` grants ``method`` (or ``*``) on ``model_class``.

        Args:
            user_id: Identifier of an existing user.
            model_class: Name of the target model class (e.g., 'Beer').
            method: Name of the requested method (e.g., 'edit').

        Returns:
            bool: True if at least one matching permission row exists.

        Raises:
            StoreError: If the backend fails to answer.
        """
        row_id = self._run(
            EXISTS_GRANT,
            lambda sql: self.runner.fetch_value(sql, [user_id, model_class, method, Permission.WILDCARD]),
        )
        return row_id is not None

    def distinct_classes_for_user(self, user_id) -> set[str]:
        """Get every model class ``user_id`` holds at least one permission on.

        Raises:
            StoreError: If the backend fails to answer.
        """
        return set(self._run(DISTINCT_CLASSES_FOR_USER, lambda sql: self.runner.fetch_column(sql, [user_id])))

    def methods_for_user_and_class(self, user_id, model_class: str) -> list[str]:
        """Get the methods granted to ``user_id`` on ``model_class`` across all roles.

        The wildcard is returned as a literal ``*``. A method granted by two
        roles appears twice; no ordering is applied beyond the backend's.

        Raises:
            StoreError: If the backend fails to answer.
        """
        return self._run(
            METHODS_FOR_USER_AND_CLASS,
            lambda sql: self.runner.fetch_column(sql, [user_id, model_class]),
        )

    def _run(self, name: str, execute):
        """Prepare and execute a query, converting backend failures into StoreError."""
        try:
            return execute(self.prepared_query(name))
        except (DatabaseError, ConnectionDoesNotExist) as e:
            logger.error(f"Permission store query {name} failed: {e}")
            raise StoreError(f"Permission store query '{name}' failed: {e}", query=name) from e
