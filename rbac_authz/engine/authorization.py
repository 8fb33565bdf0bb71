"""
Authorization decisions over the permission store.

Provides the ``AuthorizationEngine``, which applies argument validation and
user/class fallbacks around ``PermissionStore`` lookups:

    - Missing user, model class or action resolves to "not authorized" or an
      empty listing, without touching the store.
    - Store failures propagate as ``StoreError``; they are never reported as
      a denial.

Usage:
    from rbac_authz.engine.authorization import AuthorizationEngine
    allowed = AuthorizationEngine.get_engine().is_authorized(user, "edit", "Beer")

Reads the ``RBAC_AUTHZ_DB_ALIAS`` setting when building the default engine.
"""

import logging
import threading

from django.conf import settings

from rbac_authz.engine.store import DjangoQueryRunner, PermissionStore

logger = logging.getLogger(__name__)


def is_authenticated_user(user) -> bool:
    """Check whether ``user`` is an authenticated identity.

    Args:
        user: None, an anonymous user or an authenticated user object.

    Returns:
        bool: True if the user exists and is not anonymous.
    """
    if user is None:
        return False
    return bool(getattr(user, "is_authenticated", True))


class AuthorizationEngine:
    """Stateless decision functions layered over a ``PermissionStore``.

    Instances can be shared between threads: they hold no per-call state and
    every query acquires and releases its own connection.

    Attributes:
        store (PermissionStore): The store answering the lookups.
    """

    _engine = None
    _lock = threading.Lock()

    def __init__(self, store: PermissionStore):
        self.store = store

    @classmethod
    def get_engine(cls) -> "AuthorizationEngine":
        """Get the process-wide engine, creating it if needed.

        Returns:
            AuthorizationEngine: Engine bound to the ``RBAC_AUTHZ_DB_ALIAS`` connection.
        """
        if cls._engine is None:
            with cls._lock:
                if cls._engine is None:
                    db_alias = getattr(settings, "RBAC_AUTHZ_DB_ALIAS", "default")
                    cls._engine = cls(PermissionStore(DjangoQueryRunner(db_alias)))
                    logger.info(f"Initialized authorization engine with DB alias '{db_alias}'")
        return cls._engine

    @classmethod
    def reset_engine(cls):
        """Drop the process-wide engine so the next call builds a new one."""
        with cls._lock:
            cls._engine = None

    def is_authorized(self, current_user, action: str, model_class: str) -> bool:
        """Check whether ``current_user`` may invoke ``action`` on ``model_class``.

        Args:
            current_user: The authenticated user, None or an anonymous user.
            action: The requested method name (e.g., 'delete').
            model_class: The target model class name (e.g., 'Beer').

        Returns:
            bool: True if any role of the user grants the action or the wildcard.

        Raises:
            StoreError: If the store cannot answer.
        """
        if not is_authenticated_user(current_user):
            logger.debug("Authorization denied: no authenticated user")
            return False
        if not model_class:
            logger.debug(f"Authorization denied for user {current_user.id}: no model class")
            return False
        if not action:
            logger.debug(f"Authorization denied for user {current_user.id} on {model_class}: no action")
            return False

        allowed = self.store.exists_grant(current_user.id, model_class, action)
        logger.debug(f"User {current_user.id} {'may' if allowed else 'may not'} {action} on {model_class}")
        return allowed

    def authorized_classes(self, current_user=None, user_id=None) -> set[str]:
        """Get the model classes a user holds any permission on.

        Args:
            current_user: Fallback identity when ``user_id`` is not given.
            user_id: Explicit user identifier, takes precedence over ``current_user``.

        Returns:
            set[str]: Model class names, empty if no user can be resolved.
        """
        user_id = self._resolve_user_id(current_user, user_id)
        if user_id is None:
            return set()
        return self.store.distinct_classes_for_user(user_id)

    def authorized_methods(self, current_user=None, user_id=None, model_class=None, current_class=None) -> list[str]:
        """Get the methods a user may invoke on a model class.

        Args:
            current_user: Fallback identity when ``user_id`` is not given.
            user_id: Explicit user identifier, takes precedence over ``current_user``.
            model_class: Explicit model class, takes precedence over ``current_class``.
            current_class: The model class of the current request, if any.

        Returns:
            list[str]: Granted methods in backend order, ``*`` included and
                duplicates kept. Empty if no user or class can be resolved.
        """
        user_id = self._resolve_user_id(current_user, user_id)
        model_class = model_class or current_class
        if user_id is None or not model_class:
            return []
        return self.store.methods_for_user_and_class(user_id, model_class)

    @staticmethod
    def _resolve_user_id(current_user, user_id):
        if user_id is not None and user_id != "":
            return user_id
        if is_authenticated_user(current_user):
            return current_user.id
        return None
