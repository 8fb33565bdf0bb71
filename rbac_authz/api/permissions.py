"""Public API for permission checks and listings.

A permission is granted to a role for a method on a model class. Users
acquire permissions by being assigned roles, and a method of ``*`` grants
every method on the class.

The listing functions are meant for building navigation and action menus,
so a request without a user or a model class yields an empty result instead
of an error.
"""

from typing import Iterable, Optional

from rbac_authz.api.data import WILDCARD_METHOD, AuthzRequestData
from rbac_authz.engine.authorization import AuthorizationEngine

__all__ = [
    "authorize",
    "is_authorized",
    "get_authorized_classes",
    "get_authorized_methods",
    "get_permitted_actions",
    "method_grants_action",
]


def authorize(request: AuthzRequestData) -> bool:
    """Check whether the request's user may perform the request's action on its model class.

    Requests without a user or without a model class are turned down. The
    host application should handle those cases before calling this function
    when it needs a different response for them.

    Args:
        request: The request context.

    Returns:
        bool: True if authorization is granted, False otherwise.
    """
    return is_authorized(request.user, request.action, request.model_class)


def is_authorized(user, action: str, model_class: str) -> bool:
    """Check whether a user may invoke an action on a model class.

    Args:
        user: The authenticated user, or None.
        action: The action to check (e.g., 'edit').
        model_class: The target model class (e.g., 'Beer').

    Returns:
        bool: True if one of the user's roles grants the action or the wildcard.
    """
    return AuthorizationEngine.get_engine().is_authorized(user, action, model_class)


def get_authorized_classes(
    user=None,
    user_id=None,
    request: Optional[AuthzRequestData] = None,
) -> set[str]:
    """Get the model classes a user holds any permission on.

    Args:
        user: The current user, used when ``user_id`` is not given.
        user_id: Explicit user identifier.
        request: Request context supplying the current user when ``user`` is not given.

    Returns:
        set[str]: Model class names (e.g., {'Beer', 'Brewery'}).
    """
    if user is None and request is not None:
        user = request.user
    return AuthorizationEngine.get_engine().authorized_classes(user, user_id)


def get_authorized_methods(
    user=None,
    user_id=None,
    model_class: Optional[str] = None,
    request: Optional[AuthzRequestData] = None,
) -> list[str]:
    """Get the methods a user may invoke on a model class.

    Args:
        user: The current user, used when ``user_id`` is not given.
        user_id: Explicit user identifier.
        model_class: Explicit model class name.
        request: Request context supplying the current user and model class fallbacks.

    Returns:
        list[str]: Granted methods, possibly including ``*`` and duplicates.

    Examples:
        >>> get_authorized_methods(request=AuthzRequestData(user=alice, model_class="Beer"))
        ['view', 'edit']
        >>> get_authorized_methods(user_id=bob.id, model_class="Brewery")
        ['*']
    """
    current_class = None
    if request is not None:
        user = user if user is not None else request.user
        current_class = request.model_class
    return AuthorizationEngine.get_engine().authorized_methods(user, user_id, model_class, current_class)


def method_grants_action(granted_method: str, action: str) -> bool:
    """Check whether a granted method allows an action.

    Args:
        granted_method: A method returned by ``get_authorized_methods``.
        action: The action to check (e.g., 'delete').

    Returns:
        bool: True for the wildcard or an exact match, False when no action is given.
    """
    if not action:
        return False
    return granted_method == WILDCARD_METHOD or granted_method == action


def get_permitted_actions(
    actions: Iterable[str],
    user=None,
    user_id=None,
    model_class: Optional[str] = None,
    request: Optional[AuthzRequestData] = None,
) -> list[str]:
    """Filter candidate actions down to the ones a user may invoke on a model class.

    Useful to decide which buttons to display (e.g., 'edit', 'delete') next
    to an object, with a single store query.

    Args:
        actions: Candidate actions, in display order.
        user: The current user, used when ``user_id`` is not given.
        user_id: Explicit user identifier.
        model_class: Explicit model class name.
        request: Request context supplying the current user and model class fallbacks.

    Returns:
        list[str]: The permitted candidate actions, in their original order.
    """
    granted = get_authorized_methods(user=user, user_id=user_id, model_class=model_class, request=request)
    return [action for action in actions if any(method_grants_action(method, action) for method in granted)]
