"""Data classes for representing authorization requests."""

from typing import Any, Optional

from attrs import define

from rbac_authz.engine.authorization import is_authenticated_user
from rbac_authz.models import Permission

__all__ = [
    "WILDCARD_METHOD",
    "AuthzRequestData",
]

WILDCARD_METHOD = Permission.WILDCARD


@define
class AuthzRequestData:
    """The parts of an incoming request the authorization engine cares about.

    The host application builds one of these per request from its session
    and routing layers.

    Attributes:
        user: The authenticated user (any object with an ``id``), or None.
        model_class: The model class the request targets (e.g., 'Beer'), or None.
        action: The action requested on the model class (e.g., 'edit'), or None.

    Examples:
        >>> request = AuthzRequestData(model_class="Beer", action="view")
        >>> str(request)
        'anonymous => view @ Beer'
    """

    user: Any = None
    model_class: Optional[str] = None
    action: Optional[str] = None

    def __str__(self):
        """Human readable string representation of the request."""
        user = self.user.id if is_authenticated_user(self.user) else "anonymous"
        return f"{user} => {self.action} @ {self.model_class}"
