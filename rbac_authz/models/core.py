"""Core models for the authorization framework."""

from typing import ClassVar

from django.conf import settings
from django.db import models

__all__ = [
    "AuthRole",
    "RoleAssignment",
    "Permission",
]


class AuthRole(models.Model):
    """A named bundle of permissions that can be assigned to users.

    .. no_pii:

    The table is called ``auth_roles`` rather than ``roles`` so that the
    name stays free for the host application.
    """

    name = models.CharField(max_length=40)

    class Meta:
        db_table = "auth_roles"
        verbose_name = "Role"
        verbose_name_plural = "Roles"

    def __str__(self):
        return self.name


class RoleAssignment(models.Model):
    """Link between a user and a role the user has been assigned.

    .. no_pii:
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="role_assignments",
    )
    auth_role = models.ForeignKey(
        AuthRole,
        on_delete=models.CASCADE,
        related_name="assignments",
    )

    class Meta:
        db_table = "role_assignments"
        verbose_name = "Role Assignment"
        verbose_name_plural = "Role Assignments"
        constraints = [
            models.UniqueConstraint(fields=["user", "auth_role"], name="unique_user_auth_role"),
        ]

    def __str__(self):
        return f"{self.user_id} => {self.auth_role}"


class Permission(models.Model):
    """Grant of a role to invoke a method on a model class.

    .. no_pii:

    A ``method`` of ``*`` grants every method on the class. Wildcard and
    specific rows for the same role and class may coexist.
    """

    WILDCARD: ClassVar[str] = "*"

    auth_role = models.ForeignKey(
        AuthRole,
        on_delete=models.CASCADE,
        related_name="permissions",
    )
    model_class = models.CharField(max_length=100, db_index=True)
    method = models.CharField(max_length=100, db_index=True)

    class Meta:
        db_table = "permissions"
        verbose_name = "Permission"
        verbose_name_plural = "Permissions"
        constraints = [
            models.UniqueConstraint(
                fields=["auth_role", "model_class", "method"],
                name="unique_role_model_class_method",
            ),
        ]

    def __str__(self):
        return f"{self.auth_role} may {self.method} on {self.model_class}"
