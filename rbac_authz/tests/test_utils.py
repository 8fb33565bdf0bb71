"""Test utilities for seeding users, roles, role assignments and permissions."""

from django.contrib.auth import get_user_model
from django.test import TestCase

from rbac_authz.models import AuthRole, Permission, RoleAssignment

User = get_user_model()


def grant(role: AuthRole, model_class: str, *methods: str) -> None:
    """Grant ``role`` each of ``methods`` on ``model_class``."""
    for method in methods:
        Permission.objects.create(auth_role=role, model_class=model_class, method=method)


def assign(user, *roles: AuthRole) -> None:
    """Assign each of ``roles`` to ``user``."""
    for role in roles:
        RoleAssignment.objects.create(user=user, auth_role=role)


class AuthzDataSetupMixin(TestCase):
    """Mixin seeding a small role/permission dataset.

    Roles:
        - editor: every method on Beer.
        - viewer: view on Beer.
        - wine_viewer: view on Wine.
        - beer_reviewer, beer_auditor: both grant edit on Beer.

    Users:
        - alice: editor
        - bob: viewer
        - carol: editor, wine_viewer
        - dave: beer_reviewer, beer_auditor
        - erin: no roles
        - frank: editor, viewer
    """

    @classmethod
    def setUpTestData(cls):
        """Set up the dataset once for the whole test class."""
        super().setUpTestData()
        cls.editor = AuthRole.objects.create(name="editor")
        cls.viewer = AuthRole.objects.create(name="viewer")
        cls.wine_viewer = AuthRole.objects.create(name="wine_viewer")
        cls.beer_reviewer = AuthRole.objects.create(name="beer_reviewer")
        cls.beer_auditor = AuthRole.objects.create(name="beer_auditor")

        grant(cls.editor, "Beer", Permission.WILDCARD)
        grant(cls.viewer, "Beer", "view")
        grant(cls.wine_viewer, "Wine", "view")
        grant(cls.beer_reviewer, "Beer", "edit")
        grant(cls.beer_auditor, "Beer", "edit")

        cls.alice = User.objects.create_user(username="alice")
        cls.bob = User.objects.create_user(username="bob")
        cls.carol = User.objects.create_user(username="carol")
        cls.dave = User.objects.create_user(username="dave")
        cls.erin = User.objects.create_user(username="erin")
        cls.frank = User.objects.create_user(username="frank")

        assign(cls.alice, cls.editor)
        assign(cls.bob, cls.viewer)
        assign(cls.carol, cls.editor, cls.wine_viewer)
        assign(cls.dave, cls.beer_reviewer, cls.beer_auditor)
        assign(cls.frank, cls.editor, cls.viewer)
