"""Test suite for the permissions API functions."""

from unittest.mock import Mock, patch

from ddt import data, ddt, unpack
from django.contrib.auth.models import AnonymousUser
from django.test import SimpleTestCase

from rbac_authz import api
from rbac_authz.api.data import AuthzRequestData
from rbac_authz.api.permissions import (
    authorize,
    get_authorized_classes,
    get_authorized_methods,
    get_permitted_actions,
    is_authorized,
    method_grants_action,
)
from rbac_authz.engine.authorization import AuthorizationEngine
from rbac_authz.tests.test_utils import AuthzDataSetupMixin


@ddt
class TestPermissionsAPI(AuthzDataSetupMixin):
    """Test suite for the permissions API against the seeded database."""

    def setUp(self):
        super().setUp()
        AuthorizationEngine.reset_engine()

    @data(
        ("alice", "delete", "Beer", True),
        ("alice", "delete", "Wine", False),
        ("bob", "view", "Beer", True),
        ("bob", "edit", "Beer", False),
    )
    @unpack
    def test_authorize_request(self, username, action, model_class, expected):
        """Test that a request context is authorized from its user, action and class."""
        request = AuthzRequestData(user=getattr(self, username), model_class=model_class, action=action)

        self.assertEqual(authorize(request), expected)
        self.assertEqual(is_authorized(request.user, action, model_class), expected)

    @data(
        AuthzRequestData(model_class="Beer", action="view"),
        AuthzRequestData(user=AnonymousUser(), model_class="Beer", action="view"),
    )
    def test_authorize_request_without_user(self, request):
        """Test that requests without an authenticated user are turned down."""
        self.assertFalse(authorize(request))

    def test_authorize_request_without_model_class(self):
        """Test that requests without a model class are turned down."""
        self.assertFalse(authorize(AuthzRequestData(user=self.alice, action="view")))

    @data(None, "")
    def test_authorize_request_without_action(self, action):
        """Test that requests naming no action are turned down, even under a wildcard grant."""
        self.assertFalse(authorize(AuthzRequestData(user=self.alice, model_class="Beer", action=action)))

    def test_get_authorized_classes(self):
        """Test class listings for the current user, a request and an explicit user id."""
        self.assertEqual(get_authorized_classes(self.carol), {"Beer", "Wine"})
        self.assertEqual(get_authorized_classes(request=AuthzRequestData(user=self.bob)), {"Beer"})
        self.assertEqual(get_authorized_classes(user_id=self.carol.id), {"Beer", "Wine"})
        self.assertEqual(get_authorized_classes(), set())

    def test_get_authorized_methods_from_request(self):
        """Test that the request supplies both the user and the model class."""
        request = AuthzRequestData(user=self.bob, model_class="Beer", action="list")

        self.assertEqual(get_authorized_methods(request=request), ["view"])

    def test_get_authorized_methods_explicit_class_overrides_request(self):
        """Test that an explicit class takes precedence over the request's class."""
        request = AuthzRequestData(user=self.carol, model_class="Beer")

        self.assertEqual(get_authorized_methods(model_class="Wine", request=request), ["view"])

    def test_get_authorized_methods_explicit_user_overrides_request(self):
        """Test that an explicit user id takes precedence over the request's user."""
        request = AuthzRequestData(user=self.erin, model_class="Beer")

        self.assertEqual(get_authorized_methods(user_id=self.alice.id, request=request), ["*"])

    def test_get_authorized_methods_without_class(self):
        """Test that no resolvable class yields an empty list."""
        self.assertEqual(get_authorized_methods(self.alice), [])
        self.assertEqual(get_authorized_methods(request=AuthzRequestData(user=self.alice)), [])

    @data(
        ("alice", ["view", "edit", "delete"], ["view", "edit", "delete"]),
        ("bob", ["view", "edit", "delete"], ["view"]),
        ("dave", ["delete", "edit"], ["edit"]),
        ("erin", ["view", "edit"], []),
    )
    @unpack
    def test_get_permitted_actions(self, username, candidates, expected):
        """Test that candidate actions are filtered in their original order."""
        user = getattr(self, username)

        self.assertEqual(get_permitted_actions(candidates, user=user, model_class="Beer"), expected)

    def test_get_permitted_actions_with_request(self):
        """Test filtering with the user and class supplied by a request."""
        request = AuthzRequestData(user=self.carol, model_class="Wine")

        self.assertEqual(get_permitted_actions(["edit", "view"], request=request), ["view"])


@ddt
class TestPermissionsHelpers(SimpleTestCase):
    """Test suite for helpers that do not touch the permission store."""

    @data(
        ("*", "delete", True),
        ("edit", "edit", True),
        ("view", "edit", False),
        ("*", "", False),
        ("*", None, False),
    )
    @unpack
    def test_method_grants_action(self, granted_method, action, expected):
        """Test the wildcard and exact match rules, and that a missing action is never granted."""
        self.assertEqual(method_grants_action(granted_method, action), expected)

    def test_request_string_representation(self):
        """Test the human readable representation of a request."""
        self.assertEqual(str(AuthzRequestData(model_class="Beer", action="view")), "anonymous => view @ Beer")
        self.assertEqual(
            str(AuthzRequestData(user=Mock(id=3), model_class="Beer", action="edit")),
            "3 => edit @ Beer",
        )
        self.assertEqual(
            str(AuthzRequestData(user=AnonymousUser(), model_class="Beer", action="view")),
            "anonymous => view @ Beer",
        )

    def test_store_error_is_exported(self):
        """Test that callers can catch store failures from the public API."""
        engine = Mock()
        engine.is_authorized.side_effect = api.StoreError("backend down", query="exists_grant")

        with patch.object(AuthorizationEngine, "get_engine", return_value=engine):
            with self.assertRaises(api.StoreError):
                api.is_authorized(Mock(id=1), "view", "Beer")
