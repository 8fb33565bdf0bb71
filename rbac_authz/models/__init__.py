"""Database models for the authorization framework.

Roles, role assignments and permissions live in three tables whose names and
columns are kept compatible with existing deployments:

- ``auth_roles``: one row per named role.
- ``role_assignments``: many-to-many link between users and roles.
- ``permissions``: grants a role the right to call a method on a model class.

The authorization engine only reads these tables. They are maintained by
administrative tooling.
"""

from rbac_authz.models.core import *
