"""Public API for the role-based AuthZ framework.

This module abstracts the authorization engine and provides a simple
interface for views, templates and services of the host application.
"""

from rbac_authz.api.data import *
from rbac_authz.api.permissions import *
from rbac_authz.engine.exceptions import StoreError
