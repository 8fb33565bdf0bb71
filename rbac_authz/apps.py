"""
rbac_authz Django application initialization.
"""

from django.apps import AppConfig


class RbacAuthzConfig(AppConfig):
    """
    Configuration for the rbac_authz Django application.
    """

    name = "rbac_authz"
    verbose_name = "Role-based AuthZ"
    default_auto_field = "django.db.models.AutoField"
    plugin_app = {
        "settings_config": {
            "lms.djangoapp": {
                "common": {"relative_path": "settings.common"},
            },
        },
    }
