"""
Test settings for rbac_authz plugin.
"""

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": "default.db",
        "USER": "",
        "PASSWORD": "",
        "HOST": "",
        "PORT": "",
    }
}

INSTALLED_APPS = (
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "rbac_authz.apps.RbacAuthzConfig",
)

SECRET_KEY = "test-secret-key"

USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

# Authorization configuration
RBAC_AUTHZ_DB_ALIAS = "default"
