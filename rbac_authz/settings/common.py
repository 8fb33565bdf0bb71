"""
Common settings for rbac_authz plugin.
"""


def plugin_settings(settings):
    """
    Configure plugin settings for the host application.
    This function is called by the plugin system to configure the Django
    settings for this plugin.

    Args:
        settings: The Django settings object
    """
    # Set default RBAC_AUTHZ_DB_ALIAS if not already set.
    # This setting defines which database connection holds the roles,
    # role assignments and permissions tables.
    if not hasattr(settings, "RBAC_AUTHZ_DB_ALIAS"):
        settings.RBAC_AUTHZ_DB_ALIAS = "default"
