"""
Databricks Authentication Helpers

Provides authentication utilities for connecting to Databricks workspaces
using profiles from ~/.databrickscfg, an explicit host or environment variables.
"""

import os

from databricks.sdk import WorkspaceClient

from camusql.domain.errors import ConnectionFailureError


class AuthenticationError(ConnectionFailureError):
    """Raised when authentication fails"""


def create_databricks_client(profile: str | None = None, host: str | None = None) -> WorkspaceClient:
    """Create authenticated Databricks client

    Authentication priority:
    1. Profile from ~/.databrickscfg (if profile specified)
    2. Explicit host (token from DATABRICKS_TOKEN)
    3. Environment variables / DEFAULT profile

    Args:
        profile: Databricks profile name (e.g., "DEV", "PROD")
        host: Workspace URL, used when no profile is given

    Returns:
        Authenticated WorkspaceClient instance

    Raises:
        AuthenticationError: If authentication fails or credentials not found
    """
    try:
        if profile:
            client = WorkspaceClient(profile=profile)
        elif host:
            client = WorkspaceClient(host=host)
        else:
            client = WorkspaceClient()

        validate_auth(client)
        return client

    except Exception as e:
        raise AuthenticationError(message=_format_auth_error(e, profile)) from e


def validate_auth(client: WorkspaceClient) -> None:
    """Validate authentication with a cheap API call

    Raises:
        AuthenticationError: If authentication is invalid
    """
    try:
        client.current_user.me()
    except Exception as e:
        raise AuthenticationError(message=f"Authentication validation failed: {e}") from e


def check_profile_exists(profile: str) -> bool:
    """Check if a Databricks profile exists in ~/.databrickscfg"""
    config_path = os.path.expanduser("~/.databrickscfg")

    if not os.path.exists(config_path):
        return False

    try:
        with open(config_path) as f:
            return f"[{profile}]" in f.read()
    except OSError:
        return False


def _format_auth_error(error: Exception, profile: str | None) -> str:
    """Format authentication error with troubleshooting hints"""
    messages = ["Failed to authenticate with Databricks"]

    if profile:
        messages.append(f"Profile: {profile}")
        if not check_profile_exists(profile):
            messages.append(f"Profile '{profile}' not found in ~/.databrickscfg")
            messages.append(f"Run 'databricks configure --profile {profile}'")
    else:
        messages.append("Profile: DEFAULT or environment variables")
        has_env_vars = bool(os.getenv("DATABRICKS_HOST") and os.getenv("DATABRICKS_TOKEN"))
        if not has_env_vars and not check_profile_exists("DEFAULT"):
            messages.append("No authentication configured")
            messages.append("Set DATABRICKS_HOST/DATABRICKS_TOKEN or add Profile=<name>")

    messages.append(f"Error details: {error}")
    return "\n".join(messages)
