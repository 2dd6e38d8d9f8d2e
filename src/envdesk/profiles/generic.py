"""Fallback profile for projects that match no framework."""

from envdesk.models.env import FileDefinition, VariableType
from envdesk.profiles.base import Profile, build_profile, define

GROUP_GENERAL = "general"
GROUP_DATABASE = "database"
GROUP_SERVER = "server"

_VARIABLES = [
    define("DEBUG", "Debug mode flag", GROUP_GENERAL, VariableType.BOOLEAN, ["true", "false"]),
    define("ENV", "Environment name", GROUP_GENERAL, VariableType.DROPDOWN, ["development", "production", "testing"]),
    define("LOG_LEVEL", "Logging level", GROUP_GENERAL, VariableType.DROPDOWN, ["debug", "info", "warning", "error"]),
    define("HOST", "Server host", GROUP_SERVER),
    define("PORT", "Server port", GROUP_SERVER, VariableType.INTEGER),
    define("DB_HOST", "Database host", GROUP_DATABASE),
    define("DB_PORT", "Database port", GROUP_DATABASE, VariableType.INTEGER),
    define("DB_NAME", "Database name", GROUP_DATABASE),
    define("DB_USER", "Database username", GROUP_DATABASE),
    define("DB_PASSWORD", "Database password", GROUP_DATABASE, secret=True),
]


def generic_profile() -> Profile:
    """Build the generic profile."""
    return build_profile(
        name="Generic",
        description="General purpose environment variables",
        variables=_VARIABLES,
        files=[FileDefinition.primary(), FileDefinition.local()],
        common_files=[".env", ".env.local"],
    )
