"""Node.js profile."""

from envdesk.models.env import FileDefinition, FileType, VariableType
from envdesk.profiles.base import Profile, build_profile, define

GROUP_APP = "app"
GROUP_SERVER = "server"
GROUP_DATABASE = "database"
GROUP_AUTH = "authentication"
GROUP_APIS = "api"
GROUP_LOGGING = "logging"

_VARIABLES = [
    define(
        "NODE_ENV", "Node.js environment", GROUP_APP,
        VariableType.DROPDOWN, ["development", "production", "test", "staging"],
    ),
    define("APP_NAME", "Application name", GROUP_APP),
    define("PORT", "Server port number", GROUP_SERVER, VariableType.INTEGER),
    define("HOST", "Server host", GROUP_SERVER),
    define("BASE_URL", "Base URL for the application", GROUP_SERVER),
    define("API_PREFIX", "API route prefix", GROUP_APIS),
    define("DB_HOST", "Database host", GROUP_DATABASE),
    define("DB_PORT", "Database port", GROUP_DATABASE, VariableType.INTEGER),
    define("DB_NAME", "Database name", GROUP_DATABASE),
    define("DB_USER", "Database username", GROUP_DATABASE),
    define("DB_PASSWORD", "Database password", GROUP_DATABASE, secret=True),
    define("MONGODB_URI", "MongoDB connection URI", GROUP_DATABASE),
    define("JWT_SECRET", "JSON Web Token secret key", GROUP_AUTH, secret=True),
    define("JWT_EXPIRATION", "JWT expiration time (in seconds)", GROUP_AUTH, VariableType.INTEGER),
    define("SESSION_SECRET", "Session secret key", GROUP_AUTH, secret=True),
    define("STRIPE_API_KEY", "Stripe API key", GROUP_APIS, secret=True),
    define("SENDGRID_API_KEY", "SendGrid API key", GROUP_APIS, secret=True),
    define("AWS_ACCESS_KEY", "AWS access key", GROUP_APIS, secret=True),
    define("AWS_SECRET_KEY", "AWS secret key", GROUP_APIS, secret=True),
    define(
        "LOG_LEVEL", "Logging level", GROUP_LOGGING,
        VariableType.DROPDOWN, ["debug", "info", "warn", "error", "fatal"],
    ),
    define("SENTRY_DSN", "Sentry error tracking DSN", GROUP_LOGGING),
]


def nodejs_profile() -> Profile:
    """Build the Node.js profile."""
    return build_profile(
        name="NodeJS",
        description="Node.js environment variables",
        variables=_VARIABLES,
        files=[
            FileDefinition.primary(),
            FileDefinition.local(),
            FileDefinition.development(),
            FileDefinition.production(),
            FileDefinition(
                name=".env.test",
                description="Environment variables for testing",
                is_template=False,
                is_editable=True,
                priority=5,
                file_type=FileType.TESTING,
            ),
        ],
        common_files=[".env", ".env.local", ".env.development", ".env.production", ".env.test"],
    )
