"""Laravel framework profile."""

from envdesk.models.env import FileDefinition, VariableType
from envdesk.profiles.base import Profile, build_profile, define

GROUP_APP = "app"
GROUP_DATABASE = "database"
GROUP_LOGGING = "logging"
GROUP_BROADCAST = "broadcast"
GROUP_CACHE = "cache"
GROUP_QUEUE = "queue"
GROUP_SESSION = "session"
GROUP_MAIL = "mail"
GROUP_PUSHER = "pusher"
GROUP_AWS = "aws"
GROUP_REDIS = "redis"
GROUP_VITE_PUSHER = "vite_pusher"

_VARIABLES = [
    # App
    define("APP_NAME", "Application name", GROUP_APP),
    define(
        "APP_ENV", "Application environment", GROUP_APP,
        VariableType.DROPDOWN, ["local", "production", "testing", "staging"],
    ),
    define("APP_KEY", "Application encryption key", GROUP_APP, secret=True),
    define("APP_DEBUG", "Application debug mode", GROUP_APP, VariableType.BOOLEAN, ["true", "false"]),
    define("APP_URL", "Application URL", GROUP_APP),
    define(
        "APP_TIMEZONE", "Application timezone", GROUP_APP,
        VariableType.DROPDOWN, ["UTC", "Europe/London", "America/New_York", "Asia/Tokyo", "Australia/Sydney"],
    ),
    # Logging
    define(
        "LOG_CHANNEL", "Specifies the default logging channel", GROUP_LOGGING,
        VariableType.DROPDOWN, ["stack", "single", "daily", "slack"],
    ),
    define(
        "LOG_LEVEL", "Minimum log level to record", GROUP_LOGGING,
        VariableType.DROPDOWN,
        ["debug", "info", "notice", "warning", "error", "critical", "alert", "emergency"],
    ),
    # Database
    define(
        "DB_CONNECTION", "Database connection driver", GROUP_DATABASE,
        VariableType.DROPDOWN, ["mysql", "pgsql", "sqlite", "sqlsrv"],
    ),
    define("DB_HOST", "Database server host", GROUP_DATABASE),
    define("DB_PORT", "Database server port", GROUP_DATABASE, VariableType.INTEGER),
    define("DB_DATABASE", "Name of the database", GROUP_DATABASE),
    define("DB_USERNAME", "Database username", GROUP_DATABASE),
    define("DB_PASSWORD", "Database password", GROUP_DATABASE, secret=True),
    # Broadcast, cache, queue
    define(
        "BROADCAST_DRIVER", "Broadcast driver for real-time events", GROUP_BROADCAST,
        VariableType.DROPDOWN, ["pusher", "redis", "log", "null"],
    ),
    define(
        "CACHE_DRIVER", "Cache system used by the application", GROUP_CACHE,
        VariableType.DROPDOWN, ["file", "database", "redis", "memcached", "array"],
    ),
    define(
        "QUEUE_CONNECTION", "Queue backend connection name", GROUP_QUEUE,
        VariableType.DROPDOWN, ["sync", "database", "redis", "sqs"],
    ),
    # Session
    define(
        "SESSION_DRIVER", "Session storage mechanism", GROUP_SESSION,
        VariableType.DROPDOWN, ["file", "cookie", "database", "redis", "array"],
    ),
    define(
        "SESSION_LIFETIME", "Number of minutes that sessions are allowed to remain idle",
        GROUP_SESSION, VariableType.INTEGER,
    ),
    # Redis
    define("REDIS_HOST", "Redis server host", GROUP_REDIS),
    define("REDIS_PASSWORD", "Redis password", GROUP_REDIS, secret=True),
    define("REDIS_PORT", "Redis server port", GROUP_REDIS, VariableType.INTEGER),
    # Mail
    define(
        "MAIL_MAILER", "Mail sending driver", GROUP_MAIL,
        VariableType.DROPDOWN, ["smtp", "sendmail", "mailgun", "ses", "postmark", "log", "array"],
    ),
    define("MAIL_HOST", "SMTP server hostname", GROUP_MAIL),
    define("MAIL_PORT", "SMTP server port", GROUP_MAIL, VariableType.INTEGER),
    define("MAIL_USERNAME", "SMTP username", GROUP_MAIL),
    define("MAIL_PASSWORD", "SMTP password", GROUP_MAIL, secret=True),
    define("MAIL_ENCRYPTION", "Encryption protocol for mail", GROUP_MAIL, VariableType.DROPDOWN, ["ssl", "tls", ""]),
    define("MAIL_FROM_ADDRESS", "Email address used as sender", GROUP_MAIL),
    define("MAIL_FROM_NAME", "Sender name for emails", GROUP_MAIL),
    # Pusher
    define("PUSHER_APP_ID", "Pusher app ID for broadcasting", GROUP_PUSHER),
    define("PUSHER_APP_KEY", "Pusher app key", GROUP_PUSHER),
    define("PUSHER_APP_SECRET", "Pusher app secret", GROUP_PUSHER, secret=True),
    define("PUSHER_APP_CLUSTER", "Pusher cluster location", GROUP_PUSHER),
    # AWS
    define("AWS_ACCESS_KEY_ID", "AWS access key", GROUP_AWS),
    define("AWS_SECRET_ACCESS_KEY", "AWS secret key", GROUP_AWS, secret=True),
    define("AWS_DEFAULT_REGION", "AWS region", GROUP_AWS),
    define("AWS_BUCKET", "S3 bucket name", GROUP_AWS),
    # Vite
    define("VITE_PUSHER_APP_KEY", "For frontend tooling with Vite using Pusher", GROUP_VITE_PUSHER, secret=True),
    define("VITE_PUSHER_HOST", "Host for Pusher, often localhost or remote", GROUP_VITE_PUSHER),
    define("VITE_PUSHER_PORT", "Port for Pusher", GROUP_VITE_PUSHER, VariableType.INTEGER),
    define("VITE_PUSHER_SCHEME", "Connection scheme", GROUP_VITE_PUSHER, VariableType.DROPDOWN, ["http", "https"]),
    define("VITE_PUSHER_APP_CLUSTER", "Pusher cluster, e.g. 'mt1'", GROUP_VITE_PUSHER),
]


def laravel_profile() -> Profile:
    """Build the Laravel profile."""
    return build_profile(
        name="Laravel",
        description="Laravel framework environment variables",
        variables=_VARIABLES,
        files=[
            FileDefinition.primary(),
            FileDefinition.example(),
            FileDefinition.testing(),
            FileDefinition.local(),
            FileDefinition.production(),
        ],
        common_files=[".env", ".env.example", ".env.testing"],
        supports_cli_actions=True,
        supports_template_files=True,
    )
