"""Django profile."""

from envdesk.models.env import FileDefinition, FileType, VariableType
from envdesk.profiles.base import Profile, build_profile, define

GROUP_CORE = "core"
GROUP_DATABASE = "database"
GROUP_EMAIL = "email"
GROUP_AWS = "aws"
GROUP_CACHE = "cache"
GROUP_DEBUG = "debug"
GROUP_SECURITY = "security"
GROUP_API = "api"

_VARIABLES = [
    define("DJANGO_SETTINGS_MODULE", "Django settings module path", GROUP_CORE),
    define("SECRET_KEY", "Secret key used for cryptographic signing", GROUP_SECURITY, secret=True),
    define("DEBUG", "Enable/disable debug mode", GROUP_DEBUG, VariableType.DROPDOWN, ["True", "False"]),
    define("ALLOWED_HOSTS", "List of allowed hosts", GROUP_SECURITY),
    define(
        "DJANGO_ENV", "Environment (development/production/etc)", GROUP_CORE,
        VariableType.DROPDOWN, ["development", "production", "staging", "testing"],
    ),
    define("DATABASE_URL", "Database connection URL", GROUP_DATABASE),
    define(
        "DB_ENGINE", "Database engine", GROUP_DATABASE, VariableType.DROPDOWN,
        [
            "django.db.backends.postgresql",
            "django.db.backends.mysql",
            "django.db.backends.sqlite3",
            "django.db.backends.oracle",
        ],
    ),
    define("DB_NAME", "Database name", GROUP_DATABASE),
    define("DB_USER", "Database username", GROUP_DATABASE),
    define("DB_PASSWORD", "Database password", GROUP_DATABASE, secret=True),
    define("DB_HOST", "Database host", GROUP_DATABASE),
    define("DB_PORT", "Database port", GROUP_DATABASE, VariableType.INTEGER),
    define(
        "EMAIL_BACKEND", "Email backend", GROUP_EMAIL, VariableType.DROPDOWN,
        [
            "django.core.mail.backends.smtp.EmailBackend",
            "django.core.mail.backends.console.EmailBackend",
            "django.core.mail.backends.filebased.EmailBackend",
        ],
    ),
    define("EMAIL_HOST", "SMTP server host", GROUP_EMAIL),
    define("EMAIL_PORT", "SMTP server port", GROUP_EMAIL, VariableType.INTEGER),
    define("EMAIL_HOST_USER", "SMTP server username", GROUP_EMAIL),
    define("EMAIL_HOST_PASSWORD", "SMTP server password", GROUP_EMAIL, secret=True),
    define("EMAIL_USE_TLS", "Use TLS for SMTP", GROUP_EMAIL, VariableType.DROPDOWN, ["True", "False"]),
    define("CACHE_URL", "Cache backend URL", GROUP_CACHE),
    define("REDIS_URL", "Redis connection URL", GROUP_CACHE),
    define("AWS_ACCESS_KEY_ID", "AWS access key ID", GROUP_AWS),
    define("AWS_SECRET_ACCESS_KEY", "AWS secret access key", GROUP_AWS, secret=True),
    define("AWS_STORAGE_BUCKET_NAME", "AWS S3 bucket name", GROUP_AWS),
    define("AWS_S3_REGION_NAME", "AWS S3 region name", GROUP_AWS),
    define("API_KEY", "API key for third-party services", GROUP_API, secret=True),
    define("STRIPE_API_KEY", "Stripe payment API key", GROUP_API, secret=True),
    define("SENTRY_DSN", "Sentry error tracking DSN", GROUP_API),
]


def django_profile() -> Profile:
    """Build the Django profile."""
    return build_profile(
        name="Django",
        description="Django environment variables",
        variables=_VARIABLES,
        files=[
            FileDefinition.primary(),
            FileDefinition.local(),
            FileDefinition.development(),
            FileDefinition.production(),
            FileDefinition(
                name=".env.py",
                description="Python module environment variables",
                is_template=False,
                is_editable=True,
                priority=6,
                file_type=FileType.CUSTOM,
            ),
        ],
        common_files=[".env", ".env.local", ".env.development", ".env.production"],
    )
