"""Project profiles: variable and file catalogues per project type."""

from envdesk.profiles.base import Profile, build_profile, define
from envdesk.profiles.django import django_profile
from envdesk.profiles.generic import generic_profile
from envdesk.profiles.laravel import laravel_profile
from envdesk.profiles.nodejs import nodejs_profile
from envdesk.profiles.selector import ProfileCatalog, ProfileSelector, ProjectSnapshot

__all__ = [
    "Profile",
    "build_profile",
    "define",
    "laravel_profile",
    "nodejs_profile",
    "django_profile",
    "generic_profile",
    "ProfileCatalog",
    "ProfileSelector",
    "ProjectSnapshot",
]
