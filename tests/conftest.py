"""Shared test fixtures for envdesk tests."""

from pathlib import Path

import pytest

from envdesk.core.document import MemoryDocument
from envdesk.core.mutator import EnvMutator
from envdesk.profiles.laravel import laravel_profile
from envdesk.utils.config import EnvDeskConfig, set_config

LARAVEL_ENV = """APP_NAME=Demo
APP_ENV=local
APP_KEY=base64:abc
APP_DEBUG=true

# Database
DB_CONNECTION=mysql
DB_HOST=127.0.0.1
DB_PORT=3306
DB_PASSWORD="s3cret pass"
"""

LARAVEL_EXAMPLE = """APP_NAME=Demo
APP_ENV=local
APP_KEY=
APP_DEBUG=true

# Database
DB_CONNECTION=mysql
DB_HOST=127.0.0.1
DB_PORT=3306
DB_PASSWORD=

# Mail
MAIL_MAILER=smtp
MAIL_HOST=mailpit
"""


@pytest.fixture(autouse=True)
def default_config():
    """Keep any user config file out of the tests."""
    set_config(EnvDeskConfig())
    yield
    set_config(EnvDeskConfig())


@pytest.fixture
def mutator() -> EnvMutator:
    """Create a mutator with a seeded random source."""
    import random

    return EnvMutator(rng=random.Random(1234))


@pytest.fixture
def make_doc():
    """Factory for in-memory documents."""

    def _make(text: str = "") -> MemoryDocument:
        return MemoryDocument(text)

    return _make


@pytest.fixture
def laravel():
    """The Laravel profile."""
    return laravel_profile()


@pytest.fixture
def laravel_project(tmp_path) -> Path:
    """Create a Laravel-looking project with .env and .env.example."""
    (tmp_path / "artisan").write_text("#!/usr/bin/env php\n")
    (tmp_path / ".env").write_text(LARAVEL_ENV)
    (tmp_path / ".env.example").write_text(LARAVEL_EXAMPLE)
    return tmp_path


@pytest.fixture
def node_project(tmp_path) -> Path:
    """Create a Node.js project with a local override but no primary file."""
    (tmp_path / "package.json").write_text('{"name": "demo"}\n')
    (tmp_path / ".env.local").write_text("PORT=3000\nJWT_SECRET=abc\n")
    return tmp_path
