"""envdesk: structure-preserving management of project env files.

This package reads, classifies and edits ``KEY=VALUE`` env files,
including:

- **Parser**: Turn env file text into variables and classified lines
- **Profiles**: Variable and file catalogues for Laravel, Node.js, Django and generic projects
- **Resolver**: Pick the active env file among the ones a profile expects
- **Mutator**: Set, remove, rename, comment, organize, sync and back up without disturbing other lines
- **Service**: One project's env files behind a single facade, with caching and debounced edits

Usage:
    # Library API
    from envdesk import EnvFileService

    service = EnvFileService("path/to/project")
    service.rescan()
    for variable in service.variables():
        print(variable)

    service.set_variable("APP_DEBUG", "false")
    service.rename_variable("DB_PASS", "DB_PASSWORD")

CLI:
    envdesk list
    envdesk set APP_DEBUG false
    envdesk validate
    envdesk organize --by-group
    envdesk sync
"""

__version__ = "0.1.0"

# Core classes
from envdesk.core.mutator import EnvMutator
from envdesk.core.parser import EnvLineParser
from envdesk.core.registry import VariableRegistry
from envdesk.core.resolver import FileSetResolver
from envdesk.core.service import EnvFileService
from envdesk.core.document import FileDocument, MemoryDocument

# Models (commonly used)
from envdesk.models.env import FileDefinition, FileType, Variable, VariableDefinition, VariableType

# Profiles
from envdesk.profiles.base import Profile
from envdesk.profiles.selector import ProfileCatalog, ProfileSelector, ProjectSnapshot

__all__ = [
    "__version__",
    # Core
    "EnvMutator",
    "EnvLineParser",
    "VariableRegistry",
    "FileSetResolver",
    "EnvFileService",
    "FileDocument",
    "MemoryDocument",
    # Models
    "FileDefinition",
    "FileType",
    "Variable",
    "VariableDefinition",
    "VariableType",
    # Profiles
    "Profile",
    "ProfileCatalog",
    "ProfileSelector",
    "ProjectSnapshot",
]
