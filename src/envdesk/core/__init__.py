"""Core engine: parsing, classification, editing and file tracking."""

from envdesk.core.cache import EnvCache
from envdesk.core.debounce import Coordinator, Debouncer
from envdesk.core.document import FileDocument, MemoryDocument, ProjectFiles, TextBuffer, open_document
from envdesk.core.mutator import EditBatch, EnvMutator, TextEdit
from envdesk.core.parser import EnvLineParser, extract_value
from envdesk.core.registry import VariableRegistry, looks_secret
from envdesk.core.resolver import FileSetResolver, sort_by_priority
from envdesk.core.service import EnvFileService, normalize_key
from envdesk.core.watcher import EnvFileWatcher

__all__ = [
    # Parsing and classification
    "EnvLineParser",
    "extract_value",
    "VariableRegistry",
    "looks_secret",
    "FileSetResolver",
    "sort_by_priority",
    # Documents and edits
    "TextBuffer",
    "FileDocument",
    "MemoryDocument",
    "ProjectFiles",
    "open_document",
    "EnvMutator",
    "EditBatch",
    "TextEdit",
    # Service
    "EnvCache",
    "EnvFileService",
    "normalize_key",
    "Debouncer",
    "Coordinator",
    "EnvFileWatcher",
]
