from .file_store import FileCredentialStore
from .keyring_store import KeyringCredentialStore, KeyringUnavailableError
from .memory import MemoryCredentialStore

__all__ = [
    "FileCredentialStore",
    "KeyringCredentialStore",
    "KeyringUnavailableError",
    "MemoryCredentialStore",
]
