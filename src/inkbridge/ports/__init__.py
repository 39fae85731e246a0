from .credentials import CredentialStore
from .network import NetworkProbe

__all__ = ["CredentialStore", "NetworkProbe"]
