"""
Finale Inventory API module.
"""

from cost_sync.finale.client import FinaleClient, FinaleClientError, FinaleAuthError
from cost_sync.finale.staging import CatalogStage

__all__ = [
    "FinaleClient",
    "FinaleClientError",
    "FinaleAuthError",
    "CatalogStage",
]
