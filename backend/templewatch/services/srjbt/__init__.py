"""Temple booking API (online.srjbtkshetra.org): client, config and response types."""
from templewatch.services.srjbt.client import SrjbtClient
from templewatch.services.srjbt.config import SrjbtConfig

__all__ = ["SrjbtClient", "SrjbtConfig"]
