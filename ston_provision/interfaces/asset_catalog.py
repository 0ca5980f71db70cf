"""Asset catalog protocol — listing of tradable assets."""
from typing import Protocol

from ..models import Asset


class AssetCatalog(Protocol):
    """Abstract interface for querying tradable assets."""

    async def query_assets(self, condition: str) -> list[Asset]: ...
