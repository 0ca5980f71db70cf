"""Router metadata protocol."""
from typing import Protocol

from ..models import RouterMetadata


class RouterMetadataService(Protocol):
    """Abstract interface for resolving router contract metadata."""

    async def get_router(self, router_address: str) -> RouterMetadata: ...
