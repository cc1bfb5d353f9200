"""SQL Asset Registries — amulet and ship records with ownership queries.

Invariants:
    - Unknown ids raise ResourceNotFoundError (never treated as unowned)
    - validate_* methods raise on violation and return None on success
    - Ownership changes are immediate row updates inside the caller's transaction
"""

from sqlalchemy.ext.asyncio import AsyncSession

from vault.core.domain_types import AmuletId, CharacterId, ShipId
from vault.core.enforce_exchange import check_owner
from vault.core.errors import (
    AmuletNotEmptyError, AmuletNotFilledError, ResourceNotFoundError,
)
from vault.models.amulet import Amulet
from vault.models.ship import Ship


class SqlAmuletRegistry:
    """AmuletRegistry backed by the amulets table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, amulet_id: AmuletId) -> Amulet:
        amulet = await self.db.get(Amulet, amulet_id)
        if not amulet:
            raise ResourceNotFoundError("Amulet", str(amulet_id))
        return amulet

    async def owner(self, amulet_id: AmuletId) -> CharacterId | None:
        amulet = await self._get(amulet_id)
        return CharacterId(amulet.owner_id) if amulet.owner_id is not None else None

    async def set_owner(
        self, amulet_id: AmuletId, character_id: CharacterId | None,
    ) -> None:
        amulet = await self._get(amulet_id)
        amulet.owner_id = character_id
        await self.db.flush()

    async def is_soulbound(self, amulet_id: AmuletId) -> bool:
        return (await self._get(amulet_id)).soulbound

    async def is_filled(self, amulet_id: AmuletId) -> bool:
        return (await self._get(amulet_id)).is_filled

    async def validate_owner(
        self, amulet_id: AmuletId, character_id: CharacterId,
    ) -> None:
        check_owner("amulet", amulet_id, await self.owner(amulet_id), character_id)

    async def validate_empty(self, amulet_id: AmuletId) -> None:
        if await self.is_filled(amulet_id):
            raise AmuletNotEmptyError(amulet_id)

    async def validate_filled(self, amulet_id: AmuletId) -> None:
        if not await self.is_filled(amulet_id):
            raise AmuletNotFilledError(amulet_id)


class SqlShipRegistry:
    """ShipRegistry backed by the ships table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def owner(self, ship_id: ShipId) -> CharacterId | None:
        ship = await self.db.get(Ship, ship_id)
        if not ship:
            raise ResourceNotFoundError("Ship", str(ship_id))
        return CharacterId(ship.owner_id) if ship.owner_id is not None else None

    async def validate_owner(
        self, ship_id: ShipId, character_id: CharacterId,
    ) -> None:
        check_owner("ship", ship_id, await self.owner(ship_id), character_id)
