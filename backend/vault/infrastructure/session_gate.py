"""SQL Session Gate — resolves caller -> account -> selected character, checks world state.

Invariants:
    - Only an active AccountLink resolves; inactive or missing links raise UnlinkedAccountError
    - An account with no selected character raises UnlinkedAccountError (nothing to act on)
    - The selected character must belong to the account, otherwise UnlinkedAccountError
    - validate_state reads the character's current world_state fresh on every call
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vault.core.domain_types import AccountId, CallerId, CharacterId, WorldState
from vault.core.enforce_exchange import check_world_state
from vault.core.errors import ResourceNotFoundError, UnlinkedAccountError
from vault.models.account import Account
from vault.models.account_link import AccountLink
from vault.models.character import Character


class SqlSessionGate:
    """SessionGate backed by the accounts / account_links / characters tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_active_account(self, caller: CallerId) -> AccountId:
        result = await self.db.execute(
            select(AccountLink)
            .where(AccountLink.caller == caller)
            .where(AccountLink.active.is_(True)),
        )
        link = result.scalar_one_or_none()
        if not link:
            raise UnlinkedAccountError(caller)
        return AccountId(link.account_id)

    async def selected_character(self, account: AccountId) -> CharacterId:
        result = await self.db.execute(
            select(Account.selected_character_id, Character.account_id)
            .select_from(Account)
            .outerjoin(Character, Character.id == Account.selected_character_id)
            .where(Account.id == account),
        )
        row = result.one_or_none()
        if row is None or row.selected_character_id is None:
            raise UnlinkedAccountError(account, "no character selected")
        if row.account_id != account:
            raise UnlinkedAccountError(
                account, "selected character does not belong to this account",
            )
        return CharacterId(row.selected_character_id)

    async def validate_state(
        self, character_id: CharacterId, required_state: WorldState,
    ) -> None:
        result = await self.db.execute(
            select(Character.world_state).where(Character.id == character_id),
        )
        state = result.scalar_one_or_none()
        if state is None:
            raise ResourceNotFoundError("Character", str(character_id))
        check_world_state(character_id, state, required_state)
