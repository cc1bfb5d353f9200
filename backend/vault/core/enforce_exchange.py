"""Exchange Rule Enforcement — pure pre/post-condition checks shared by all exchanges.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Raise the specific VaultError on violation, return None on success
    - Inputs are values already fetched by the coordinator (owner, flags, sizes)

Design Decisions:
    - Pure functions over method dispatch: testable without fakes or a database
    - Raise instead of returning error dicts: every violation aborts the whole
      exchange, so the exception is the only path the caller needs
"""

from typing import Sequence

from vault.core.domain_types import AmuletId, CharacterId, WorldState
from vault.core.errors import (
    BeltEmptyError,
    BeltOverflowError,
    InvalidQuantityError,
    InvalidWorldStateError,
    MismatchedQuantitiesError,
    NotOwnerError,
    SoulboundAmuletError,
    TooManyShipsError,
)

MAX_SHIPS_PER_DIRECTION = 1


def check_world_state(
    character_id: CharacterId, state: str, required: WorldState,
) -> None:
    """Only the single open state permits exchanges."""
    if state != required.value:
        raise InvalidWorldStateError(character_id, state, required.value)


def check_not_soulbound(amulet_id: AmuletId, soulbound: bool) -> None:
    if soulbound:
        raise SoulboundAmuletError(amulet_id)


def check_owner(
    asset_type: str, asset_id: int,
    owner: CharacterId | None, character_id: CharacterId,
) -> None:
    """Unowned assets fail the same way as assets owned by someone else."""
    if owner is None or owner != character_id:
        raise NotOwnerError(asset_type, asset_id, character_id)


def check_ship_counts(
    deposit_ids: Sequence[int], withdrawal_ids: Sequence[int],
) -> None:
    if (
        len(deposit_ids) > MAX_SHIPS_PER_DIRECTION
        or len(withdrawal_ids) > MAX_SHIPS_PER_DIRECTION
    ):
        raise TooManyShipsError(len(deposit_ids), len(withdrawal_ids))


def check_paired_quantities(
    ids: Sequence[int], quantities: Sequence[int], field_name: str,
) -> None:
    """id[i] pairs with quantity[i]; quantities are non-negative."""
    if len(ids) != len(quantities):
        raise MismatchedQuantitiesError(len(ids), len(quantities))
    for quantity in quantities:
        check_non_negative(field_name, quantity)


def check_non_negative(field_name: str, value: int) -> None:
    if value < 0:
        raise InvalidQuantityError(field_name, value)


def belt_is_overflowing(size: int, capacity: int) -> bool:
    return size > capacity


def check_belt_bounds(
    character_id: CharacterId,
    amulet_ids: Sequence[AmuletId],
    overflowing: bool,
    capacity: int,
) -> None:
    """Call-scoped postcondition: 0 < |belt| <= capacity. Overflow reported first."""
    if overflowing:
        raise BeltOverflowError(character_id, len(amulet_ids), capacity)
    if not amulet_ids:
        raise BeltEmptyError(character_id)
