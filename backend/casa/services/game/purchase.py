from casa.models import CatalogItem, GameState
from .achievements import refresh_achievements
from .errors import MissingSlot, MissingItem, InvalidSlot, InvalidItem, SlotMismatch, InsufficientPoints


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def validate_purchase(state: GameState, slot, item_id) -> CatalogItem:
    """Check that item_id may be placed in slot; returns the catalog item."""
    if _blank(slot):
        raise MissingSlot()
    if _blank(item_id):
        raise MissingItem()
    if slot not in state.house.slots:
        raise InvalidSlot()
    item = state.find_item(item_id)
    if item is None:
        raise InvalidItem()
    if item.slot != slot:
        raise SlotMismatch()
    return item


def preview_item(state: GameState, slot, item_id) -> CatalogItem:
    return validate_purchase(state, slot, item_id)


def purchase_item(state: GameState, slot, item_id) -> dict:
    """Spend points and place the item, replacing any previous occupant.

    The replaced item is not refunded. The caller persists.
    """
    item = validate_purchase(state, slot, item_id)
    if state.points < item.cost:
        raise InsufficientPoints()
    state.points -= item.cost
    state.house.placed[slot] = item.id
    refresh_achievements(state)
    return {
        'points': state.points,
        'placed': dict(state.house.placed),
        'achievements': list(state.achievements),
    }
