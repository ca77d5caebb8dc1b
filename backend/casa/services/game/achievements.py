from typing import Iterable, List, Tuple

from casa.models import GameState, House

# (label, slots that must all be occupied). An empty tuple means "any slot".
ACHIEVEMENT_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ('Primera compra', ()),
    ('Sala completa', ('sofa', 'mesa', 'lampara', 'cuadro')),
    ('Cocina completa', ('cocina_mueble', 'cocina_frigorifico', 'cocina_horno')),
    ('Decoración verde', ('planta_suelo', 'planta_colgante')),
)


def _is_met(house: House, required: Tuple[str, ...]) -> bool:
    if not required:
        return len(house.placed) > 0
    return all(slot in house.placed for slot in required)


def evaluate_achievements(house: House, unlocked: Iterable[str]) -> List[str]:
    """Return the unlocked labels plus any newly earned ones.

    Never removes a label, so a placement being overwritten later does not
    take an achievement away. Calling it again on the same house is a no-op.
    """
    result = list(dict.fromkeys(unlocked))
    for label, required in ACHIEVEMENT_RULES:
        if label not in result and _is_met(house, required):
            result.append(label)
    return result


def refresh_achievements(state: GameState) -> List[str]:
    """Update state.achievements in place; returns the labels added."""
    before = set(state.achievements)
    state.achievements = evaluate_achievements(state.house, state.achievements)
    return [label for label in state.achievements if label not in before]
