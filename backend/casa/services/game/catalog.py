from typing import List

from casa.models import CatalogItem, GameState, House

DEFAULT_THEME = 'default'

HOUSE_SLOTS = (
    'sofa', 'mesa', 'lampara', 'cuadro',
    'cocina_mueble', 'cocina_frigorifico', 'cocina_horno',
    'planta_suelo', 'planta_colgante',
    'alfombra', 'estanteria',
)

# (id, slot, category, name, cost, image)
_CATALOG_ROWS = (
    ('sofa_clasico', 'sofa', 'Sala', 'Sofá clásico', 30, 'img/sofa1.svg'),
    ('sofa_moderno', 'sofa', 'Sala', 'Sofá moderno', 45, 'img/sofa2.svg'),
    ('mesa_roble', 'mesa', 'Sala', 'Mesa de roble', 25, 'img/mesa1.svg'),
    ('mesa_vidrio', 'mesa', 'Sala', 'Mesa de vidrio', 35, 'img/mesa2.svg'),
    ('lampara_pie', 'lampara', 'Iluminación', 'Lámpara de pie', 20, 'img/lampara1.svg'),
    ('lampara_mod', 'lampara', 'Iluminación', 'Lámpara moderna', 32, 'img/lampara_mod.svg'),
    ('cuadro_mar', 'cuadro', 'Decoración', 'Cuadro marino', 15, 'img/cuadro1.svg'),
    ('cuadro_montana', 'cuadro', 'Decoración', 'Cuadro montaña', 22, 'img/cuadro_montana.svg'),
    ('cocina_mueble_blanco', 'cocina_mueble', 'Cocina', 'Mueble cocina blanco', 40, 'img/cocina_mueble_blanco.svg'),
    ('cocina_mueble_madera', 'cocina_mueble', 'Cocina', 'Mueble cocina madera', 50, 'img/cocina_mueble_madera.svg'),
    ('frigo_blanco', 'cocina_frigorifico', 'Cocina', 'Frigorífico blanco', 55, 'img/frigo_blanco.svg'),
    ('frigo_steel', 'cocina_frigorifico', 'Cocina', 'Frigorífico acero', 65, 'img/frigo_acero.svg'),
    ('horno_negro', 'cocina_horno', 'Cocina', 'Horno negro', 38, 'img/horno_negro.svg'),
    ('horno_inox', 'cocina_horno', 'Cocina', 'Horno inox', 42, 'img/horno_inox.svg'),
    ('planta_alta', 'planta_suelo', 'Plantas', 'Planta alta', 18, 'img/planta_alta.svg'),
    ('planta_baja', 'planta_suelo', 'Plantas', 'Planta baja', 15, 'img/planta_baja.svg'),
    ('planta_colgante_verde', 'planta_colgante', 'Plantas', 'Planta colgante verde', 20, 'img/planta_colgante.svg'),
    ('alfombra_roja', 'alfombra', 'Decoración', 'Alfombra roja', 25, 'img/alfombra_roja.svg'),
    ('alfombra_moderna', 'alfombra', 'Decoración', 'Alfombra moderna', 30, 'img/alfombra_moderna.svg'),
    ('estanteria_blanca', 'estanteria', 'Decoración', 'Estantería blanca', 28, 'img/estanteria_blanca.svg'),
    ('estanteria_madera', 'estanteria', 'Decoración', 'Estantería madera', 32, 'img/estanteria_madera.svg'),
)


def seed_catalog() -> List[CatalogItem]:
    return [CatalogItem(*row) for row in _CATALOG_ROWS]


def seed_house() -> House:
    return House(slots=list(HOUSE_SLOTS), placed={})


def seed_state() -> GameState:
    """A brand new game: no points, idle timer, empty house."""
    return GameState(
        points=0,
        house=seed_house(),
        catalog=seed_catalog(),
        theme=DEFAULT_THEME,
        achievements=[],
    )


def seed_document() -> dict:
    """Slots, catalog and theme as shipped to the browser in static/seed.json."""
    state = seed_state()
    return {
        'slots': list(state.house.slots),
        'catalog': [item.to_dict() for item in state.catalog],
        'theme': state.theme,
    }
