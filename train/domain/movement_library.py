"""Static movement catalog.

The catalog lives in data/movements.yaml and is loaded once on first use.
Lookups by name are case-insensitive. Unknown names resolve to a
bodyweight placeholder movement (primary muscle "unknown") unless the
strict lookup is used.
"""

from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from train.domain.enums import EquipmentType, MovementPattern, MuscleGroup
from train.domain.models import Movement
from train.errors import MovementLibraryError, MovementNotFoundError

_CATALOG_PATH = Path(__file__).parent.parent / "data" / "movements.yaml"

_movements: list[Movement] | None = None
_by_name: dict[str, Movement] = {}


def _load_catalog(path: Path) -> list[Movement]:
    if not path.exists():
        raise MovementLibraryError(f"Movement catalog missing: {path}")

    with path.open(encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict) or not isinstance(raw.get("movements"), list):
        raise MovementLibraryError("Invalid movement catalog format: expected a 'movements' list")

    movements: list[Movement] = []
    for entry in raw["movements"]:
        try:
            movements.append(
                Movement(
                    name=entry["name"],
                    primary_muscles=tuple(entry["primary"]),
                    secondary_muscles=tuple(entry.get("secondary") or ()),
                    equipment=entry["equipment"],
                    pattern=entry.get("pattern", MovementPattern.UNKNOWN),
                    is_compound=bool(entry.get("compound", False)),
                )
            )
        except (KeyError, TypeError, ValidationError) as e:
            raise MovementLibraryError(f"Invalid movement entry {entry!r}: {e}") from e

    return movements


def all_movements() -> list[Movement]:
    """Get every catalog movement, loading the catalog on first call."""
    global _movements
    if _movements is None:
        _movements = _load_catalog(_CATALOG_PATH)
        _by_name.clear()
        _by_name.update({m.name.lower(): m for m in _movements})
        logger.debug(f"Loaded {len(_movements)} movements from {_CATALOG_PATH.name}")
    return _movements


def get_movement(name: str) -> Movement:
    """Look up a movement by name, falling back to a placeholder.

    Args:
        name: Movement display name (case-insensitive)

    Returns:
        The catalog movement, or a bodyweight movement with primary muscle
        "unknown" and pattern "unknown" when the name is not in the catalog
    """
    all_movements()
    movement = _by_name.get(name.lower())
    if movement is not None:
        return movement

    logger.warning(f"Movement '{name}' not found in catalog, using fallback")
    return Movement(
        name=name,
        primary_muscles=(MuscleGroup.UNKNOWN,),
        equipment=EquipmentType.BODYWEIGHT,
        pattern=MovementPattern.UNKNOWN,
        is_compound=False,
    )


def get_movement_strict(name: str) -> Movement:
    """Look up a movement by name.

    Raises:
        MovementNotFoundError: If the name is not in the catalog
    """
    all_movements()
    movement = _by_name.get(name.lower())
    if movement is None:
        raise MovementNotFoundError(f"Movement '{name}' not found in catalog")
    return movement


def movements_for(
    equipment: EquipmentType | list[EquipmentType] | tuple[EquipmentType, ...] | None = None,
    muscle: MuscleGroup | None = None,
) -> list[Movement]:
    """Filter the catalog by available equipment and (optionally) primary muscle."""
    result = all_movements()
    if equipment:
        # EquipmentType is a str; set() on a bare member would split it into letters
        allowed = {equipment} if isinstance(equipment, EquipmentType) else set(equipment)
        result = [m for m in result if m.equipment in allowed]
    if muscle is not None:
        result = [m for m in result if muscle in m.primary_muscles]
    return list(result)
