import csv
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence

import pydantic
from pydantic import ConfigDict, Field

from orrery.orbital_elements import OrbitalElements

logger = logging.getLogger(__name__)

SUN_NAME = "Sun"

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


class Body(pydantic.BaseModel):
    """
    Represents a body in the orrery catalog.

    Attributes:
        name: Name of the body (e.g., "Sun", "Mars"); unique within a catalog
        index: Position of the body in its catalog (the Sun is always 0)
        color: Display color as a ``#RRGGBB`` string
        display_radius: Marker radius in scene units (not physical size)
        elements: Mean orbital elements at J2000, or None for the Sun
        element_rates: Per-century rates of the mean elements, or None for the Sun
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    index: int = Field(..., ge=0)
    color: str
    display_radius: float = Field(..., gt=0.0)
    elements: Optional[OrbitalElements] = None
    element_rates: Optional[OrbitalElements] = None

    @pydantic.field_validator('color')
    @classmethod
    def validate_color(cls, v):
        if not _HEX_COLOR.match(v):
            raise ValueError(f"color must be a #RRGGBB hex string, got {v!r}")
        return v.upper()

    @pydantic.model_validator(mode='after')
    def validate_elements(self):
        if (self.elements is None) != (self.element_rates is None):
            raise ValueError(f"{self.name}: elements and element_rates must be given together")
        return self

    def is_sun(self) -> bool:
        """Check if this body is the Sun, the anchor of the heliocentric frame"""
        return self.name == SUN_NAME

    def has_elements(self) -> bool:
        return self.elements is not None

    def __repr__(self) -> str:
        return f"Body(index={self.index}, name='{self.name}')"

    def __str__(self) -> str:
        return f"{self.name} (index: {self.index})"


class BodyCatalog:
    """
    Static, ordered, index-addressable list of bodies.

    The Sun is always at index 0, names are unique, and every body's ``index``
    equals its position. The catalog never changes after construction.
    """

    def __init__(self, bodies: Iterable[Body]):
        bodies = tuple(bodies)
        if not bodies:
            raise ValueError("A body catalog needs at least the Sun")
        if not bodies[0].is_sun():
            raise ValueError(f"The first catalog entry must be the {SUN_NAME}, got {bodies[0].name!r}")
        seen = set()
        for position, body in enumerate(bodies):
            if body.name in seen:
                raise ValueError(f"Duplicate body name {body.name!r} in catalog")
            if body.index != position:
                raise ValueError(f"{body.name} has index {body.index} but sits at position {position}")
            seen.add(body.name)
        self._bodies = bodies
        self._index = {body.name: body.index for body in bodies}

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies)

    def __getitem__(self, index: int) -> Body:
        return self._bodies[index]

    def __repr__(self) -> str:
        return f"BodyCatalog({', '.join(self.names)})"

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(body.name for body in self._bodies)

    def index_of(self, name: str) -> int:
        """
        Catalog index of the named body.

        Unknown names resolve to the Sun (index 0) so that a stale UI
        selection never breaks a frame.
        """
        index = self._index.get(name)
        if index is None:
            logger.warning("Unknown body %r, falling back to %s", name, SUN_NAME)
            return 0
        return index

    def subset(self, names: Sequence[str]) -> "BodyCatalog":
        """
        Build a smaller catalog from the named bodies, in the order given.

        Bodies are re-indexed to their new positions; the first name must be the Sun.
        """
        missing = [name for name in names if name not in self._index]
        if missing:
            raise ValueError(f"Unknown bodies: {', '.join(missing)}")
        return BodyCatalog(
            self._bodies[self._index[name]].model_copy(update={'index': position})
            for position, name in enumerate(names)
        )


def _parse_elements(row: dict, keys: Sequence[str]) -> Optional[OrbitalElements]:
    values = [row[key].strip() for key in keys]
    if not any(values):
        return None
    return OrbitalElements(*(float(v) for v in values))


_ELEMENT_KEYS = (
    'Semi-Major Axis (AU)',
    'Eccentricity ()',
    'Inclination (deg)',
    'Mean Longitude (deg)',
    'Longitude of Perihelion (deg)',
    'Longitude of the Ascending Node (deg)',
)

_RATE_KEYS = (
    'Semi-Major Axis Rate (AU/cy)',
    'Eccentricity Rate (1/cy)',
    'Inclination Rate (deg/cy)',
    'Mean Longitude Rate (deg/cy)',
    'Longitude of Perihelion Rate (deg/cy)',
    'Longitude of the Ascending Node Rate (deg/cy)',
)


def load_bodies_data(filepath: Optional[Path] = None) -> tuple[Body, ...]:
    """
    Load the body catalog rows from CSV.

    Args:
        filepath: CSV file to read. Defaults to ``data/bodies.csv`` beside this module.

    Returns:
        Tuple of Body objects in file order; the row order defines the catalog index.
    """
    if filepath is None:
        filepath = Path(__file__).parent / 'data' / 'bodies.csv'

    bodies = []
    with open(filepath, 'r', encoding='utf-8', newline='') as f:
        reader = csv.DictReader(f)
        for index, row in enumerate(reader):
            bodies.append(Body(
                name=row['Name'].strip(),
                index=index,
                color=row['Color'].strip(),
                display_radius=float(row['Display Radius (px)']),
                elements=_parse_elements(row, _ELEMENT_KEYS),
                element_rates=_parse_elements(row, _RATE_KEYS),
            ))

    return tuple(bodies)


bodies_data = load_bodies_data()
DEFAULT_CATALOG = BodyCatalog(bodies_data)
