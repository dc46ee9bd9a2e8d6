"""
Structures de base pour la détection de régions au-dessus d'un seuil.

Contient les types partagés (grille de mesures, directions de voisinage,
boîtes englobantes) utilisés par le scanner, la fusion et le rendu.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Sequence, Union

import numpy as np

from threshold_detection.core.errors import InvalidInput


class Direction(Enum):
    """Les 8 décalages (dx, dy) du voisinage, diagonales comprises."""

    NORTHWEST = (-1, -1)
    NORTH = (0, -1)
    NORTHEAST = (1, -1)
    WEST = (-1, 0)
    EAST = (1, 0)
    SOUTHWEST = (-1, 1)
    SOUTH = (0, 1)
    SOUTHEAST = (1, 1)

    @classmethod
    def all_directions(cls) -> list["Direction"]:
        """Retourne les 8 directions."""
        return list(cls)


@dataclass(frozen=True)
class Box:
    """
    Boîte englobante axis-alignée, exprimée en origine + longueurs.

    X correspond aux colonnes, Y aux lignes. Une boîte issue de la fusion
    haut/bas peut avoir un `y_length` supérieur à la hauteur de la grille.
    """

    x_start: int
    y_start: int
    x_length: int
    y_length: int

    def __post_init__(self) -> None:
        if self.x_start < 0 or self.y_start < 0:
            raise InvalidInput(f"box origin must be non-negative, got ({self.x_start}, {self.y_start})")
        if self.x_length < 1 or self.y_length < 1:
            raise InvalidInput(f"box lengths must be >= 1, got {self.x_length}x{self.y_length}")

    @property
    def x_end(self) -> int:
        """Colonne exclusive à droite de la boîte."""
        return self.x_start + self.x_length

    @property
    def y_end(self) -> int:
        """Ligne exclusive sous la boîte."""
        return self.y_start + self.y_length

    def contains(self, x: int, y: int) -> bool:
        """Vérifie si la cellule (x, y) est dans la boîte."""
        return self.x_start <= x < self.x_end and self.y_start <= y < self.y_end

    def overlaps_horizontally(self, other: "Box") -> bool:
        """Vrai si les intervalles de colonnes se chevauchent (adjacence exclue)."""
        return self.x_start < other.x_end and other.x_start < self.x_end

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


GridSource = Union[np.ndarray, Sequence[Sequence[float]], "Grid"]


class Grid:
    """
    Vue immuable d'une matrice rectangulaire de mesures flottantes.

    Ligne = Y, colonne = X. Les NaN sont acceptés et traités plus loin comme
    des cellules inactives.
    """

    def __init__(self, source: GridSource):
        if source is None:
            raise InvalidInput("grid is missing")

        if isinstance(source, Grid):
            array = source.values
        elif isinstance(source, np.ndarray):
            array = source
        else:
            array = self._check_rows(source)

        try:
            array = np.array(array, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"grid values must be numeric: {exc}") from exc

        if array.ndim != 2:
            raise InvalidInput(f"grid must be two-dimensional, got {array.ndim} dimension(s)")
        if array.shape[0] == 0:
            raise InvalidInput("grid has zero rows")
        if array.shape[1] == 0:
            raise InvalidInput("grid has zero columns")

        array.setflags(write=False)
        self._values = array

    @staticmethod
    def _check_rows(rows: Sequence[Sequence[float]]) -> list:
        """Vérifie que des lignes imbriquées forment bien un rectangle."""
        try:
            rows = list(rows)
            lengths = [len(row) for row in rows]
        except TypeError as exc:
            raise InvalidInput("grid must be a sequence of rows of numbers") from exc

        if not rows:
            raise InvalidInput("grid has zero rows")
        if len(set(lengths)) != 1:
            raise InvalidInput(f"grid rows have unequal lengths: {sorted(set(lengths))}")

        return rows

    def value(self, row: int, col: int) -> float:
        return float(self._values[row, col])

    def height(self) -> int:
        return int(self._values.shape[0])

    def width(self) -> int:
        return int(self._values.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.height(), self.width()

    @property
    def values(self) -> np.ndarray:
        """Tableau numpy en lecture seule (pour le rendu)."""
        return self._values

    def __repr__(self) -> str:
        return f"Grid(height={self.height()}, width={self.width()})"


def is_active(value: float, threshold: float) -> bool:
    """Une cellule est active si elle n'est pas NaN et strictement au-dessus du seuil."""
    return not math.isnan(value) and value > threshold


__all__ = [
    "Direction",
    "Box",
    "Grid",
    "GridSource",
    "is_active",
]
