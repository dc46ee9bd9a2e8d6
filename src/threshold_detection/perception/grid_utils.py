"""
Utilitaires de grille pour la détection de régions.
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np

from threshold_detection.core.models import Direction, Grid


class GridUtils:
    """Fonctions utilitaires pour le parcours et l'analyse de grilles."""

    @staticmethod
    def get_neighbors(x: int, y: int, grid_shape: Tuple[int, int]) -> List[Tuple[int, int]]:
        """
        Retourne les 8 voisins (x, y) valides d'une cellule dans la grille.
        """
        height, width = grid_shape

        neighbors: List[Tuple[int, int]] = []
        for direction in Direction.all_directions():
            dx, dy = direction.value
            nx, ny = x + dx, y + dy

            if 0 <= nx < width and 0 <= ny < height:
                neighbors.append((nx, ny))

        return neighbors

    @staticmethod
    def active_mask(grid: Grid, threshold: float) -> np.ndarray:
        """Masque booléen vectorisé des cellules actives (NaN exclus)."""
        values = grid.values
        with np.errstate(invalid="ignore"):
            return ~np.isnan(values) & (values > threshold)


__all__ = ["GridUtils"]
