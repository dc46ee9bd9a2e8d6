"""
Découverte des composantes connexes au-dessus d'un seuil.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import numpy as np

from threshold_detection.core.errors import ScanCancelled
from threshold_detection.core.models import Box, Grid, GridSource, is_active
from threshold_detection.perception.grid_utils import GridUtils


class RegionScanner:
    """
    Balayage exhaustif d'une grille par remplissage itératif (pile explicite).

    Chaque cellule est examinée exactement une fois : dès qu'une cellule est
    lue elle est marquée visitée, qu'elle soit active ou non. Les boîtes sont
    émises dans l'ordre ligne par ligne de leur cellule d'amorce.
    """

    def scan(
        self,
        grid: GridSource,
        threshold: float,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> List[Box]:
        """
        Retourne une boîte englobante par composante de cellules actives.

        `should_cancel` est consulté avant chaque ligne ; s'il renvoie True,
        `ScanCancelled` est levée et aucun résultat partiel n'est retourné.
        """
        if not isinstance(grid, Grid):
            grid = Grid(grid)

        height, width = grid.shape
        visited = np.zeros((height, width), dtype=bool)
        boxes: List[Box] = []

        for y in range(height):
            if should_cancel is not None and should_cancel():
                raise ScanCancelled(y)

            for x in range(width):
                if visited[y, x]:
                    continue

                visited[y, x] = True
                if not is_active(grid.value(y, x), threshold):
                    continue

                boxes.append(self._explore(grid, threshold, x, y, visited))

        return boxes

    def _explore(self, grid: Grid, threshold: float, x: int, y: int, visited: np.ndarray) -> Box:
        """Explore la composante amorcée en (x, y) et retourne sa boîte."""
        min_x = max_x = x
        min_y = max_y = y
        stack: List[Tuple[int, int]] = [(x, y)]

        while stack:
            cx, cy = stack.pop()

            for nx, ny in GridUtils.get_neighbors(cx, cy, grid.shape):
                if visited[ny, nx]:
                    continue

                # Marquée même si inactive : jamais relue ensuite
                visited[ny, nx] = True
                if not is_active(grid.value(ny, nx), threshold):
                    continue

                min_x = min(min_x, nx)
                max_x = max(max_x, nx)
                min_y = min(min_y, ny)
                max_y = max(max_y, ny)
                stack.append((nx, ny))

        return Box(min_x, min_y, max_x - min_x + 1, max_y - min_y + 1)


__all__ = ["RegionScanner"]
