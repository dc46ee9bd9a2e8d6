"""
Fusion des régions coupées par le bord haut/bas d'une grille cyclique.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from threshold_detection.core.errors import InvalidInput
from threshold_detection.core.models import Box


class EdgeWraparoundMerger:
    """
    Recolle les paires (boîte du bas, boîte du haut) d'un axe vertical périodique.

    Une boîte « du bas » se termine au plus `bottom_tolerance` ligne(s) avant
    le bord inférieur ; une boîte « du haut » commence exactement à la ligne 0.
    Le test du haut reste strict quelle que soit la tolérance du bas.
    """

    def __init__(self, bottom_tolerance: int = 1):
        if bottom_tolerance < 0:
            raise InvalidInput(f"bottom_tolerance must be >= 0, got {bottom_tolerance}")
        self.bottom_tolerance = bottom_tolerance

    def touches_bottom(self, box: Box, grid_height: int) -> bool:
        return box.y_end >= grid_height - self.bottom_tolerance

    @staticmethod
    def touches_top(box: Box) -> bool:
        return box.y_start == 0

    def merge(self, grid_height: int, boxes: Iterable[Box]) -> List[Box]:
        """
        Fusionne chaque boîte du bas avec la première boîte du haut qui la chevauche.

        Les boîtes non fusionnées gardent leur ordre, les boîtes fusionnées sont
        ajoutées à la fin. Le suivi se fait par indice dans la liste d'entrée.
        """
        if grid_height < 1:
            raise InvalidInput(f"grid height must be >= 1, got {grid_height}")

        boxes = list(boxes)
        consumed: Set[int] = set()
        fused: List[Box] = []

        for i, bottom in enumerate(boxes):
            if i in consumed or not self.touches_bottom(bottom, grid_height):
                continue

            j = self._find_top_partner(bottom, i, boxes, consumed)
            if j is None:
                continue

            consumed.update((i, j))
            fused.append(self.fuse(bottom, boxes[j]))

        kept = [box for i, box in enumerate(boxes) if i not in consumed]
        return kept + fused

    def _find_top_partner(self, bottom: Box, index: int, boxes: List[Box], consumed: Set[int]) -> Optional[int]:
        for j, top in enumerate(boxes):
            if j == index or j in consumed:
                continue
            if self.touches_top(top) and bottom.overlaps_horizontally(top):
                return j
        return None

    @staticmethod
    def fuse(bottom: Box, top: Box) -> Box:
        """Boîte unique couvrant `bottom` puis `top` au-delà du bord inférieur."""
        x_start = min(bottom.x_start, top.x_start)
        x_end = max(bottom.x_end, top.x_end)
        return Box(
            x_start=x_start,
            y_start=bottom.y_start,
            x_length=x_end - x_start,
            y_length=bottom.y_length + top.y_length,
        )


__all__ = ["EdgeWraparoundMerger"]
