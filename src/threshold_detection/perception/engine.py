"""
Moteur de détection de régions au-dessus d'un seuil.
"""

from __future__ import annotations

import math
import numbers
from typing import Callable, Dict, List, Optional

from threshold_detection.core.config import DetectionConfig
from threshold_detection.core.errors import InvalidInput, ThresholdDetectionError
from threshold_detection.core.logger import DetectionLogger, LogLevel
from threshold_detection.core.models import Box, Grid, GridSource
from threshold_detection.perception.grid_utils import GridUtils
from threshold_detection.perception.merger import EdgeWraparoundMerger
from threshold_detection.perception.scanner import RegionScanner


class ThresholdDetectionEngine:
    """Interface haut niveau : balayage puis fusion haut/bas optionnelle."""

    def __init__(self, config: Optional[DetectionConfig] = None, logger: Optional[DetectionLogger] = None):
        self.config = config or DetectionConfig()
        self.logger = logger or DetectionLogger(
            verbose=self.config.verbose,
            log_file=self.config.log_file,
            json_log=self.config.json_log,
        )
        self.scanner = RegionScanner()
        self.merger = EdgeWraparoundMerger()

    def detect(
        self,
        grid: GridSource,
        threshold: Optional[float] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> List[Box]:
        """Retourne les boîtes finales (après fusion si activée)."""
        return self.analyze_grid(grid, threshold, should_cancel)["boxes"]

    def analyze_grid(
        self,
        grid: GridSource,
        threshold: Optional[float] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> Dict:
        """Analyse complète : boîtes brutes, boîtes finales et compteurs."""
        threshold = self.config.threshold if threshold is None else threshold

        try:
            if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
                raise InvalidInput(f"threshold must be a number, got {threshold!r}")
            if not math.isfinite(threshold):
                raise InvalidInput(f"threshold must be finite, got {threshold}")
            if not isinstance(grid, Grid):
                grid = Grid(grid)

            with self.logger.timed_step(LogLevel.SCANNING, "Scanning grid", threshold=threshold):
                raw_boxes = self.scanner.scan(grid, threshold, should_cancel)

            active_cells = int(GridUtils.active_mask(grid, threshold).sum())
            self.logger.step(
                LogLevel.SCANNING,
                f"Found {len(raw_boxes)} region(s)",
                regions=len(raw_boxes),
                active_cells=active_cells,
            )

            boxes = raw_boxes
            if self.config.wraparound:
                with self.logger.timed_step(LogLevel.MERGING, "Stitching top/bottom edges"):
                    boxes = self.merger.merge(grid.height(), raw_boxes)
        except ThresholdDetectionError as exc:
            self.logger.error(LogLevel.PIPELINE, "Detection failed", exception=exc)
            raise

        merged = len(raw_boxes) - len(boxes)
        if merged:
            self.logger.success(LogLevel.MERGING, f"Fused {merged} wrapped pair(s)", merged=merged)

        return {
            "grid_shape": grid.shape,
            "threshold": threshold,
            "raw_boxes": raw_boxes,
            "boxes": boxes,
            "statistics": {
                "regions": len(raw_boxes),
                "merged_pairs": merged,
                "final_boxes": len(boxes),
            },
        }


__all__ = ["ThresholdDetectionEngine"]
