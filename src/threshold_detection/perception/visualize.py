"""
Rendu en carte de chaleur d'une grille et des boîtes détectées.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle as MPLRect

from threshold_detection.core.models import Box, Grid


class HeatmapVisualizer:
    """Carte de chaleur bleu → rouge avec le contour des régions détectées."""

    @staticmethod
    def heat_colors(grid: Grid) -> np.ndarray:
        """
        Retourne un tableau RGBA (hauteur, largeur, 4) en flottants [0, 1].

        Les valeurs sont normalisées entre le min et le max de la grille :
        0 → bleu, 1 → rouge, le vert culmine au milieu. Les NaN sont transparents.
        """
        values = grid.values
        nan_mask = np.isnan(values)
        finite = values[~nan_mask]

        normalized = np.zeros_like(values)
        if finite.size:
            low, high = finite.min(), finite.max()
            if high > low:
                normalized = np.clip((values - low) / (high - low), 0.0, 1.0)
        normalized[nan_mask] = 0.0

        rgba = np.empty(values.shape + (4,), dtype=np.float64)
        rgba[..., 0] = normalized
        rgba[..., 1] = 1.0 - np.abs(normalized - 0.5) * 2.0
        rgba[..., 2] = 1.0 - normalized
        rgba[..., 3] = np.where(nan_mask, 0.0, 1.0)
        return rgba

    @staticmethod
    def box_patches(box: Box, grid_height: int) -> List[Tuple[int, int, int, int]]:
        """
        Rectangles (x, y, largeur, hauteur) à tracer pour une boîte.

        Une boîte fusionnée qui dépasse le bas de la grille est découpée en
        une partie basse et une partie reprise depuis la ligne 0.
        """
        if box.y_end <= grid_height:
            return [(box.x_start, box.y_start, box.x_length, box.y_length)]

        bottom_height = max(grid_height - box.y_start, 0)
        top_height = min(box.y_end - grid_height, grid_height)
        parts = []
        if bottom_height:
            parts.append((box.x_start, box.y_start, box.x_length, bottom_height))
        parts.append((box.x_start, 0, box.x_length, top_height))
        return parts

    @staticmethod
    def plot_heatmap(
        grid: Grid,
        boxes: Sequence[Box] = (),
        title: str = "Threshold Detection",
        figsize: Tuple[int, int] = (8, 8),
    ):
        fig, ax = plt.subplots(figsize=figsize)
        ax.imshow(HeatmapVisualizer.heat_colors(grid), interpolation="nearest")
        ax.set_title(title)
        ax.set_xticks(np.arange(-0.5, grid.width(), 1), minor=True)
        ax.set_yticks(np.arange(-0.5, grid.height(), 1), minor=True)

        for i, box in enumerate(boxes):
            HeatmapVisualizer._add_box_overlay(ax, box, grid.height(), i)

        plt.tight_layout()
        return fig, ax

    @staticmethod
    def _add_box_overlay(ax: plt.Axes, box: Box, grid_height: int, index: int) -> None:
        for x, y, width, height in HeatmapVisualizer.box_patches(box, grid_height):
            rect = MPLRect(
                (x - 0.5, y - 0.5),
                width,
                height,
                linewidth=2,
                edgecolor="red",
                facecolor="none",
                linestyle="--",
            )
            ax.add_patch(rect)

        ax.text(
            box.x_start,
            box.y_start - 0.7,
            f"#{index + 1}",
            color="red",
            fontsize=10,
            fontweight="bold",
            bbox=dict(boxstyle="round", facecolor="white", alpha=0.7),
        )

    @staticmethod
    def save(fig, path: str | Path, dpi: int = 100) -> Path:
        """Enregistre la figure puis la ferme."""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out, dpi=dpi)
        plt.close(fig)
        return out


__all__ = ["HeatmapVisualizer"]
