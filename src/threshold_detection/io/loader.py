"""
Chargement de grilles depuis des fichiers texte délimités (CSV sans en-tête).
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

from threshold_detection.core.errors import DataLoadError
from threshold_detection.core.models import Grid


def load_grid(path: str | Path, delimiter: str = ",") -> Grid:
    """
    Lit une matrice de nombres, une ligne de fichier par ligne de grille.

    Les lignes vides sont ignorées. Une ligne de longueur différente ou un
    jeton non numérique lève `DataLoadError`.
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        raise DataLoadError("data file not found", csv_path)

    try:
        df = pd.read_csv(
            csv_path,
            header=None,
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as exc:
        raise DataLoadError("data file is empty", csv_path) from exc
    except pd.errors.ParserError as exc:
        raise DataLoadError(f"rows have unequal lengths: {exc}", csv_path) from exc

    # Les lignes vides sont sautées : `row` compte les lignes de données.
    # Les lignes trop courtes sont complétées (vide ou NaN) à la lecture
    values = df.apply(lambda col: col.str.strip())
    missing = values.isna() | (values == "")
    short_rows = values.index[missing.any(axis=1)]
    if len(short_rows):
        row = int(short_rows[0])
        found = int((~missing.iloc[row]).sum())
        raise DataLoadError(f"data row {row + 1} has {found} value(s), expected {df.shape[1]}", csv_path)

    # Conversion jeton par jeton avec float() : "nan" et "NaN" donnent NaN
    try:
        matrix = values.to_numpy(dtype=object).astype(np.float64)
    except ValueError as exc:
        raise DataLoadError(f"unparsable numeric token: {exc}", csv_path) from exc

    return Grid(matrix)


def grid_from_rows(rows: Sequence[Sequence[float]]) -> Grid:
    """Construit une grille depuis des lignes déjà en mémoire."""
    return Grid(rows)


__all__ = ["load_grid", "grid_from_rows"]
