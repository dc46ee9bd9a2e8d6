"""
Exceptions du détecteur de régions au-dessus d'un seuil.
"""

from __future__ import annotations


class ThresholdDetectionError(Exception):
    """Base commune de toutes les erreurs du package."""


class InvalidInput(ThresholdDetectionError, ValueError):
    """Grille absente, vide, irrégulière ou paramètre hors contrat."""


class DataLoadError(ThresholdDetectionError):
    """Échec du chargement d'un fichier de données délimité."""

    def __init__(self, message: str, path: object = None, line: int | None = None):
        self.path = path
        self.line = line
        location = ""
        if path is not None:
            location = f" ({path}" + (f", line {line})" if line is not None else ")")
        super().__init__(f"{message}{location}")


class ScanCancelled(ThresholdDetectionError):
    """Le balayage a été interrompu par le drapeau d'annulation coopératif."""

    def __init__(self, row: int):
        self.row = row
        super().__init__(f"scan cancelled before row {row}")


__all__ = ["ThresholdDetectionError", "InvalidInput", "DataLoadError", "ScanCancelled"]
