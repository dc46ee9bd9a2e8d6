"""
threshold_detection - Détection de régions au-dessus d'un seuil
================================================================

Pipeline :
    Grille → RegionScanner → EdgeWraparoundMerger → boîtes englobantes
"""

from threshold_detection.core.errors import (
    DataLoadError,
    InvalidInput,
    ScanCancelled,
    ThresholdDetectionError,
)
from threshold_detection.core.models import Box, Grid
from threshold_detection.perception.engine import ThresholdDetectionEngine
from threshold_detection.perception.merger import EdgeWraparoundMerger
from threshold_detection.perception.scanner import RegionScanner

__version__ = "0.1.0"

__all__ = [
    "Box",
    "Grid",
    "RegionScanner",
    "EdgeWraparoundMerger",
    "ThresholdDetectionEngine",
    "ThresholdDetectionError",
    "InvalidInput",
    "DataLoadError",
    "ScanCancelled",
]
