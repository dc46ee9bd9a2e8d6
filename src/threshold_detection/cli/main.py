"""
CLI principale pour threshold-detection.

Fournit une commande `detect` : chargement CSV → balayage → fusion haut/bas,
avec rendu optionnel de la carte de chaleur.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from threshold_detection.core.config import DetectionConfig
from threshold_detection.core.errors import ThresholdDetectionError
from threshold_detection.core.logger import DetectionLogger, LogLevel
from threshold_detection.core.models import Box
from threshold_detection.io.loader import load_grid
from threshold_detection.perception.engine import ThresholdDetectionEngine


def _build_config(args: argparse.Namespace) -> DetectionConfig:
    """Configuration du fichier JSON éventuel, surchargée par les options."""
    config = DetectionConfig.from_json(args.config) if args.config else DetectionConfig()
    return config.with_overrides(
        threshold=args.threshold,
        delimiter=args.delimiter,
        wraparound=False if args.no_wraparound else None,
        verbose=True if args.verbose else None,
        log_file=args.log_file,
    )


def _print_boxes(boxes: List[Box], threshold: float) -> None:
    print(f"Detected {len(boxes)} boxes above threshold {threshold}:")
    for box in boxes:
        print(f"Box => XStart:{box.x_start}, YStart:{box.y_start}, W:{box.x_length}, H:{box.y_length}")


def cmd_detect(args: argparse.Namespace) -> int:
    """
    Commande `detect` : affiche les boîtes trouvées dans un fichier CSV.
    """
    config = _build_config(args)
    logger = DetectionLogger(verbose=config.verbose, log_file=config.log_file, json_log=config.json_log)

    data_path = Path(args.data)
    with logger.timed_step(LogLevel.LOADING, f"Loading {data_path}"):
        grid = load_grid(data_path, delimiter=config.delimiter)
    logger.step(LogLevel.LOADING, "Grid loaded", height=grid.height(), width=grid.width())

    engine = ThresholdDetectionEngine(config=config, logger=logger)
    boxes = engine.detect(grid)

    if args.json:
        payload = {
            "source": str(data_path),
            "threshold": config.threshold,
            "grid_shape": list(grid.shape),
            "boxes": [box.to_dict() for box in boxes],
        }
        print(json.dumps(payload, indent=2))
    else:
        _print_boxes(boxes, config.threshold)

    if args.render:
        # Import différé : matplotlib n'est chargé que pour le rendu
        from threshold_detection.perception.visualize import HeatmapVisualizer

        with logger.timed_step(LogLevel.RENDERING, f"Rendering {args.render}"):
            fig, _ = HeatmapVisualizer.plot_heatmap(grid, boxes, title=f"{data_path.name} > {config.threshold}")
            HeatmapVisualizer.save(fig, args.render)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="threshold-detection", description="Threshold region detection CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect_parser = subparsers.add_parser(
        "detect",
        help="Détecter les régions au-dessus d'un seuil dans un fichier CSV.",
    )
    detect_parser.add_argument("data", type=str, help="Chemin vers un fichier CSV sans en-tête.")
    detect_parser.add_argument("--threshold", "-t", type=float, default=None, help="Seuil strict (défaut : 0.5).")
    detect_parser.add_argument("--config", "-c", type=str, default=None, help="Fichier JSON de configuration.")
    detect_parser.add_argument("--delimiter", "-d", type=str, default=None, help="Séparateur de colonnes.")
    detect_parser.add_argument(
        "--no-wraparound",
        action="store_true",
        help="Désactiver la fusion des régions coupées par le bord haut/bas.",
    )
    detect_parser.add_argument("--json", action="store_true", help="Sortie JSON.")
    detect_parser.add_argument("--render", type=str, default=None, help="Enregistrer la carte de chaleur (PNG).")
    detect_parser.add_argument("--log-file", type=str, default=None, help="Journal des étapes.")
    detect_parser.add_argument("--verbose", "-v", action="store_true", help="Afficher les étapes.")
    detect_parser.set_defaults(func=cmd_detect)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return args.func(args)
    except ThresholdDetectionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
