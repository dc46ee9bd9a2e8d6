"""
Configuration d'une exécution de détection.
"""

from __future__ import annotations

import json
import numbers
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from threshold_detection.core.errors import InvalidInput


@dataclass(frozen=True)
class DetectionConfig:
    """
    Paramètres de détection et de journalisation.

    Peut être chargée depuis un fichier JSON puis surchargée par la CLI.
    """

    threshold: float = 0.5
    wraparound: bool = True
    delimiter: str = ","
    verbose: bool = False
    log_file: Optional[str] = None
    json_log: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, numbers.Real):
            raise InvalidInput(f"threshold must be a number, got {self.threshold!r}")
        for name in ("wraparound", "verbose", "json_log"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidInput(f"{name} must be true or false, got {getattr(self, name)!r}")
        if not isinstance(self.delimiter, str) or not self.delimiter:
            raise InvalidInput(f"delimiter must be a non-empty string, got {self.delimiter!r}")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise InvalidInput(f"log_file must be a path string, got {self.log_file!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DetectionConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidInput(f"unknown configuration key(s): {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: str | Path) -> "DetectionConfig":
        """Charge une configuration depuis un fichier JSON (objet à plat)."""
        json_path = Path(path)
        try:
            with json_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            raise InvalidInput(f"configuration file not found: {json_path}") from exc
        except json.JSONDecodeError as exc:
            raise InvalidInput(f"invalid JSON in {json_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise InvalidInput(f"configuration in {json_path} must be a JSON object")
        return cls.from_dict(data)

    def with_overrides(self, **overrides: Any) -> "DetectionConfig":
        """Copie avec les valeurs non-None de `overrides` appliquées."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


__all__ = ["DetectionConfig"]
