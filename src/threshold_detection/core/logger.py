"""
logger.py - Structured Logging for the detection pipeline
=========================================================
Provides consistent, structured logging across loading, scanning,
merging and rendering.

Features:
    - Pipeline step logging with timing
    - Structured data attachment
    - Console, file and JSON-lines output
    - Per-component duration metrics
"""

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class LogLevel(Enum):
    """Pipeline component identifiers for structured logging."""
    PIPELINE = "PIPELINE"
    LOADING = "LOADING"
    SCANNING = "SCANNING"
    MERGING = "MERGING"
    RENDERING = "RENDERING"
    ERROR = "ERROR"


@dataclass
class LogEntry:
    """Structured log entry with metadata."""
    timestamp: str
    level: str
    component: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    duration_ms: Optional[float] = None

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


@dataclass
class PerformanceMetrics:
    """Collected performance metrics for a detection run."""
    step_durations: Dict[str, float] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


_PY_LEVELS = {
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class DetectionLogger:
    """
    Centralized logging for the detection pipeline.

    Usage:
        logger = DetectionLogger(verbose=True)
        logger.step(LogLevel.SCANNING, "Found 3 regions", regions=3)

        with logger.timed_step(LogLevel.MERGING, "Stitching edges"):
            ...

    Every entry is also forwarded to the stdlib logger named
    ``threshold_detection`` so host applications can route it.
    """

    # ANSI color codes for terminal output
    COLORS = {
        LogLevel.PIPELINE: "\033[1;36m",
        LogLevel.LOADING: "\033[0;34m",
        LogLevel.SCANNING: "\033[0;35m",
        LogLevel.MERGING: "\033[0;33m",
        LogLevel.RENDERING: "\033[0;37m",
        LogLevel.ERROR: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        verbose: bool = False,
        log_file: Optional[str] = None,
        json_log: bool = False,
        use_colors: bool = True,
        collect_metrics: bool = True,
    ):
        """
        Initialize the logger.

        Args:
            verbose: Print to console
            log_file: Path to log file (optional)
            json_log: Output logs as JSON lines
            use_colors: Use ANSI colors in console output
            collect_metrics: Collect per-component durations
        """
        self.verbose = verbose
        self.log_file = Path(log_file) if log_file else None
        self.json_log = json_log
        self.use_colors = use_colors
        self.collect_metrics = collect_metrics

        self.entries: List[LogEntry] = []
        self.metrics = PerformanceMetrics()
        self._py_logger = logging.getLogger("threshold_detection")

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def step(self, component: LogLevel, message: str, **data) -> None:
        """
        Log a pipeline step.

        Args:
            component: The pipeline component logging this message
            message: Human-readable message
            **data: Additional structured data to attach
        """
        self._record(component, "INFO", message, data)

    def success(self, component: LogLevel, message: str, **data) -> None:
        self.step(component, f"✓ {message}", **data)

    def warning(self, component: LogLevel, message: str, **data) -> None:
        self.metrics.warnings.append(message)
        self._record(component, "WARNING", f"⚠ {message}", data)

    def error(self, component: LogLevel, message: str, exception: Optional[Exception] = None, **data) -> None:
        if exception:
            data["exception_type"] = type(exception).__name__
            data["exception_message"] = str(exception)
        self.metrics.errors.append(message)
        self._record(LogLevel.ERROR, "ERROR", f"✗ {message}", data, source=component)

    @contextmanager
    def timed_step(self, component: LogLevel, message: str, **data):
        """
        Context manager for timing a step.

        Usage:
            with logger.timed_step(LogLevel.SCANNING, "Scanning grid"):
                boxes = scanner.scan(grid, threshold)
        """
        start_time = time.perf_counter()
        self.step(component, f"{message}...")

        try:
            yield
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000

            if self.collect_metrics:
                key = component.value.lower()
                self.metrics.step_durations[key] = self.metrics.step_durations.get(key, 0.0) + duration_ms

            self._record(
                component,
                "INFO",
                f"  ↳ Completed in {duration_ms:.1f}ms",
                data,
                duration_ms=duration_ms,
                indent=True,
            )

    def _record(
        self,
        component: LogLevel,
        level: str,
        message: str,
        data: Dict[str, Any],
        duration_ms: Optional[float] = None,
        indent: bool = False,
        source: Optional[LogLevel] = None,
    ) -> None:
        entry = LogEntry(
            timestamp=datetime.now().isoformat(),
            level=level,
            component=(source or component).value,
            message=message,
            data=data,
            duration_ms=duration_ms,
        )
        self.entries.append(entry)
        self._py_logger.log(_PY_LEVELS[level], "[%s] %s", entry.component, message.strip())

        if self.verbose:
            self._print_entry(entry, component, indent=indent)

        if self.log_file:
            self._write_to_file(entry)

    def _print_entry(self, entry: LogEntry, component: LogLevel, indent: bool = False) -> None:
        """Print a log entry to console."""
        prefix = "  " if indent else ""

        if self.use_colors:
            color = self.COLORS.get(component, "")
            reset = self.RESET
        else:
            color = ""
            reset = ""

        if self.json_log:
            print(entry.to_json())
            return

        component_tag = f"[{entry.component}]"
        print(f"{prefix}{color}{component_tag:12} {entry.message}{reset}")

        if entry.data and not indent:
            for key, value in entry.data.items():
                if not key.startswith("_"):
                    print(f"{prefix}  └─ {key}: {value}")

    def _write_to_file(self, entry: LogEntry) -> None:
        with open(self.log_file, "a", encoding="utf-8") as f:
            if self.json_log:
                f.write(entry.to_json() + "\n")
            else:
                f.write(f"[{entry.timestamp}] [{entry.level}] [{entry.component}] {entry.message}\n")
                if entry.data:
                    f.write(f"  Data: {json.dumps(entry.data, default=str)}\n")

    def get_metrics_summary(self) -> Dict[str, Any]:
        return {
            "total_entries": len(self.entries),
            "step_durations": dict(self.metrics.step_durations),
            "error_count": len(self.metrics.errors),
            "warning_count": len(self.metrics.warnings),
        }

    def clear(self) -> None:
        """Clear all log entries and reset metrics."""
        self.entries.clear()
        self.metrics = PerformanceMetrics()


# Global logger instance (optional convenience)
_global_logger: Optional[DetectionLogger] = None


def get_logger() -> DetectionLogger:
    """Get or create the global logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = DetectionLogger()
    return _global_logger


def set_logger(logger: DetectionLogger) -> None:
    """Set the global logger instance."""
    global _global_logger
    _global_logger = logger


__all__ = ["LogLevel", "LogEntry", "PerformanceMetrics", "DetectionLogger", "get_logger", "set_logger"]
