"""Advisory diagnostics for clamping, fallback and estimation events.

The engine never raises on rider input. Whenever it repairs a value it records
a `Diagnostic` in the caller's `Diagnostics` collector (when one is passed) and
logs it through loguru, so hosts can inspect events without parsing log text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from loguru import logger

from .config import FtpZonesConfig


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"

    @property
    def log_level(self) -> str:
        return self.name


class DiagnosticCode(str, Enum):
    FTP_MISSING = "ftp_missing"
    FTP_BELOW_MINIMUM = "ftp_below_minimum"
    FTP_ABOVE_CEILING = "ftp_above_ceiling"
    FTP_UNUSUALLY_HIGH = "ftp_unusually_high"
    PROFILE_INCOMPLETE = "profile_incomplete"
    FTP_ESTIMATED = "ftp_estimated"
    UNKNOWN_ZONE_MODEL = "unknown_zone_model"
    CUSTOM_MODEL_FALLBACK = "custom_model_fallback"
    WEIGHT_DEFAULTED = "weight_defaulted"
    EFFICIENCY_DEFAULTED = "efficiency_defaulted"
    INVALID_HEART_RATE = "invalid_heart_rate"


@dataclass(frozen=True)
class Diagnostic:
    """One advisory event raised while repairing an input."""

    code: DiagnosticCode
    severity: Severity
    message: str
    details: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.details, MappingProxyType):
            object.__setattr__(self, "details", MappingProxyType(dict(self.details)))


class Diagnostics:
    """Caller-owned collector of diagnostics for a single calculation."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)

    @property
    def items(self) -> tuple[Diagnostic, ...]:
        return tuple(self._items)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(item for item in self._items if item.severity is Severity.WARNING)

    def codes(self) -> list[DiagnosticCode]:
        return [item.code for item in self._items]

    def has(self, code: DiagnosticCode) -> bool:
        return any(item.code is code for item in self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


def report(
    diagnostics: Diagnostics | None,
    config: FtpZonesConfig,
    code: DiagnosticCode,
    severity: Severity,
    message: str,
    **details: Any,
) -> Diagnostic:
    """Record a diagnostic on the collector and emit it to the log."""
    diagnostic = Diagnostic(code=code, severity=severity, message=message, details=details)
    if diagnostics is not None:
        diagnostics.add(diagnostic)
    if config.diagnostics.log_events:
        logger.opt(depth=1).log(severity.log_level, f"[FTP_ZONES] {code.value}: {message}")
    return diagnostic
