from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from plancore.logging_config import get_logger


@dataclass(frozen=True)
class DiagnosticEvent:
    """A non-fatal observation made while compiling a plan."""

    stage: str  # parse | enrich | repair
    code: str
    message: str
    line_number: Optional[int] = None
    week_number: Optional[int] = None
    detail: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class DiagnosticLog:
    """Collects diagnostic events for one compilation and mirrors them to the logger."""

    def __init__(self, stage: str, logger: Optional[logging.Logger] = None):
        self.stage = stage
        self.events: list[DiagnosticEvent] = []
        self._logger = logger or get_logger(f"diagnostics.{stage}")

    def record(
        self,
        code: str,
        message: str,
        *,
        line_number: Optional[int] = None,
        week_number: Optional[int] = None,
        level: int = logging.DEBUG,
        **detail: Any,
    ) -> DiagnosticEvent:
        event = DiagnosticEvent(
            stage=self.stage,
            code=code,
            message=message,
            line_number=line_number,
            week_number=week_number,
            detail=detail,
        )
        self.events.append(event)
        self._logger.log(
            level,
            message,
            extra={
                "ctx_stage": self.stage,
                "ctx_code": code,
                "ctx_line_number": line_number,
                "ctx_week_number": week_number,
            },
        )
        return event

    def codes(self) -> list[str]:
        return [e.code for e in self.events]

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)
