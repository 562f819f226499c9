"""Error taxonomy for the plan compilation pipeline.

Input-range errors are user-correctable and surface to the caller.
Template lookup errors are caught per workout by the enricher and never
abort a plan.
"""

from __future__ import annotations

from typing import Optional


class PlanCompilerError(ValueError):
    """Base class for all pipeline errors."""

    code = "PLAN_COMPILER_ERROR"


class InputRangeError(PlanCompilerError):
    code = "INVALID_INPUT"


class UnsupportedDistanceError(InputRangeError):
    code = "UNSUPPORTED_DISTANCE"

    def __init__(self, distance: str, supported: Optional[list[str]] = None):
        self.distance = distance
        self.supported = list(supported or [])
        msg = f"Unsupported race distance: {distance!r}"
        if self.supported:
            msg += f". Use one of {self.supported}"
        super().__init__(msg)


class InvalidTimeFormatError(InputRangeError):
    code = "INVALID_TIME_FORMAT"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid time {value!r}: expected MM:SS or H:MM:SS")


class OutOfRangeError(InputRangeError):
    code = "GOAL_TIME_OUT_OF_RANGE"

    def __init__(self, distance: str, goal_time: str, min_time: str, max_time: str):
        self.distance = distance
        self.goal_time = goal_time
        self.min_time = min_time
        self.max_time = max_time
        super().__init__(
            f"Goal time {goal_time} for {distance} is outside the supported range {min_time} - {max_time}"
        )


class TemplateNotFoundError(PlanCompilerError):
    code = "TEMPLATE_NOT_FOUND"
