"""Core panel logic: the action planner and the status projection."""

from .exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_DEVICE_FAILURE,
    EXIT_INPUT_CLOSED,
    EXIT_QUIT,
    exit_code_for_signal,
)
from .planner import Action, ActionPlanner, Region
from .status import StatusModel, selection_line

__all__ = [
    "Action",
    "ActionPlanner",
    "Region",
    "StatusModel",
    "selection_line",
    # Exit codes
    "EXIT_CONFIG_ERROR",
    "EXIT_DEVICE_FAILURE",
    "EXIT_INPUT_CLOSED",
    "EXIT_QUIT",
    "exit_code_for_signal",
]
