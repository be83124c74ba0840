"""Optimizer input validation module."""

from .input_rules import validate_inputs
from .types import REASON_MESSAGES, InvalidReason, ValidationResult

__all__ = [
    "validate_inputs",
    "ValidationResult",
    "InvalidReason",
    "REASON_MESSAGES",
]
