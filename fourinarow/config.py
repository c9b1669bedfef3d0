"""
config.py - Engine configuration
"""

from dataclasses import dataclass
from typing import Optional

from fourinarow.utils import DETECTOR_REFERENCE, DETECTOR_STRATEGIES


@dataclass
class EngineConfig:
    """
    Options for a game engine.

    Attributes:
        detector: Win-detection strategy, "reference" or "complete"
        strict: Answer malformed or ignored commands with INVALID instead of
            leaving the previous response in place
        seed: Seed for the computer's column choice (None for OS entropy)
    """
    detector: str = DETECTOR_REFERENCE
    strict: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        if self.detector not in DETECTOR_STRATEGIES:
            raise ValueError(f"Unknown detector strategy {self.detector!r}; expected one of {DETECTOR_STRATEGIES}")
