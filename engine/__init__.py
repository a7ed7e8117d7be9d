"""
engine/
-------
Interaction, run driving, playback & recording layer.

    from engine import InteractionMachine, Stepper, Recorder, compare
"""

from engine.run         import SearchRun, start_run
from engine.interaction import InteractionMachine, InteractionMode, MODE_HINTS
from engine.stepper     import Stepper, StepperState, SPEED_PRESETS
from engine.recorder    import Recorder, RunMetrics, ComparisonResult, compare, compare_all

__all__ = [
    "SearchRun",
    "start_run",
    "InteractionMachine",
    "InteractionMode",
    "MODE_HINTS",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "compare_all",
]
