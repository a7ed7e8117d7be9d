"""
stepper.py — Frame-by-Frame Playback
=====================================
The Stepper is the object the shell talks to while a run animates.
It owns the frame iterator of one SearchRun and exposes a small
play/pause/next/speed API.  Frames are pulled one at a time, only when
the shell asks, so the run advances exactly as fast as it is drawn.

State machine:
    IDLE     →  start()   →  PAUSED
    PAUSED   →  play()    →  PLAYING
    PLAYING  →  pause()   →  PAUSED
    PLAYING  →  (frames exhausted) → FINISHED
    any      →  reset()   →  IDLE

Playback is forward only: frames that have been drawn are not kept.

Thread safety:
  This class is NOT thread-safe.  The shell must call next_step() /
  tick() from a single thread (or from one async event loop).
"""

import time
from enum import Enum
from typing import Callable, Iterator, Optional

from algorithms import Frame, PathStep, VisitEvent


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per frame)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   0.25,
    "medium": 0.05,
    "fast":   0.03,   # path animation pace
    "turbo":  0.01,   # exploration pace
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state         : Current StepperState.
        current_frame : The frame drawn last (None before the first one).
        visits_shown  : VisitEvents pulled so far.
        path_shown    : PathSteps pulled so far.
        speed         : Seconds between auto-advance ticks.
        on_frame      : Optional callback(Frame) fired for every new frame.
                        The shell hooks its re-render here.
    """

    def __init__(self, on_frame: Optional[Callable[[Frame], None]] = None, speed: str = "medium"):
        self._frames:       Optional[Iterator[Frame]] = None
        self.current_frame: Optional[Frame]  = None
        self.visits_shown:  int              = 0
        self.path_shown:    int              = 0
        self.state:         StepperState     = StepperState.IDLE
        self.speed:         float            = SPEED_PRESETS.get(speed, SPEED_PRESETS["medium"])
        self.on_frame:      Optional[Callable[[Frame], None]] = on_frame

        # for auto-play timing
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, frames: Iterator[Frame]) -> None:
        """Attach a fresh frame iterator.  Nothing is pulled until next_step()."""
        self._frames       = iter(frames)
        self.current_frame = None
        self.visits_shown  = 0
        self.path_shown    = 0
        self.state         = StepperState.PAUSED

    def reset(self) -> None:
        """Back to IDLE — caller must call start() again."""
        self._frames       = None
        self.current_frame = None
        self.visits_shown  = 0
        self.path_shown    = 0
        self.state         = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Pull and show one frame.  Returns False once the run is exhausted."""
        if self._frames is None or self.state is StepperState.FINISHED:
            return False
        try:
            frame = next(self._frames)
        except StopIteration:
            self.state = StepperState.FINISHED
            return False
        self._show(frame)
        return True

    def jump_to_end(self) -> int:
        """Drain every remaining frame.  Returns how many were pulled."""
        pulled = 0
        while self.next_step():
            pulled += 1
        return pulled

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state is StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state is StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 10 ms).  If playing and enough
        time has elapsed, advances one frame.  Returns True if a frame
        was shown.
        """
        if self.state is not StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick >= self.speed:
            self._last_tick = now
            return self.next_step()
        return False

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(0.005, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def frames_shown(self) -> int:
        return self.visits_shown + self.path_shown

    @property
    def is_finished(self) -> bool:
        return self.state is StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state is StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _show(self, frame: Frame) -> None:
        self.current_frame = frame
        if isinstance(frame, VisitEvent):
            self.visits_shown += 1
        elif isinstance(frame, PathStep):
            self.path_shown += 1
        if self.on_frame:
            self.on_frame(frame)
