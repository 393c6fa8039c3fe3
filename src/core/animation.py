"""
Animation scheduler: advances the term count on a fixed delay and redraws.

Two ways to drive it:
- Timer-driven (GUI): start()/stop() with a timer backend that calls back
  into the same thread (QtTimer, or ManualTimer for headless use)
- Loop-driven (headless): run() blocks and steps until the stop event is set
"""

import heapq
import time
import traceback
from typing import Callable, Optional

from config import DEFAULT_STEP_DELAY_MS
from src.core import VisualizerState


class _PendingCall:
    """Handle returned by ManualTimer.call_later."""

    def __init__(self, due_ms: float, seq: int, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def __lt__(self, other: '_PendingCall') -> bool:
        return (self.due_ms, self.seq) < (other.due_ms, other.seq)


class ManualTimer:
    """
    Timer backend with a virtual millisecond clock.
    Callbacks fire only from advance(), on the caller's thread.
    """

    def __init__(self):
        self.now_ms = 0.0
        self._queue = []
        self._seq = 0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> _PendingCall:
        self._seq += 1
        call = _PendingCall(self.now_ms + delay_ms, self._seq, callback)
        heapq.heappush(self._queue, call)
        return call

    def cancel(self, handle: _PendingCall) -> None:
        handle.cancelled = True

    def pending(self) -> int:
        """Number of scheduled, not yet cancelled callbacks."""
        return sum(1 for call in self._queue if not call.cancelled)

    def advance(self, ms: float) -> int:
        """
        Move the clock forward, firing every callback that falls due.
        Callbacks scheduled while advancing also fire if they fall within the window.

        Returns:
            Number of callbacks fired
        """
        target = self.now_ms + ms
        fired = 0
        while self._queue and self._queue[0].due_ms <= target:
            call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self.now_ms = call.due_ms
            call.callback()
            fired += 1
        self.now_ms = target
        return fired


class AnimationState:
    """Scheduler-owned animation state. Rendering code never writes to it."""

    def __init__(self, step_delay_ms: int = DEFAULT_STEP_DELAY_MS):
        self.playing = False
        self.step_delay_ms = int(step_delay_ms)
        self.pending_timer_handle = None
        self.failed_steps = 0

    def __repr__(self) -> str:
        return (f"AnimationState(playing={self.playing}, delay={self.step_delay_ms}ms, "
                f"pending={self.pending_timer_handle is not None})")


class AnimationScheduler:
    """
    Discrete stepper for the term count.

    States: Stopped (initial) and Playing.
    - start(): Stopped -> Playing, steps once immediately, schedules the next step
    - stop():  Playing -> Stopped, cancels the pending step (idempotent)
    - step():  N -> (N mod max) + 1, redraw, reschedule while Playing

    Every start/stop bumps a generation token. A timer callback carrying an
    older token returns without stepping, so no step can run after stop().
    """

    def __init__(
        self,
        context: VisualizerState,
        redraw: Callable[[VisualizerState], None],
        timer=None,
        step_delay_ms: int = DEFAULT_STEP_DELAY_MS,
    ):
        """
        Args:
            context: Engine context whose term count is advanced
            redraw: Called with the context after every step
            timer: Backend with call_later(delay_ms, cb) and cancel(handle);
                   defaults to a ManualTimer
            step_delay_ms: Delay between steps (positive)
        """
        if step_delay_ms <= 0:
            raise ValueError(f"step_delay_ms must be positive, got {step_delay_ms}")
        self.context = context
        self.redraw = redraw
        self.timer = timer if timer is not None else ManualTimer()
        self.state = AnimationState(step_delay_ms)
        self._generation = 0

    @property
    def playing(self) -> bool:
        return self.state.playing

    @property
    def current_term_count(self) -> int:
        return self.context.term_count

    def set_step_delay(self, step_delay_ms: int) -> None:
        """Change the delay; only steps scheduled from now on use it."""
        if step_delay_ms <= 0:
            raise ValueError(f"step_delay_ms must be positive, got {step_delay_ms}")
        self.state.step_delay_ms = int(step_delay_ms)

    def start(self) -> None:
        if self.state.playing:
            return
        self.state.playing = True
        self._generation += 1
        print(f"[Animation] Playing from N={self.context.term_count} "
              f"({self.state.step_delay_ms} ms/step)")
        self.step()

    def stop(self) -> None:
        self._generation += 1
        self._cancel_pending()
        if not self.state.playing:
            return
        self.state.playing = False
        print(f"[Animation] Stopped at N={self.context.term_count}")

    def toggle(self) -> bool:
        """Play/pause. Returns the new playing flag."""
        if self.state.playing:
            self.stop()
        else:
            self.start()
        return self.state.playing

    def step(self) -> int:
        """
        Advance one term and redraw. While Playing, schedule the next step
        even if the redraw failed.

        Returns:
            The new term count
        """
        next_n = self._advance()
        if self.state.playing:
            self._schedule_next()
        return next_n

    def run(self, stop_event, max_steps: Optional[int] = None, realtime: bool = True) -> int:
        """
        Blocking step loop for headless use.

        The stop event and the playing flag are checked at the top of every
        iteration; nothing is rescheduled through the timer.

        Args:
            stop_event: threading.Event (or anything with is_set()) ending the loop
            max_steps: Stop after this many steps (None = until stop_event)
            realtime: Sleep step_delay_ms between steps

        Returns:
            Number of steps taken
        """
        self._cancel_pending()
        self.state.playing = True
        self._generation += 1
        generation = self._generation
        steps = 0
        print(f"[Animation] Loop starting at N={self.context.term_count}")

        try:
            while not stop_event.is_set():
                if not self.state.playing or generation != self._generation:
                    break
                if max_steps is not None and steps >= max_steps:
                    break
                self._advance()
                steps += 1
                if realtime:
                    # Delay is read per iteration so speed changes apply to the next wait
                    time.sleep(self.state.step_delay_ms / 1000.0)
        finally:
            if generation == self._generation:
                self.state.playing = False
            print(f"[Animation] Loop finished after {steps} steps (N={self.context.term_count})")

        return steps

    def _advance(self) -> int:
        n = self.context.term_count
        max_n = self.context.max_term_count
        next_n = (n % max_n) + 1
        self.context.term_count = next_n

        try:
            self.redraw(self.context)
        except Exception as e:
            self.state.failed_steps += 1
            print(f"[Animation] Redraw failed at N={next_n}: {e}")
            traceback.print_exc()

        return next_n

    def _schedule_next(self) -> None:
        self._cancel_pending()
        generation = self._generation
        self.state.pending_timer_handle = self.timer.call_later(
            self.state.step_delay_ms,
            lambda: self._on_timer(generation),
        )

    def _on_timer(self, generation: int) -> None:
        if generation != self._generation or not self.state.playing:
            return
        self.state.pending_timer_handle = None
        self.step()

    def _cancel_pending(self) -> None:
        handle = self.state.pending_timer_handle
        if handle is not None:
            self.timer.cancel(handle)
            self.state.pending_timer_handle = None


__all__ = ['AnimationScheduler', 'AnimationState', 'ManualTimer']
