#!/usr/bin/env python3
"""
SimulationController: authoritative simulation state across ticks.

What it owns
- The SimulationParameters instance, changed only via set_parameter().
- The current generation of bodies, replaced wholesale by every tick.
- The run state machine:

      IDLE --start--> RUNNING --pause--> PAUSED --start--> RUNNING
      any  --stop--> STOPPED --reset--> IDLE

- A command queue. The Dear PyGui panel and the Pygame input handlers submit
  commands; advance() applies them between ticks.

Threading
- advance(), tick() and snapshot() run on the viewport thread. The lock also
  lets the UI thread read state and body counts consistently.
"""
import logging
import random
import threading
from dataclasses import replace
from enum import Enum
from typing import Any, List, Optional, Set, Tuple

from . import commands as cmd
from .data_models import Body
from .forces import connections
from .params import SimulationParameters
from .snapshots import BodySnapshot, Frame
from .spawner import spawn_bodies
from .step import StepResult, simulation_step
from .vector_utils import is_finite

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class SimulationController:
    """
    Owns bodies, parameters and run state. All mutation goes through here.
    """

    def __init__(self, params: Optional[SimulationParameters] = None,
                 bodies: Optional[List[Body]] = None, seed: Optional[int] = None):
        self.lock = threading.RLock()
        self.params = params or SimulationParameters()
        self.state = SimulationState.IDLE
        self.commands = cmd.CommandQueue()
        self.rng = random.Random(seed)
        self.tick_count = 0
        self.last_step: Optional[StepResult] = None

        # Pointer state
        self.dragging = False
        self._pinned: Set[int] = set()

        if bodies is None:
            self.bodies: List[Body] = spawn_bodies(self.params.body_count, self.params, self.rng)
        else:
            self.bodies = [replace(b) for b in bodies]
            self.params.body_count = len(self.bodies)

    # -----------------------
    # State machine
    # -----------------------

    def _transition(self, allowed, target: SimulationState) -> bool:
        with self.lock:
            if self.state not in allowed:
                logger.debug("Ignored %s -> %s", self.state.value, target.value)
                return False
            logger.info("Simulation %s -> %s", self.state.value, target.value)
            self.state = target
            return True

    def start(self) -> bool:
        return self._transition((SimulationState.IDLE, SimulationState.PAUSED), SimulationState.RUNNING)

    def pause(self) -> bool:
        return self._transition((SimulationState.RUNNING,), SimulationState.PAUSED)

    def stop(self) -> bool:
        return self._transition(tuple(SimulationState), SimulationState.STOPPED)

    def toggle_running(self) -> bool:
        """Start/pause button: pause while running, otherwise start."""
        with self.lock:
            if self.state == SimulationState.RUNNING:
                return self.pause()
            return self.start()

    @property
    def running(self) -> bool:
        return self.state == SimulationState.RUNNING

    # -----------------------
    # Parameters and collection
    # -----------------------

    def set_parameter(self, name: str, value: Any) -> Any:
        """
        Change one parameter; effective from the next tick.

        body_count rebuilds the collection, body_radius resizes every body.
        """
        with self.lock:
            stored = self.params.set(name, value)
            if name == "body_count":
                self.reset(stored)
            elif name == "body_radius":
                self.bodies = [b.resized(stored) for b in self.bodies]
            return stored

    def reset(self, count: Optional[int] = None) -> None:
        """Replace every body with count fresh ones (default: params.body_count)."""
        with self.lock:
            if count is not None:
                self.params.set("body_count", count)
            self.bodies = spawn_bodies(self.params.body_count, self.params, self.rng)
            self.dragging = False
            self._pinned.clear()
            logger.info("Reset with %d bodies", len(self.bodies))
            if self.state == SimulationState.STOPPED:
                self.state = SimulationState.IDLE

    def set_area(self, width: float, height: float) -> None:
        with self.lock:
            self.params.set("width", width)
            self.params.set("height", height)

    # -----------------------
    # Ticks
    # -----------------------

    def tick(self, n: int = 1) -> List[Body]:
        """Run n steps regardless of the run state; returns the new generation."""
        with self.lock:
            for _ in range(max(0, int(n))):
                result = simulation_step(self.bodies, self.params, self._pinned)
                self._pinned.clear()
                # last_step keeps its own Body objects; pointer input edits self.bodies in place
                self.bodies = [replace(b) for b in result.bodies]
                self.last_step = result
                self.tick_count += 1
                if result.merges:
                    logger.debug("Tick %d: %d merge(s), %d bodies left",
                                 self.tick_count, len(result.merges), len(self.bodies))
            return self.bodies

    def advance(self) -> bool:
        """
        Frame callback: apply queued commands, then step once if running.

        Returns True if a tick ran.
        """
        with self.lock:
            self.apply_pending()
            if self.state != SimulationState.RUNNING:
                return False
            self.tick()
            return True

    # -----------------------
    # Commands
    # -----------------------

    def submit(self, command: "cmd.Command") -> None:
        self.commands.put(command)

    def apply_pending(self) -> int:
        applied = 0
        for command in self.commands.drain():
            try:
                self.apply(command)
                applied += 1
            except (KeyError, ValueError, TypeError) as e:
                logger.warning("Dropped command %r: %s", command, e)
        return applied

    def apply(self, command: "cmd.Command") -> None:
        logger.debug("Applying %r", command)
        with self.lock:
            if isinstance(command, cmd.Start):
                self.start()
            elif isinstance(command, cmd.Pause):
                self.pause()
            elif isinstance(command, cmd.TogglePlay):
                self.toggle_running()
            elif isinstance(command, cmd.Stop):
                self.stop()
            elif isinstance(command, cmd.Reset):
                self.reset(command.count)
            elif isinstance(command, cmd.SetParameter):
                self.set_parameter(command.name, command.value)
            elif isinstance(command, cmd.PointerDown):
                self.pointer_down(command.position)
            elif isinstance(command, cmd.PointerMove):
                self.pointer_move(command.position)
            elif isinstance(command, cmd.PointerUp):
                self.pointer_up()
            else:
                raise TypeError(f"Unknown command: {command!r}")

    # -----------------------
    # Pointer input
    # -----------------------

    def body_at(self, point: Tuple[float, float]) -> Optional[int]:
        """Index of the nearest body whose radius covers point, or None."""
        with self.lock:
            idx = None
            min_d = float("inf")
            for i, b in enumerate(self.bodies):
                d = b.distance_to_point(point)
                if d <= b.radius and d < min_d:
                    min_d = d
                    idx = i
            return idx

    def selected_index(self) -> Optional[int]:
        with self.lock:
            return next((i for i, b in enumerate(self.bodies) if b.selected), None)

    def pointer_down(self, point: Tuple[float, float]) -> Optional[int]:
        with self.lock:
            idx = self.body_at(point)
            for b in self.bodies:
                b.selected = False
            if idx is not None:
                self.bodies[idx].selected = True
            self.dragging = idx is not None
            return idx

    def pointer_move(self, point: Tuple[float, float]) -> None:
        with self.lock:
            hover = self.body_at(point)
            for i, b in enumerate(self.bodies):
                b.hovered = i == hover
            if not self.dragging:
                return
            idx = self.selected_index()
            if idx is None:
                # The held body merged away
                self.dragging = False
                return
            if is_finite(point):
                self.bodies[idx].position = (float(point[0]), float(point[1]))
                self._pinned.add(idx)

    def pointer_up(self) -> None:
        with self.lock:
            self.dragging = False

    # -----------------------
    # Rendering
    # -----------------------

    def snapshot(self) -> Frame:
        with self.lock:
            bodies = [
                BodySnapshot(b.position, b.radius, b.color, b.selected, b.hovered)
                for b in self.bodies
            ]
            return Frame(
                bodies=bodies,
                connections=connections(self.bodies, self.params),
                state=self.state.value,
                gravity=self.params.gravity,
            )
