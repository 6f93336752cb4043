#!/usr/bin/env python3
"""
Commands sent to the SimulationController from the UI and viewport threads.

Pointer callbacks and control-panel widgets never touch the body collection.
They put a command on the controller's queue; the frame loop drains the queue
between ticks, so one tick never observes a half-applied input event.
"""
import queue
from dataclasses import dataclass
from typing import Any, List, Tuple, Union


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class TogglePlay:
    pass


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class Reset:
    count: Union[int, None] = None


@dataclass(frozen=True)
class SetParameter:
    name: str
    value: Any


@dataclass(frozen=True)
class PointerDown:
    position: Tuple[float, float]


@dataclass(frozen=True)
class PointerMove:
    position: Tuple[float, float]


@dataclass(frozen=True)
class PointerUp:
    pass


Command = Union[Start, Pause, TogglePlay, Stop, Reset, SetParameter, PointerDown, PointerMove, PointerUp]


class CommandQueue:
    """Thread-safe FIFO of pending commands."""

    def __init__(self):
        self._queue: "queue.Queue[Command]" = queue.Queue()

    def put(self, command: Command) -> None:
        self._queue.put(command)

    def drain(self) -> List[Command]:
        """Remove and return every command queued so far, oldest first."""
        pending: List[Command] = []
        while True:
            try:
                pending.append(self._queue.get_nowait())
            except queue.Empty:
                return pending

    def __len__(self) -> int:
        return self._queue.qsize()
