"""Run elision ("squeezing") of repeated display lines.

A display line holds ``panels * 8`` bytes. When two or more consecutive
full lines consist of one and the same byte value, the first one is
printed, the second is replaced by a single ``*`` marker line and every
further line of the run is dropped, like ``hexdump`` does for zero-filled
regions.

The Squeezer sees bytes one at a time with their absolute, 1-based stream
index and keeps one of seven states:

    Disabled                 squeezing switched off (terminal)
    NoSqueeze                the current line is not uniform
    Probe                    the current line may become a candidate
    SqueezeActiveFirstLine   one uniform line seen, waiting for the next
    SqueezeFirstLine         second identical line complete: print marker
    SqueezeActive            inside a squeezed run, line not complete yet
    Squeeze                  another identical line complete: drop it

Only the last byte of a line (``index % W == 0``) can advance the cycle.
A mismatch on the first byte of a line re-arms ``Probe`` so a run broken at
a line boundary can start over immediately; a mismatch anywhere else
demotes the line to ``NoSqueeze``.

"""

from __future__ import annotations

from enum import Enum, auto
from types import MappingProxyType
from typing import Final


class SqueezeState(Enum):
    """States of the squeeze machine."""

    DISABLED = auto()
    NO_SQUEEZE = auto()
    PROBE = auto()
    SQUEEZE_ACTIVE_FIRST_LINE = auto()
    SQUEEZE_FIRST_LINE = auto()
    SQUEEZE_ACTIVE = auto()
    SQUEEZE = auto()


class SqueezeAction(Enum):
    """What the printer does with a completed line."""

    IGNORE = auto()  # print the line as is
    PRINT = auto()  # print the "*" marker instead of the line
    DELETE = auto()  # print nothing


# Successor when a line ends on the same byte value it was made of
_LINE_END_CYCLE: Final = MappingProxyType(
    {
        SqueezeState.DISABLED: SqueezeState.DISABLED,
        SqueezeState.NO_SQUEEZE: SqueezeState.PROBE,
        SqueezeState.PROBE: SqueezeState.SQUEEZE_ACTIVE_FIRST_LINE,
        SqueezeState.SQUEEZE_ACTIVE_FIRST_LINE: SqueezeState.SQUEEZE_FIRST_LINE,
        SqueezeState.SQUEEZE_FIRST_LINE: SqueezeState.SQUEEZE_ACTIVE,
        SqueezeState.SQUEEZE_ACTIVE: SqueezeState.SQUEEZE,
        SqueezeState.SQUEEZE: SqueezeState.SQUEEZE_ACTIVE,
    }
)

# (action, successor) for states that decide a line; all others ignore
_LINE_ACTIONS: Final = MappingProxyType(
    {
        SqueezeState.SQUEEZE_FIRST_LINE: (SqueezeAction.PRINT, SqueezeState.SQUEEZE_ACTIVE),
        SqueezeState.SQUEEZE: (SqueezeAction.DELETE, SqueezeState.SQUEEZE_ACTIVE),
    }
)

ACTIVE_STATES: Final[frozenset[SqueezeState]] = frozenset(
    {
        SqueezeState.SQUEEZE,
        SqueezeState.SQUEEZE_ACTIVE,
        SqueezeState.SQUEEZE_FIRST_LINE,
        SqueezeState.SQUEEZE_ACTIVE_FIRST_LINE,
    }
)


def next_state(state: SqueezeState, *, equal: bool, position: int) -> SqueezeState:
    """Transition function of the squeeze machine.

    Args:
        state: Current state
        equal: Whether the byte equals the previously seen byte
        position: ``index % W`` of the byte (0 = last byte of a line,
            1 = first byte of a line)

    Returns:
        The successor state
    """
    if state is SqueezeState.DISABLED:
        return state
    if position == 0:
        return _LINE_END_CYCLE[state] if equal else SqueezeState.PROBE
    if equal:
        return state
    if position == 1:
        return SqueezeState.PROBE
    return SqueezeState.NO_SQUEEZE


class Squeezer:
    """Stateful squeeze detector for one render session.

    Usage:
        >>> squeezer = Squeezer(enabled=True, line_size=8)
        >>> for index in range(1, 9):
        ...     squeezer.process(0, index)
        >>> squeezer.action()
        <SqueezeAction.IGNORE: 1>

    The printer calls ``process`` for every byte, ``action`` once per
    completed line and ``advance`` after the line was flushed.

    """

    __slots__ = ("_state", "_byte", "_line_size", "_line_length")

    def __init__(self, enabled: bool, line_size: int = 16) -> None:
        if line_size < 1:
            raise ValueError(f"line size must be positive, got {line_size}")
        self._state = SqueezeState.PROBE if enabled else SqueezeState.DISABLED
        self._byte = 0
        self._line_size = line_size
        self._line_length = 0

    @property
    def state(self) -> SqueezeState:
        return self._state

    @property
    def line_size(self) -> int:
        return self._line_size

    @property
    def line_length(self) -> int:
        """Bytes processed since the last ``advance``."""
        return self._line_length

    def process(self, byte: int, index: int) -> bool:
        """Feed one byte at absolute 1-based stream ``index``.

        Returns:
            False if squeezing is disabled (the byte is ignored), else True
        """
        if self._state is SqueezeState.DISABLED:
            return False
        self._state = next_state(
            self._state,
            equal=byte == self._byte,
            position=index % self._line_size,
        )
        self._byte = byte
        self._line_length += 1
        return True

    def active(self) -> bool:
        """Whether a squeeze run is in progress or pending."""
        return self._state in ACTIVE_STATES

    def action(self) -> SqueezeAction:
        """Decide the completed line. Call exactly once per line."""
        decided = _LINE_ACTIONS.get(self._state)
        if decided is None:
            return SqueezeAction.IGNORE
        action, self._state = decided
        return action

    def advance(self) -> None:
        """Start a new line. The squeeze state carries over."""
        self._line_length = 0
