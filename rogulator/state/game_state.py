from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, List, Optional

from rogulator.config import RunConfig
from rogulator.state.actors import Player
from rogulator.state.world import Floor

# Statuses
PLAYING = "playing"
WON = "won"
LOST = "lost"

# Message types
INFO = "info"
COMBAT = "combat"
PICKUP = "pickup"
SYSTEM = "system"


@dataclass(frozen=True)
class GameMessage:
    text: str
    type: str
    turn: int


class MessageLog:
    """Bounded player-facing log; the oldest entries fall off first."""

    def __init__(self, capacity: int = 50, messages: Optional[Iterable[GameMessage]] = None) -> None:
        self.capacity = capacity
        self.messages: Deque[GameMessage] = deque(messages or (), maxlen=capacity)

    def add(self, text: str, type: str, turn: int) -> GameMessage:
        msg = GameMessage(text, type, turn)
        self.messages.append(msg)
        return msg

    def tail(self, n: int) -> List[GameMessage]:
        if n <= 0:
            return []
        return list(self.messages)[-n:]

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self):
        return iter(self.messages)


@dataclass
class GameState:
    run_id: str
    config: RunConfig
    player: Player
    floor: Floor
    floor_number: int = 1
    turn: int = 0
    status: str = PLAYING
    messages: MessageLog = field(default_factory=MessageLog)
    current_room_id: Optional[str] = None
    previous_room_id: Optional[str] = None
    monsters_defeated: int = 0
    killed_by: Optional[str] = None

    @property
    def playing(self) -> bool:
        return self.status == PLAYING
