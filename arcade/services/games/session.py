from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass
class Session:
    """One round of one game, as held by the store.

    ``content`` may carry answers; never hand a Session to a client without
    running it through the projector first.
    """
    session_id: str
    game: str
    config: dict[str, Any]
    content: dict[str, Any]
    progress: dict[str, Any]
    start_time: float
    user_id: Optional[int] = None
    completed: bool = False
    end_time: Optional[float] = None
    score: int = 0
    # Store revision; 0 until the first put
    version: int = 0

    def copy(self) -> 'Session':
        return copy.deepcopy(self)


class Result(str, Enum):
    CORRECT = 'correct'
    INCORRECT = 'incorrect'
    NO_EFFECT = 'no_effect'


@dataclass
class Outcome:
    """What a single processed action did."""
    result: Result
    terminal: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {'result': self.result.value, **self.details}
