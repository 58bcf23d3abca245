"""Extension point every session-based game implements."""
from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from .errors import InvalidAction, InvalidConfig
from .session import Outcome, Session


class GameConfig(BaseModel):
    """Options shared by every game. Subclasses add their own enums."""
    model_config = ConfigDict(extra='forbid', alias_generator=to_camel, populate_by_name=True)

    seed: Optional[int] = None
    time_limit: Optional[int] = Field(default=None, gt=0, le=24 * 3600)


class GameAction(BaseModel):
    model_config = ConfigDict(extra='forbid', alias_generator=to_camel, populate_by_name=True)


def describe_validation_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    where = '.'.join(str(part) for part in err.get('loc', ()))
    return f"{where}: {err['msg']}" if where else err['msg']


class Game(ABC):
    name = ''
    title = ''
    config_model: type[GameConfig] = GameConfig
    action_models: tuple[type[GameAction], ...] = ()
    default_action: Optional[str] = None
    secret_fields: frozenset = frozenset()

    def __init__(self):
        models = tuple(self.action_models)
        if len(models) == 1:
            self._actions = TypeAdapter(models[0])
        else:
            self._actions = TypeAdapter(Annotated[Union[models], Field(discriminator='type')])

    def parse_config(self, payload: Optional[dict]) -> dict[str, Any]:
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise InvalidConfig('Configuration must be a JSON object')
        try:
            config = self.config_model.model_validate(payload)
        except ValidationError as exc:
            raise InvalidConfig(describe_validation_error(exc)) from exc
        return self.finish_config(config.model_dump(by_alias=True, mode='json'))

    def finish_config(self, config: dict[str, Any]) -> dict[str, Any]:
        """Fill in difficulty-derived defaults after validation."""
        return config

    def parse_action(self, payload: Optional[dict]) -> GameAction:
        if not isinstance(payload, dict):
            raise InvalidAction('Action must be a JSON object')
        data = dict(payload)
        if self.default_action:
            data.setdefault('type', self.default_action)
        try:
            return self._actions.validate_python(data)
        except ValidationError as exc:
            raise InvalidAction(describe_validation_error(exc)) from exc

    @abstractmethod
    def generate(self, config: dict[str, Any], rng: random.Random) -> tuple[dict, dict]:
        """Return the initial ``(content, progress)`` for a new session."""

    @abstractmethod
    def apply(self, session: Session, action: GameAction, elapsed: float) -> Outcome:
        """Apply a validated action to ``session`` in place.

        Raise InvalidAction for game-rule violations; the engine discards
        the working copy in that case.
        """

    @abstractmethod
    def metrics(self, session: Session, elapsed: float) -> dict[str, Any]:
        """Observable performance figures fed to :meth:`score`."""

    @abstractmethod
    def score(self, metrics: dict[str, Any], config: dict[str, Any]) -> int:
        pass

    def is_revealed(self, node: dict) -> bool:
        return False

    def describe(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'title': self.title,
            'actions': [m.model_fields['type'].default for m in self.action_models],
            'config': self.config_model.model_json_schema(by_alias=True),
        }
