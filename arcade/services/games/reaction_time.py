from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .scoring import score_reaction_time
from .session import Outcome, Result

MIN_VALID_MS = 100
MAX_VALID_MS = 5000

DELAYS = {
    'easy': (2000, 4000),
    'medium': (1000, 3000),
    'hard': (500, 2000),
    'extreme': (200, 1000),
}


class ReactionConfig(GameConfig):
    difficulty: Literal['easy', 'medium', 'hard', 'extreme'] = 'medium'
    attempts: int = Field(default=5, ge=1, le=10)


class Attempt(GameAction):
    type: Literal['attempt'] = 'attempt'
    reaction_time: float = Field(ge=0, le=60000)
    too_early: bool = False


class ReactionTimeGame(Game):
    """Reaction test: wait for the stimulus, then click.

    The stimulus delays are drawn up front and kept secret; only the next
    one is exposed, as ``progress.nextDelay``.
    """
    name = 'reaction-time'
    title = 'Reaction Time'
    config_model = ReactionConfig
    action_models = (Attempt,)
    default_action = 'attempt'
    secret_fields = frozenset({'delays'})

    def generate(self, config, rng):
        low, high = DELAYS[config['difficulty']]
        delays = [rng.randint(low, high) for _ in range(config['attempts'])]
        progress = {
            'attempt': 0,
            'nextDelay': delays[0],
            'results': [],
            'falseStarts': 0,
            'bestTime': None,
            'averageTime': None,
        }
        return {'delays': delays}, progress

    def apply(self, session, action, elapsed):
        progress = session.progress
        delays = session.content['delays']
        valid = not action.too_early and MIN_VALID_MS <= action.reaction_time <= MAX_VALID_MS

        progress['attempt'] += 1
        if action.too_early:
            progress['falseStarts'] += 1
        progress['results'].append({
            'attempt': progress['attempt'],
            'reactionTime': action.reaction_time,
            'tooEarly': action.too_early,
            'valid': valid,
        })
        times = _valid_times(progress)
        if times:
            progress['bestTime'] = min(times)
            progress['averageTime'] = round(sum(times) / len(times), 1)
        done = progress['attempt'] >= len(delays)
        progress['nextDelay'] = None if done else delays[progress['attempt']]

        return Outcome(
            Result.CORRECT if valid else Result.INCORRECT,
            terminal=done,
            details={
                'valid': valid,
                'attempt': progress['attempt'],
                'attemptsLeft': len(delays) - progress['attempt'],
                'bestTime': progress['bestTime'],
                'averageTime': progress['averageTime'],
            },
        )

    def metrics(self, session, elapsed):
        return {
            'times': _valid_times(session.progress),
            'false_starts': session.progress['falseStarts'],
        }

    def score(self, metrics, config):
        return score_reaction_time(metrics, config)


def _valid_times(progress):
    return [r['reactionTime'] for r in progress['results'] if r['valid']]
