"""Whack-a-mole: moles pop up one after another; whack each before it hides.

The whole schedule of moles is drawn when the session starts and kept
secret; only the mole currently up is exposed as ``progress.currentMole``.
"""
from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .errors import InvalidAction
from .scoring import score_whack_a_mole, whack_combo, whack_hit_points
from .session import Outcome, Result

PERFECT_HIT_MS = 200
# Seconds of slack on top of the round duration before the session expires.
GRACE_SECONDS = 5

GRID_SIZES = {'easy': 9, 'normal': 9, 'hard': 16, 'expert': 25, 'insane': 36}
SPAWN_RATES = {'easy': 1500, 'normal': 1200, 'hard': 1000, 'expert': 800, 'insane': 600}
VISIBILITY = {'easy': 2000, 'normal': 1500, 'hard': 1200, 'expert': 1000, 'insane': 800}
DURATIONS = {
    'classic': 30, 'arcade': 60, 'zen': 120, 'survival': 180,
    'time-attack': 45, 'precision': 30, 'endurance': 300, 'chaos': 90,
}

POINT_VALUES = {
    'normal': 10, 'fast': 15, 'slow': 8, 'bonus': 25, 'golden': 50,
    'bomb': -20, 'freeze': 30, 'double': 20, 'giant': 5, 'mini': 40,
}
MOLE_WEIGHTS = {
    'normal': 50, 'fast': 15, 'slow': 10, 'bonus': 10, 'golden': 5,
    'bomb': 3, 'freeze': 2, 'double': 3, 'giant': 1, 'mini': 1,
}
VISIBILITY_MULTIPLIERS = {
    'normal': 1.0, 'fast': 0.6, 'slow': 1.5, 'bonus': 0.8, 'golden': 0.7,
    'bomb': 2.0, 'freeze': 3.0, 'double': 1.0, 'giant': 1.2, 'mini': 0.5,
}


class WhackConfig(GameConfig):
    difficulty: Literal['easy', 'normal', 'hard', 'expert', 'insane'] = 'normal'
    mode: Literal['classic', 'arcade', 'zen', 'survival', 'time-attack', 'precision', 'endurance', 'chaos'] = 'classic'
    special_moles: bool = True


class Whack(GameAction):
    type: Literal['whack'] = 'whack'
    mole_id: int
    position: int = Field(ge=0)
    reaction_time: float = Field(ge=0, le=10000)


class Miss(GameAction):
    type: Literal['miss'] = 'miss'
    mole_id: int


class WhackAMoleGame(Game):
    name = 'whack-a-mole'
    title = 'Whack-a-Mole'
    config_model = WhackConfig
    action_models = (Whack, Miss)
    default_action = 'whack'
    secret_fields = frozenset({'moles'})

    def finish_config(self, config):
        if config['timeLimit'] is None:
            config['timeLimit'] = DURATIONS[config['mode']] + GRACE_SECONDS
        return config

    def generate(self, config, rng):
        difficulty = config['difficulty']
        grid = GRID_SIZES[difficulty]
        spawn = SPAWN_RATES[difficulty]
        count = DURATIONS[config['mode']] * 1000 // spawn
        kinds = list(MOLE_WEIGHTS)
        weights = list(MOLE_WEIGHTS.values())
        moles = []
        for i in range(count):
            kind = rng.choices(kinds, weights)[0] if config['specialMoles'] else 'normal'
            moles.append({
                'id': i + 1,
                'position': rng.randrange(grid),
                'type': kind,
                'appearAt': i * spawn,
                'visibleMs': int(VISIBILITY[difficulty] * VISIBILITY_MULTIPLIERS[kind]),
                'points': POINT_VALUES[kind],
            })
        progress = {
            'currentMole': dict(moles[0]),
            'resolved': 0,
            'points': 0,
            'hits': 0,
            'misses': 0,
            'streak': 0,
            'bestStreak': 0,
            'combo': 1.0,
        }
        return {'gridSize': grid, 'totalMoles': count, 'moles': moles}, progress

    def apply(self, session, action, elapsed):
        progress = session.progress
        mole = progress['currentMole']
        if action.mole_id != mole['id']:
            raise InvalidAction(f"Expected mole {mole['id']}")

        if action.type == 'whack':
            if action.position >= session.content['gridSize']:
                raise InvalidAction('Position is off the grid')
            on_time = action.position == mole['position'] and action.reaction_time <= mole['visibleMs']
            if not on_time:
                result, details = self._missed(progress, mole)
            elif mole['type'] == 'bomb':
                progress['points'] += mole['points']
                progress['streak'] = 0
                progress['combo'] = 1.0
                result, details = Result.INCORRECT, {'hit': True, 'bomb': True, 'points': mole['points']}
            else:
                perfect = action.reaction_time <= PERFECT_HIT_MS
                earned = whack_hit_points(mole['points'], perfect, progress['combo'])
                progress['points'] += earned
                progress['hits'] += 1
                progress['streak'] += 1
                progress['bestStreak'] = max(progress['bestStreak'], progress['streak'])
                progress['combo'] = whack_combo(progress['streak'])
                result, details = Result.CORRECT, {'hit': True, 'perfect': perfect, 'points': earned}
        else:
            result, details = self._missed(progress, mole)

        progress['resolved'] += 1
        moles = session.content['moles']
        done = progress['resolved'] >= len(moles)
        progress['currentMole'] = None if done else dict(moles[progress['resolved']])
        details.update({
            'moleType': mole['type'],
            'score': progress['points'],
            'streak': progress['streak'],
            'combo': progress['combo'],
        })
        return Outcome(result, terminal=done, details=details)

    def _missed(self, progress, mole):
        if mole['type'] == 'bomb':
            return Result.NO_EFFECT, {'hit': False, 'avoided': True}
        progress['misses'] += 1
        progress['streak'] = 0
        progress['combo'] = 1.0
        return Result.INCORRECT, {'hit': False, 'points': 0}

    def metrics(self, session, elapsed):
        progress = session.progress
        return {
            'points': progress['points'],
            'hits': progress['hits'],
            'misses': progress['misses'],
            'best_streak': progress['bestStreak'],
        }

    def score(self, metrics, config):
        return score_whack_a_mole(metrics, config)
