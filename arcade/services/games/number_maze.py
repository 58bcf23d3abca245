"""Number Maze: reach the target number from the start number.

Each move applies one operation to the current number. The round ends on
the target (success) or when the move budget runs out (failure).
"""
from __future__ import annotations

import math
from typing import Literal, Optional

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .errors import InvalidAction
from .scoring import score_number_maze
from .session import Outcome, Result

MAX_ABS_VALUE = 10 ** 9

# (start range, target range, benchmark move count)
LEVELS = {
    'beginner': ((1, 10), (10, 29), 25),
    'intermediate': ((1, 15), (20, 59), 14),
    'advanced': ((1, 20), (40, 119), 9),
    'expert': ((1, 25), (50, 199), 7),
    'master': ((1, 30), (100, 499), 5),
}

OPERAND_REQUIRED = {'add', 'subtract', 'multiply', 'divide'}


class MazeConfig(GameConfig):
    difficulty: Literal['beginner', 'intermediate', 'advanced', 'expert', 'master'] = 'beginner'
    max_moves: Optional[int] = Field(default=None, ge=1, le=100)


class Move(GameAction):
    type: Literal['move'] = 'move'
    operation: Literal['add', 'subtract', 'multiply', 'divide', 'square', 'sqrt']
    operand: Optional[int] = Field(default=None, ge=-1000, le=1000)


def apply_operation(current: int, operation: str, operand: Optional[int]) -> int:
    if operation in OPERAND_REQUIRED and operand is None:
        raise InvalidAction(f'Operand is required for {operation}')
    if operation == 'add':
        return current + operand
    if operation == 'subtract':
        return current - operand
    if operation == 'multiply':
        return current * operand
    if operation == 'divide':
        if operand == 0:
            raise InvalidAction('Cannot divide by zero')
        return current // operand
    if operation == 'square':
        return current * current
    if current < 0:
        raise InvalidAction('Cannot take square root of negative number')
    return math.isqrt(current)


def hint(current: int, target: int) -> str:
    difference = target - current
    if difference == 0:
        return "You've reached the target!"
    if difference > 0:
        if difference > 100:
            return 'Try multiplying to get closer to the target faster'
        if difference > 10:
            return 'Try adding or multiplying to reach the target'
        return "You're close! Try adding to reach the target"
    if -difference > 100:
        return 'Try dividing to reduce the number'
    if -difference > 10:
        return 'Try subtracting or dividing'
    return "You're close! Try subtracting to reach the target"


class NumberMazeGame(Game):
    name = 'number-maze'
    title = 'Number Maze'
    config_model = MazeConfig
    action_models = (Move,)
    default_action = 'move'

    def finish_config(self, config):
        if config['maxMoves'] is None:
            config['maxMoves'] = LEVELS[config['difficulty']][2] * 2
        return config

    def generate(self, config, rng):
        (start_lo, start_hi), (target_lo, target_hi), _ = LEVELS[config['difficulty']]
        start = rng.randint(start_lo, start_hi)
        target = rng.randint(target_lo, target_hi)
        while target == start:
            target = rng.randint(target_lo, target_hi)
        content = {'startNumber': start, 'targetNumber': target}
        progress = {'currentNumber': start, 'moves': 0, 'history': [], 'success': False}
        return content, progress

    def apply(self, session, action, elapsed):
        progress = session.progress
        target = session.content['targetNumber']
        current = progress['currentNumber']
        result = apply_operation(current, action.operation, action.operand)
        if abs(result) > MAX_ABS_VALUE:
            raise InvalidAction('Result is out of range')

        progress['moves'] += 1
        progress['currentNumber'] = result
        progress['history'].append({
            'operation': action.operation,
            'operand': action.operand,
            'from': current,
            'to': result,
        })
        moves_left = session.config['maxMoves'] - progress['moves']

        if result == target:
            progress['success'] = True
            outcome = Result.CORRECT
        elif moves_left <= 0:
            outcome = Result.INCORRECT
        else:
            outcome = Result.NO_EFFECT
        return Outcome(
            outcome,
            terminal=progress['success'] or moves_left <= 0,
            details={
                'currentNumber': result,
                'moves': progress['moves'],
                'movesLeft': max(0, moves_left),
                'reached': progress['success'],
                'hint': hint(result, target),
            },
        )

    def metrics(self, session, elapsed):
        return {
            'success': session.progress['success'],
            'moves': session.progress['moves'],
            'target': session.content['targetNumber'],
            'elapsed': elapsed,
        }

    def score(self, metrics, config):
        return score_number_maze(metrics, config)
