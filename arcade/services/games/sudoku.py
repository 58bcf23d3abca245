"""Sudoku with seeded puzzle generation.

A full grid is built by shuffling rows, columns, bands, stacks and digits
of a base pattern, then cells are blanked. Placements are checked against
that grid.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .errors import InvalidAction
from .scoring import score_sudoku
from .session import Outcome, Result

# cells removed, hints, mistakes, default time limit
LEVELS = {
    'easy': (35, 5, 5, None),
    'medium': (45, 3, 3, None),
    'hard': (55, 2, 2, 1800),
    'expert': (65, 1, 1, 1200),
}


class SudokuConfig(GameConfig):
    difficulty: Literal['easy', 'medium', 'hard', 'expert'] = 'easy'
    max_hints: Optional[int] = Field(default=None, ge=0, le=10)
    max_mistakes: Optional[int] = Field(default=None, ge=1, le=10)


class Place(GameAction):
    type: Literal['place'] = 'place'
    row: int = Field(ge=0, le=8)
    col: int = Field(ge=0, le=8)
    value: int = Field(ge=1, le=9)


class SudokuHint(GameAction):
    type: Literal['hint'] = 'hint'


def solved_grid(rng):
    def shuffled_groups():
        groups = rng.sample(range(3), 3)
        return [g * 3 + i for g in groups for i in rng.sample(range(3), 3)]

    rows, cols = shuffled_groups(), shuffled_groups()
    digits = rng.sample(range(1, 10), 9)
    return [[digits[(3 * (r % 3) + r // 3 + c) % 9] for c in cols] for r in rows]


class SudokuGame(Game):
    name = 'sudoku'
    title = 'Sudoku'
    config_model = SudokuConfig
    action_models = (Place, SudokuHint)
    default_action = 'place'
    secret_fields = frozenset({'solution'})

    def finish_config(self, config):
        _, hints, mistakes, time_limit = LEVELS[config['difficulty']]
        if config['maxHints'] is None:
            config['maxHints'] = hints
        if config['maxMistakes'] is None:
            config['maxMistakes'] = mistakes
        if config['timeLimit'] is None:
            config['timeLimit'] = time_limit
        return config

    def generate(self, config, rng):
        solution = solved_grid(rng)
        puzzle = [row[:] for row in solution]
        removed = LEVELS[config['difficulty']][0]
        for cell in rng.sample(range(81), removed):
            puzzle[cell // 9][cell % 9] = 0
        progress = {
            'board': [row[:] for row in puzzle],
            'emptyCells': removed,
            'mistakes': 0,
            'hintsUsed': 0,
            'solved': False,
        }
        return {'puzzle': puzzle, 'solution': solution}, progress

    def apply(self, session, action, elapsed):
        progress = session.progress
        solution = session.content['solution']
        board = progress['board']

        if action.type == 'hint':
            if progress['hintsUsed'] >= session.config['maxHints']:
                raise InvalidAction('No hints remaining')
            row, col = next((r, c) for r in range(9) for c in range(9) if board[r][c] == 0)
            board[row][col] = solution[row][col]
            progress['hintsUsed'] += 1
            progress['emptyCells'] -= 1
            progress['solved'] = progress['emptyCells'] == 0
            return Outcome(Result.NO_EFFECT, terminal=progress['solved'], details={
                'row': row, 'col': col, 'value': board[row][col],
                'hintsLeft': session.config['maxHints'] - progress['hintsUsed'],
            })

        if session.content['puzzle'][action.row][action.col] != 0:
            raise InvalidAction('Cell is part of the puzzle')
        if board[action.row][action.col] != 0:
            raise InvalidAction('Cell is already filled')

        correct = solution[action.row][action.col] == action.value
        if correct:
            board[action.row][action.col] = action.value
            progress['emptyCells'] -= 1
            progress['solved'] = progress['emptyCells'] == 0
        else:
            progress['mistakes'] += 1
        out_of_mistakes = progress['mistakes'] >= session.config['maxMistakes']
        return Outcome(
            Result.CORRECT if correct else Result.INCORRECT,
            terminal=progress['solved'] or out_of_mistakes,
            details={
                'correct': correct,
                'mistakes': progress['mistakes'],
                'mistakesLeft': max(0, session.config['maxMistakes'] - progress['mistakes']),
                'emptyCells': progress['emptyCells'],
                'solved': progress['solved'],
            },
        )

    def metrics(self, session, elapsed):
        progress = session.progress
        return {
            'solved': progress['solved'],
            'hints_used': progress['hintsUsed'],
            'mistakes': progress['mistakes'],
            'elapsed': elapsed,
        }

    def score(self, metrics, config):
        return score_sudoku(metrics, config)
