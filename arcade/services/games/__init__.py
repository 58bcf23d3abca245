"""Game domain services: the session engine and the games it runs.

This package contains pure(ish) domain logic that is imported by HTTP
routes and socket handlers, keeping transport concerns separated from
core game mechanics.
"""
from .emoji import EmojiGame
from .engine import GameEngine
from .errors import (
    GameError,
    GameNotFound,
    InvalidAction,
    InvalidConfig,
    SessionAlreadyCompleted,
    SessionNotFound,
    StoreConflict,
    StoreError,
)
from .math_quiz import MathQuizGame
from .memory import MemoryGame
from .number_maze import NumberMazeGame
from .quiz import QuizGame
from .reaction_time import ReactionTimeGame
from .speed_math import SpeedMathGame
from .store import MemorySessionStore, SqlSessionStore
from .sudoku import SudokuGame
from .tower_stacker import TowerStackerGame
from .typing_speed import TypingGame
from .whack_a_mole import WhackAMoleGame
from .word_scramble import WordScrambleGame


def default_games():
    return [
        MemoryGame(),
        QuizGame(),
        MathQuizGame(),
        NumberMazeGame(),
        WordScrambleGame(),
        ReactionTimeGame(),
        SudokuGame(),
        SpeedMathGame(),
        EmojiGame(),
        WhackAMoleGame(),
        TowerStackerGame(),
        TypingGame(),
    ]
