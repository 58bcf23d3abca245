from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .scoring import TOWER_MAX_LEVEL, score_tower_stacker
from .session import Outcome, Result

CONTAINER_WIDTH = 400
INITIAL_WIDTH = 150
MIN_CONTINUE_WIDTH = 10

# base speed, speed increment, max speed, perfect threshold
LEVELS = {
    'beginner': (1.5, 0.1, 8, 0.9),
    'intermediate': (2.0, 0.2, 8, 0.95),
    'advanced': (2.5, 0.25, 8, 0.95),
    'expert': (3.0, 0.3, 10, 0.98),
    'master': (3.5, 0.35, 12, 0.99),
}


class TowerConfig(GameConfig):
    difficulty: Literal['beginner', 'intermediate', 'advanced', 'expert', 'master'] = 'beginner'


class Drop(GameAction):
    type: Literal['drop'] = 'drop'
    position: float = Field(ge=-CONTAINER_WIDTH / 2, le=CONTAINER_WIDTH / 2)
    reaction_time: Optional[float] = Field(default=None, ge=0)


def block_speed(difficulty: str, level: int) -> float:
    base, increment, top, _ = LEVELS[difficulty]
    return round(min(top, base + (level - 1) * increment), 2)


def overlap(position: float, width: float, below: dict) -> tuple[float, float]:
    """Width and centre of the part of a dropped block that rests on ``below``."""
    left = max(position - width / 2, below['position'] - below['width'] / 2)
    right = min(position + width / 2, below['position'] + below['width'] / 2)
    return max(0.0, right - left), (left + right) / 2


def launch(difficulty: str, level: int, width: float, lane: dict) -> dict:
    travel = CONTAINER_WIDTH / 2 - width / 2
    return {
        'width': width,
        'speed': block_speed(difficulty, level),
        'direction': lane['direction'],
        'startPosition': round(lane['offset'] * travel, 1),
    }


class TowerStackerGame(Game):
    """Stack sliding blocks; whatever hangs over the block below is cut off.

    Only the drop position matters to the server, so nothing is secret:
    each block's speed, direction and start are drawn up front and shown.
    """
    name = 'tower-stacker'
    title = 'Tower Stacker'
    config_model = TowerConfig
    action_models = (Drop,)
    default_action = 'drop'

    def generate(self, config, rng):
        lanes = [
            {'direction': rng.choice(['left', 'right']), 'offset': round(rng.uniform(-1, 1), 3)}
            for _ in range(TOWER_MAX_LEVEL)
        ]
        base = {'level': 0, 'position': 0.0, 'width': INITIAL_WIDTH, 'accuracy': 1.0, 'perfect': True}
        progress = {
            'level': 1,
            'tower': [base],
            'currentBlock': launch(config['difficulty'], 1, INITIAL_WIDTH, lanes[0]),
            'perfectDrops': 0,
            'accuracies': [],
            'success': False,
        }
        content = {'maxLevel': TOWER_MAX_LEVEL, 'containerWidth': CONTAINER_WIDTH, 'lanes': lanes}
        return content, progress

    def apply(self, session, action, elapsed):
        progress = session.progress
        difficulty = session.config['difficulty']
        below = progress['tower'][-1]
        width = progress['currentBlock']['width']
        covered, centre = overlap(action.position, width, below)
        accuracy = round(covered / min(width, below['width']), 4)
        perfect = accuracy >= LEVELS[difficulty][3]
        progress['accuracies'].append(accuracy)

        if covered < MIN_CONTINUE_WIDTH:
            progress['currentBlock'] = None
            return Outcome(Result.INCORRECT, terminal=True, details={
                'accuracy': accuracy,
                'perfect': False,
                'canContinue': False,
                'level': progress['level'],
            })

        if perfect:
            progress['perfectDrops'] += 1
            # Snapped onto the block below at full width.
            covered, centre = min(width, below['width']), below['position']
        placed = {
            'level': progress['level'],
            'position': round(centre, 2),
            'width': round(covered, 2),
            'accuracy': accuracy,
            'perfect': perfect,
        }
        progress['tower'].append(placed)
        done = progress['level'] >= TOWER_MAX_LEVEL
        if done:
            progress['success'] = True
            progress['currentBlock'] = None
        else:
            progress['level'] += 1
            lane = session.content['lanes'][progress['level'] - 1]
            progress['currentBlock'] = launch(difficulty, progress['level'], placed['width'], lane)

        return Outcome(Result.CORRECT, terminal=done, details={
            'accuracy': accuracy,
            'perfect': perfect,
            'canContinue': not done,
            'width': placed['width'],
            'level': progress['level'],
        })

    def metrics(self, session, elapsed):
        progress = session.progress
        accuracies = progress['accuracies']
        return {
            'level': len(progress['tower']) - 1,
            'perfect_drops': progress['perfectDrops'],
            'average_accuracy': sum(accuracies) / len(accuracies) if accuracies else 0.0,
            'elapsed': elapsed,
        }

    def score(self, metrics, config):
        return score_tower_stacker(metrics, config)
