"""Memory: flip two cards per move and match every pair."""
from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .errors import InvalidAction
from .scoring import score_memory
from .session import Outcome, Result

THEMES = {
    'fruits': ['🍎', '🍌', '🍇', '🍊', '🍓', '🍑', '🥝', '🍍', '🍉', '🍒', '🥭', '🍐'],
    'animals': ['🐶', '🐱', '🐭', '🐹', '🐰', '🦊', '🐻', '🐼', '🐨', '🐯', '🦁', '🐮'],
    'emojis': ['😀', '😎', '🤩', '😍', '🥳', '😂', '🤔', '😴', '🤗', '😇', '🥰', '😋'],
    'numbers': ['1️⃣', '2️⃣', '3️⃣', '4️⃣', '5️⃣', '6️⃣', '7️⃣', '8️⃣', '9️⃣', '🔟', '0️⃣', '#️⃣'],
    'letters': ['🅰️', '🅱️', '🆎', '🅾️', '🆑', '🆒', '🆓', '🆕', '🆗', '🆙', '🆚', '🈁'],
}

PAIRS = {'Easy': 6, 'Medium': 8, 'Hard': 10, 'Expert': 12}


class MemoryConfig(GameConfig):
    difficulty: Literal['Easy', 'Medium', 'Hard', 'Expert'] = 'Easy'
    theme: Literal['fruits', 'animals', 'emojis', 'numbers', 'letters'] = 'fruits'


class Flip(GameAction):
    type: Literal['flip'] = 'flip'
    card_ids: list[int] = Field(min_length=2, max_length=2)


class MemoryGame(Game):
    name = 'memory'
    title = 'Memory Match'
    config_model = MemoryConfig
    action_models = (Flip,)
    default_action = 'flip'
    secret_fields = frozenset({'value', 'pairId'})

    def generate(self, config, rng):
        pairs = PAIRS[config['difficulty']]
        values = rng.sample(THEMES[config['theme']], pairs)
        deck = [(pair_id, value) for pair_id, value in enumerate(values) for _ in range(2)]
        rng.shuffle(deck)
        # ids follow board position so they say nothing about pairs
        cards = [
            {'id': position, 'value': value, 'pairId': pair_id, 'matched': False}
            for position, (pair_id, value) in enumerate(deck)
        ]
        content = {'cards': cards, 'totalPairs': pairs}
        progress = {'moves': 0, 'matches': 0}
        return content, progress

    def apply(self, session, action, elapsed):
        first_id, second_id = action.card_ids
        if first_id == second_id:
            raise InvalidAction('Cannot flip the same card twice')
        cards = {card['id']: card for card in session.content['cards']}
        if first_id not in cards or second_id not in cards:
            raise InvalidAction('Invalid card IDs')
        first, second = cards[first_id], cards[second_id]
        if first['matched'] or second['matched']:
            raise InvalidAction('Cannot flip already matched cards')

        progress = session.progress
        progress['moves'] += 1
        match = first['pairId'] == second['pairId']
        if match:
            first['matched'] = second['matched'] = True
            progress['matches'] += 1

        return Outcome(
            Result.CORRECT if match else Result.INCORRECT,
            terminal=progress['matches'] == session.content['totalPairs'],
            details={
                'match': match,
                'cards': [{'id': c['id'], 'value': c['value'], 'matched': c['matched']} for c in (first, second)],
                'moves': progress['moves'],
                'matches': progress['matches'],
            },
        )

    def metrics(self, session, elapsed):
        return {
            'total_pairs': session.content['totalPairs'],
            'matches': session.progress['matches'],
            'moves': session.progress['moves'],
            'elapsed': elapsed,
        }

    def score(self, metrics, config):
        return score_memory(metrics, config)

    def is_revealed(self, node):
        return node.get('matched') is True and 'pairId' in node
