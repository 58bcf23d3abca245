"""Emoji Guess: name the phrase a row of emoji stands for.

One puzzle per session. Guesses are compared after normalizing case,
punctuation and whitespace; a guess within 90% edit similarity counts.
"""
from __future__ import annotations

import re
from typing import Literal, Optional

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .errors import InvalidAction
from .scoring import score_emoji
from .session import Outcome, Result

MAX_HINTS = 3
CLOSE_ENOUGH = 0.9
ON_TRACK = 0.6

Difficulty = Literal['Easy', 'Medium', 'Hard']
Category = Literal['Adventure', 'Animals', 'Art', 'Beverage', 'Celebration', 'Education', 'Emotions',
                   'Entertainment', 'Fantasy', 'Food', 'Lifestyle', 'Music', 'Nature', 'Productivity',
                   'Space', 'Sports', 'Technology', 'Travel', 'Weather', 'Work']


def _p(id, emojis, answer, category, difficulty):
    return {'id': id, 'emojis': emojis, 'answer': answer, 'category': category, 'difficulty': difficulty}


PUZZLES = [
    _p(1, '👑🐉', 'dragon king', 'Fantasy', 'Medium'),
    _p(2, '🚀🌕', 'moon rocket', 'Space', 'Easy'),
    _p(3, '🌞🏖️🌊', 'beach day', 'Nature', 'Easy'),
    _p(4, '🌧️🌈🌟', 'rainbow after rain', 'Weather', 'Medium'),
    _p(5, '🌲🏔️❄️', 'mountain winter', 'Nature', 'Easy'),
    _p(6, '🍕🔥❤️', 'hot pizza love', 'Food', 'Medium'),
    _p(7, '☕📖🛋️', 'cozy reading time', 'Lifestyle', 'Medium'),
    _p(8, '🍎🍌🍊', 'fruit basket', 'Food', 'Easy'),
    _p(9, '🥤🧊🍋', 'lemonade ice', 'Beverage', 'Easy'),
    _p(10, '🍔🍟🥤', 'fast food meal', 'Food', 'Easy'),
    _p(11, '💻☕📱', 'work from home', 'Work', 'Medium'),
    _p(12, '⌚⏰⌛', 'time management', 'Productivity', 'Medium'),
    _p(13, '🎵🎧📱', 'music streaming', 'Entertainment', 'Easy'),
    _p(14, '📧💼🕒', 'business email', 'Work', 'Easy'),
    _p(15, '🔋📱💡', 'phone charging', 'Technology', 'Easy'),
    _p(16, '😊🌞🌈', 'happy sunshine', 'Emotions', 'Easy'),
    _p(17, '😴🛏️🌙', 'sleepy bedtime', 'Lifestyle', 'Easy'),
    _p(18, '🎂🎉🎈', 'birthday party', 'Celebration', 'Easy'),
    _p(19, '💔😢🌧️', 'broken heart rain', 'Emotions', 'Medium'),
    _p(20, '😎🌴🏄', 'cool surfer', 'Lifestyle', 'Easy'),
    _p(21, '⚽🏆🎉', 'soccer championship', 'Sports', 'Medium'),
    _p(22, '🏃‍♂️💨🌟', 'fast runner', 'Sports', 'Easy'),
    _p(23, '🎸🎵🎤', 'rock concert', 'Music', 'Easy'),
    _p(24, '🎨🖌️🖼️', 'art painting', 'Art', 'Easy'),
    _p(25, '📚✏️🎓', 'student studying', 'Education', 'Easy'),
    _p(26, '✈️🌍🗺️', 'world travel', 'Travel', 'Easy'),
    _p(27, '🏝️🌴🍹', 'tropical vacation', 'Travel', 'Medium'),
    _p(28, '⛰️🥾🧭', 'mountain hiking', 'Adventure', 'Easy'),
    _p(29, '🚗🛣️🌅', 'road trip sunset', 'Travel', 'Medium'),
    _p(30, '🏰👑🛡️', 'castle kingdom', 'Fantasy', 'Easy'),
    _p(31, '🐶❤️🐱', 'pet love', 'Animals', 'Easy'),
    _p(32, '🦁🌳👑', 'lion king', 'Animals', 'Easy'),
    _p(33, '🐠🌊🐟', 'swimming fish', 'Animals', 'Easy'),
    _p(34, '🦋🌸🌼', 'butterfly garden', 'Nature', 'Easy'),
    _p(35, '🐘🦁🦒', 'safari animals', 'Animals', 'Medium'),
    _p(36, '🔥🐉⚔️', 'dragon fire sword', 'Fantasy', 'Hard'),
    _p(37, '🌟🎭🎪', 'circus performance', 'Entertainment', 'Medium'),
    _p(38, '🎨🌈🖌️', 'colorful painting', 'Art', 'Easy'),
    _p(39, '☕📖🕯️', 'cozy reading night', 'Lifestyle', 'Medium'),
    _p(40, '🎵🎹🎤', 'piano singing', 'Music', 'Easy'),
]


def normalize(text: str) -> str:
    text = re.sub(r'[^\w\s]', '', text.lower().strip())
    return re.sub(r'\s+', ' ', text)


def levenshtein(a: str, b: str) -> int:
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(min(
                previous[j - 1] + (ca != cb),
                previous[j] + 1,
                current[j - 1] + 1,
            ))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    longer = max(len(a), len(b))
    if not longer:
        return 1.0
    return (longer - levenshtein(a, b)) / longer


def reveal_hint(answer: str, hints_used: int) -> str:
    """First ``hints_used`` words shown, the rest as underscores; never the whole phrase."""
    words = answer.split(' ')
    shown = min(hints_used, max(1, len(words) - 1))
    return ' '.join(w if i < shown else '_' * len(w) for i, w in enumerate(words))


class EmojiConfig(GameConfig):
    difficulty: Optional[Difficulty] = None
    category: Optional[Category] = None


class Guess(GameAction):
    type: Literal['guess'] = 'guess'
    guess: str = Field(min_length=1, max_length=200)


class EmojiHint(GameAction):
    type: Literal['hint'] = 'hint'


class EmojiGame(Game):
    name = 'emoji'
    title = 'Emoji Guess'
    config_model = EmojiConfig
    action_models = (Guess, EmojiHint)
    default_action = 'guess'
    secret_fields = frozenset({'answer'})

    def generate(self, config, rng):
        pool = [
            p for p in PUZZLES
            if (config['difficulty'] is None or p['difficulty'] == config['difficulty'])
            and (config['category'] is None or p['category'] == config['category'])
        ]
        # An empty filter falls back to the whole bank.
        puzzle = dict(rng.choice(pool or PUZZLES))
        puzzle['wordCount'] = len(puzzle['answer'].split())
        progress = {'attempts': [], 'hintsUsed': 0, 'hint': None, 'solved': False}
        return {'puzzle': puzzle}, progress

    def apply(self, session, action, elapsed):
        if action.type == 'hint':
            return self._hint(session)

        progress = session.progress
        answer = normalize(session.content['puzzle']['answer'])
        guess = normalize(action.guess)
        score = similarity(guess, answer)
        correct = guess == answer or score >= CLOSE_ENOUGH
        if guess == answer:
            feedback = 'Perfect! You got it right!'
        elif correct:
            feedback = 'Almost perfect! Close enough!'
        else:
            words = answer.split()
            matched = sum(1 for w in guess.split() if w in words)
            if matched / len(words) >= ON_TRACK:
                feedback = "You're on the right track! Try again."
            else:
                feedback = 'Not quite. Keep trying!'

        progress['attempts'].append({'guess': action.guess, 'correct': correct, 'similarity': round(score, 2)})
        details = {
            'correct': correct,
            'feedback': feedback,
            'similarity': round(score, 2),
            'attempts': len(progress['attempts']),
        }
        if correct:
            progress['solved'] = True
            details['answer'] = session.content['puzzle']['answer']
        return Outcome(Result.CORRECT if correct else Result.INCORRECT, terminal=correct, details=details)

    def _hint(self, session):
        progress = session.progress
        if progress['hintsUsed'] >= MAX_HINTS:
            raise InvalidAction('No hints left for this puzzle')
        progress['hintsUsed'] += 1
        progress['hint'] = reveal_hint(session.content['puzzle']['answer'], progress['hintsUsed'])
        return Outcome(Result.NO_EFFECT, details={
            'hint': progress['hint'],
            'hintsUsed': progress['hintsUsed'],
            'hintsLeft': MAX_HINTS - progress['hintsUsed'],
        })

    def metrics(self, session, elapsed):
        return {
            'solved': session.progress['solved'],
            'attempts': len(session.progress['attempts']),
            'hints_used': session.progress['hintsUsed'],
            'difficulty': session.content['puzzle']['difficulty'],
            'elapsed': elapsed,
        }

    def score(self, metrics, config):
        return score_emoji(metrics, config)
