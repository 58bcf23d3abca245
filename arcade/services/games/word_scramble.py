"""Word Scramble: unscramble a list of words one at a time."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .errors import InvalidAction
from .scoring import score_word_scramble, scramble_guess_points, word_points
from .session import Outcome, Result

MIN_WORD_LENGTH = 3
MAX_HINTS = 3

WORD_BANK = {
    'easy': {
        'programming': ['HTML', 'CODE', 'BYTE', 'DATA', 'FILE', 'LOOP', 'JAVA', 'NODE'],
        'science': ['ATOM', 'GENE', 'CELL', 'WAVE', 'STAR', 'MOON', 'ROCK', 'ACID'],
        'animals': ['CAT', 'DOG', 'BIRD', 'FISH', 'BEAR', 'LION', 'DUCK', 'FROG'],
        'countries': ['USA', 'JAPAN', 'INDIA', 'CHINA', 'SPAIN', 'ITALY', 'PERU'],
        'technology': ['WIFI', 'CHIP', 'DISK', 'MOUSE', 'SCREEN', 'CABLE', 'PHONE'],
        'general': ['HOUSE', 'WATER', 'LIGHT', 'MUSIC', 'HAPPY', 'QUICK', 'QUIET'],
    },
    'medium': {
        'programming': ['REACT', 'PYTHON', 'ANGULAR', 'DOCKER', 'GITHUB', 'SYNTAX', 'OBJECT'],
        'science': ['PHOTON', 'ENZYME', 'OXYGEN', 'CARBON', 'PLASMA', 'GRAVITY', 'ENERGY'],
        'animals': ['ELEPHANT', 'PENGUIN', 'DOLPHIN', 'GIRAFFE', 'CHEETAH', 'OCTOPUS'],
        'countries': ['FRANCE', 'GERMANY', 'AUSTRALIA', 'CANADA', 'BRAZIL', 'MEXICO'],
        'technology': ['ROUTER', 'SERVER', 'LAPTOP', 'TABLET', 'MOBILE', 'DEVICE'],
        'general': ['PUZZLE', 'GARDEN', 'BRIDGE', 'CASTLE', 'FOREST', 'ORANGE'],
    },
    'hard': {
        'programming': ['JAVASCRIPT', 'ALGORITHM', 'DATABASE', 'FRAMEWORK', 'TYPESCRIPT', 'DEBUGGING'],
        'science': ['CHROMOSOME', 'MOLECULE', 'QUANTUM', 'RELATIVITY', 'PERIODIC', 'NUCLEAR'],
        'animals': ['RHINOCEROS', 'CHAMELEON', 'PLATYPUS', 'FLAMINGO', 'KANGAROO', 'MONGOOSE'],
        'countries': ['SWITZERLAND', 'NETHERLANDS', 'ARGENTINA', 'BANGLADESH', 'UZBEKISTAN'],
        'technology': ['BLOCKCHAIN', 'ARTIFICIAL', 'CYBERSECURITY', 'QUANTUM', 'BIOMETRIC'],
        'general': ['PSYCHOLOGY', 'PHILOSOPHY', 'ARCHITECTURE', 'LITERATURE', 'MATHEMATICS'],
    },
    'expert': {
        'programming': ['ASYNCHRONOUS', 'POLYMORPHISM', 'ENCAPSULATION', 'INHERITANCE', 'ABSTRACTION'],
        'science': ['THERMODYNAMICS', 'ELECTROMAGNETIC', 'CRYSTALLOGRAPHY', 'BIOCHEMISTRY'],
        'animals': ['ARCHAEOPTERYX', 'TYRANNOSAURUS', 'BRACHIOSAURUS', 'PARASAUROLOPHUS'],
        'countries': ['CZECHOSLOVAKIA', 'LIECHTENSTEIN', 'KAZAKHSTAN', 'TURKMENISTAN'],
        'technology': ['NANOTECHNOLOGY', 'BIOTECHNOLOGY', 'CRYPTOCURRENCY', 'VIRTUALIZATION'],
        'general': ['CONSCIOUSNESS', 'EXISTENTIALISM', 'TRANSCENDENTAL', 'METAMORPHOSIS'],
    },
}

CATEGORY_HINTS = {
    'programming': 'Related to software development',
    'science': 'A scientific term',
    'animals': 'A member of the animal kingdom',
    'countries': 'A country, past or present',
    'technology': 'Related to computers and devices',
    'general': 'An everyday word',
}

MODE_WORDS = {'classic': 10, 'timed': 15, 'blitz': 8, 'zen': 12}
MODE_TIME_LIMITS = {'timed': 300, 'blitz': 120}
TIME_FACTORS = {'easy': 1.2, 'medium': 1.0, 'hard': 0.8, 'expert': 0.6}


class ScrambleConfig(GameConfig):
    difficulty: Literal['easy', 'medium', 'hard', 'expert'] = 'easy'
    category: Literal['programming', 'science', 'animals', 'countries', 'technology', 'general', 'mixed'] = 'mixed'
    mode: Literal['classic', 'timed', 'blitz', 'zen'] = 'classic'


class Guess(GameAction):
    type: Literal['guess'] = 'guess'
    guess: str = Field(min_length=1, max_length=40)
    reaction_time: Optional[float] = Field(default=None, ge=0)


class Hint(GameAction):
    type: Literal['hint'] = 'hint'


class Skip(GameAction):
    type: Literal['skip'] = 'skip'


def scramble(word, rng):
    letters = list(word)
    for _ in range(10):
        rng.shuffle(letters)
        if ''.join(letters) != word:
            break
    return ''.join(letters)


class WordScrambleGame(Game):
    name = 'word-scramble'
    title = 'Word Scramble'
    config_model = ScrambleConfig
    action_models = (Guess, Hint, Skip)
    default_action = 'guess'
    secret_fields = frozenset({'original', 'hints'})

    def finish_config(self, config):
        if config['timeLimit'] is None and config['mode'] in MODE_TIME_LIMITS:
            config['timeLimit'] = round(MODE_TIME_LIMITS[config['mode']] * TIME_FACTORS[config['difficulty']])
        return config

    def generate(self, config, rng):
        bank = WORD_BANK[config['difficulty']]
        categories = list(bank) if config['category'] == 'mixed' else [config['category']]
        seen = {}
        for category in categories:
            for word in bank[category]:
                if len(word) >= MIN_WORD_LENGTH:
                    seen.setdefault(word, category)
        pool = [(category, word) for word, category in seen.items()]
        picked = rng.sample(pool, min(MODE_WORDS[config['mode']], len(pool)))
        words = [
            {
                'id': i + 1,
                'scrambled': scramble(word, rng),
                'length': len(word),
                'category': category,
                'points': word_points(word, config['difficulty']),
                'original': word,
                'hints': [CATEGORY_HINTS[category], f'Starts with {word[0]}', f'Ends with {word[-1]}'],
            }
            for i, (category, word) in enumerate(picked)
        ]
        progress = {
            'currentWord': 0,
            'wordsSolved': 0,
            'wrongGuesses': 0,
            'skipped': 0,
            'streak': 0,
            'bestStreak': 0,
            'hintsUsed': 0,
            'revealedHints': [],
            'points': 0,
        }
        return {'words': words}, progress

    def apply(self, session, action, elapsed):
        progress = session.progress
        words = session.content['words']
        word = words[progress['currentWord']]

        if action.type == 'hint':
            if len(progress['revealedHints']) >= MAX_HINTS:
                raise InvalidAction('No hints left for this word')
            text = word['hints'][len(progress['revealedHints'])]
            progress['revealedHints'].append(text)
            progress['hintsUsed'] += 1
            return Outcome(Result.NO_EFFECT, details={
                'hint': text,
                'hintsLeft': MAX_HINTS - len(progress['revealedHints']),
            })

        if action.type == 'skip':
            progress['skipped'] += 1
            progress['streak'] = 0
            done = self._advance(progress, words)
            return Outcome(Result.NO_EFFECT, terminal=done, details={
                'skippedWord': word['original'],
                'wordsRemaining': len(words) - progress['currentWord'],
            })

        if action.guess.strip().upper() != word['original']:
            progress['wrongGuesses'] += 1
            progress['streak'] = 0
            return Outcome(Result.INCORRECT, details={
                'correct': False,
                'pointsEarned': 0,
                'streak': 0,
                'wordsRemaining': len(words) - progress['currentWord'],
            })

        progress['streak'] += 1
        progress['bestStreak'] = max(progress['bestStreak'], progress['streak'])
        earned = scramble_guess_points(word['points'], progress['streak'], action.reaction_time,
                                       len(progress['revealedHints']))
        progress['points'] += earned
        progress['wordsSolved'] += 1
        session.score = progress['points']
        done = self._advance(progress, words)
        return Outcome(Result.CORRECT, terminal=done, details={
            'correct': True,
            'word': word['original'],
            'pointsEarned': earned,
            'streak': progress['streak'],
            'wordsRemaining': len(words) - progress['currentWord'],
        })

    @staticmethod
    def _advance(progress, words):
        progress['currentWord'] += 1
        progress['revealedHints'] = []
        return progress['currentWord'] >= len(words)

    def metrics(self, session, elapsed):
        progress = session.progress
        return {
            'points': progress['points'],
            'total_words': len(session.content['words']),
            'words_solved': progress['wordsSolved'],
            'wrong_guesses': progress['wrongGuesses'],
            'hints_used': progress['hintsUsed'],
        }

    def score(self, metrics, config):
        return score_word_scramble(metrics, config)
