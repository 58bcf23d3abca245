from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .errors import InvalidAction
from .scoring import score_typing, typing_accuracy, typing_wpm
from .session import Outcome, Result

DEFAULT_TIME_LIMIT = 120
# Room for over-typing past the end of the passage.
MAX_OVERTYPE = 50

Difficulty = Literal['beginner', 'intermediate', 'advanced', 'expert', 'master']
Category = Literal['random', 'technology', 'programming', 'literature', 'science', 'quotes', 'business']


def _t(text, difficulty, category):
    return {'text': text, 'difficulty': difficulty, 'category': category}


PASSAGES = [
    _t("Fast typing tests make you accurate and quick. Practice makes perfect when you focus on "
       "proper technique and rhythm.", 'beginner', 'random'),
    _t("The quick brown fox jumps over the lazy dog. This pangram contains every letter of the "
       "alphabet and is perfect for practicing all keys on your keyboard.", 'intermediate', 'random'),
    _t("In the realm of technology, artificial intelligence continues to revolutionize industries and "
       "transform the way we interact with digital systems and automated processes.", 'advanced', 'technology'),
    _t("function calculateSum(array) { return array.reduce((acc, num) => acc + num, 0); }",
       'expert', 'programming'),
    _t("To be or not to be, that is the question: Whether 'tis nobler in the mind to suffer the slings "
       "and arrows of outrageous fortune, or to take arms against a sea of troubles.", 'advanced', 'literature'),
    _t("The mitochondria is the powerhouse of the cell, responsible for producing ATP through cellular "
       "respiration in eukaryotic organisms.", 'expert', 'science'),
    _t("Success is not final, failure is not fatal: it is the courage to continue that counts.",
       'intermediate', 'quotes'),
    _t("In today's global economy, businesses must adapt to rapidly changing market conditions and "
       "embrace digital transformation to remain competitive in their respective industries.",
       'advanced', 'business'),
    _t("The quick brown fox jumps over the lazy dog. This pangram contains every letter of the "
       "alphabet at least once.", 'beginner', 'random'),
    _t("Programming is not about what you know; it's about what you can figure out. The best code is "
       "written when you understand the problem deeply.", 'intermediate', 'programming'),
    _t("TypeScript is a strongly typed programming language that builds on JavaScript, giving you "
       "better tooling at any scale.", 'intermediate', 'programming'),
    _t("React is a JavaScript library for building user interfaces. It lets you compose complex UIs "
       "from small and isolated pieces of code called components.", 'advanced', 'programming'),
    _t("The art of programming is the art of organizing complexity, of mastering multitude and "
       "avoiding its bastard chaos as effectively as possible.", 'master', 'quotes'),
    _t("In the world of software development, debugging is twice as hard as writing the code in the "
       "first place.", 'beginner', 'quotes'),
    _t("Good software, like wine, takes time to mature. The best programs are written not grown.",
       'beginner', 'quotes'),
    _t("Code is like humor. When you have to explain it, it's bad. Clean code always looks like it was "
       "written by someone who cares.", 'master', 'quotes'),
]


class TypingConfig(GameConfig):
    difficulty: Difficulty = 'beginner'
    category: Optional[Category] = None


class Update(GameAction):
    type: Literal['update'] = 'update'
    typed_text: str = Field(max_length=2000)


class Submit(GameAction):
    type: Literal['submit'] = 'submit'
    typed_text: str = Field(max_length=2000)


class TypingGame(Game):
    """Typing test: copy one passage as fast and as accurately as possible.

    The client reports its whole typed text on every update; the server
    recomputes speed and accuracy from it. Matching the passage exactly
    finishes the round, as does an explicit submit.
    """
    name = 'typing'
    title = 'Typing Test'
    config_model = TypingConfig
    action_models = (Update, Submit)
    default_action = 'update'

    def finish_config(self, config):
        if config['timeLimit'] is None:
            config['timeLimit'] = DEFAULT_TIME_LIMIT
        return config

    def generate(self, config, rng):
        difficulty, category = config['difficulty'], config['category']
        pool = [p for p in PASSAGES if p['difficulty'] == difficulty
                and (category is None or p['category'] == category)]
        if not pool:
            pool = [p for p in PASSAGES if p['difficulty'] == difficulty]
        if not pool:
            pool = PASSAGES
        index = rng.randrange(len(pool))
        passage = dict(pool[index], id=PASSAGES.index(pool[index]) + 1)
        passage['wordCount'] = len(passage['text'].split())
        progress = {
            'typedText': '',
            'characters': 0,
            'correctCharacters': 0,
            'accuracy': 100,
            'wpm': 0,
            'finished': False,
        }
        return {'passage': passage}, progress

    def apply(self, session, action, elapsed):
        text = session.content['passage']['text']
        typed = action.typed_text
        if len(typed) > len(text) + MAX_OVERTYPE:
            raise InvalidAction('Typed text is longer than the passage')

        progress = session.progress
        progress['typedText'] = typed
        progress['characters'] = len(typed)
        progress['correctCharacters'] = sum(1 for i, ch in enumerate(typed) if i < len(text) and ch == text[i])
        progress['accuracy'] = typing_accuracy(typed, text)
        progress['wpm'] = typing_wpm(len(typed), elapsed)
        finished = typed.strip() == text.strip()
        progress['finished'] = finished

        details = {
            'wpm': progress['wpm'],
            'accuracy': progress['accuracy'],
            'progress': min(100, round(len(typed) / len(text) * 100)),
            'finished': finished,
        }
        if action.type == 'submit':
            return Outcome(Result.CORRECT if finished else Result.INCORRECT, terminal=True, details=details)
        return Outcome(Result.CORRECT if finished else Result.NO_EFFECT, terminal=finished, details=details)

    def metrics(self, session, elapsed):
        progress = session.progress
        return {
            'characters': progress['characters'],
            'accuracy': progress['accuracy'],
            'elapsed': elapsed,
            'finished': progress['finished'],
        }

    def score(self, metrics, config):
        return score_typing(metrics, config)
