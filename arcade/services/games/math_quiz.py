from __future__ import annotations

from typing import Literal, Union

from pydantic import Field, field_validator

from .base import Game, GameAction, GameConfig
from .errors import InvalidAction
from .scoring import MATH_MULTIPLIERS, score_math
from .session import Outcome, Result

Operation = Literal['+', '-', '*', '/']

OPTION_SPREAD = {'Easy': 10, 'Medium': 20, 'Hard': 30, 'Expert': 30}
WORDS = {'+': 'plus', '-': 'minus', '*': 'times', '/': 'divided by'}


class MathConfig(GameConfig):
    difficulty: Literal['Easy', 'Medium', 'Hard', 'Expert'] = 'Easy'
    question_count: int = Field(default=10, ge=1, le=50)
    operations: list[Operation] = Field(default_factory=lambda: ['+', '-', '*'], min_length=1)

    @field_validator('operations')
    @classmethod
    def dedupe(cls, ops):
        return list(dict.fromkeys(ops))


class MathAnswer(GameAction):
    type: Literal['answer'] = 'answer'
    question_id: int
    answer: Union[int, str]


def make_question(qid, op, difficulty, rng):
    m = MATH_MULTIPLIERS[difficulty]
    if op == '+':
        a, b = rng.randint(1, 50 * m), rng.randint(1, 50 * m)
        ans = a + b
    elif op == '-':
        a = rng.randint(10, 50 * m + 9)
        b = rng.randint(1, a)
        ans = a - b
    elif op == '*':
        a, b = rng.randint(1, 10 * m), rng.randint(1, 10 * m)
        ans = a * b
    else:
        b, ans = rng.randint(1, 10 * m), rng.randint(1, 10 * m)
        a = b * ans

    spread = OPTION_SPREAD[difficulty]
    options = {ans}
    while len(options) < 4:
        wrong = ans + rng.randrange(spread) - spread // 2
        if wrong != ans and wrong >= 0:
            options.add(wrong)
    options = sorted(options)
    rng.shuffle(options)

    return {
        'id': qid,
        'q': f'{a} {op} {b} = ?',
        'operation': op,
        'options': [str(o) for o in options],
        'ans': str(ans),
        'explanation': f'{a} {WORDS[op]} {b} equals {ans}',
    }


class MathQuizGame(Game):
    """Generated arithmetic quiz, answered strictly in order."""
    name = 'math'
    title = 'Math Quiz'
    config_model = MathConfig
    action_models = (MathAnswer,)
    default_action = 'answer'
    secret_fields = frozenset({'ans', 'explanation'})

    def generate(self, config, rng):
        questions = [
            make_question(i + 1, rng.choice(config['operations']), config['difficulty'], rng)
            for i in range(config['questionCount'])
        ]
        progress = {'currentQuestion': 0, 'correctAnswers': 0, 'answers': []}
        return {'questions': questions}, progress

    def apply(self, session, action, elapsed):
        progress = session.progress
        questions = session.content['questions']
        question = questions[progress['currentQuestion']]
        if action.question_id != question['id']:
            raise InvalidAction(f"Expected an answer for question {question['id']}")

        given = str(action.answer).strip()
        correct = given == question['ans']
        progress['answers'].append({'questionId': question['id'], 'answer': given, 'correct': correct})
        progress['currentQuestion'] += 1
        if correct:
            progress['correctAnswers'] += 1
        session.score = progress['correctAnswers']

        done = progress['currentQuestion'] >= len(questions)
        return Outcome(
            Result.CORRECT if correct else Result.INCORRECT,
            terminal=done,
            details={
                'correct': correct,
                'correctAnswer': question['ans'],
                'explanation': question['explanation'],
                'questionNumber': progress['currentQuestion'],
                'correctAnswers': progress['correctAnswers'],
                'nextQuestionId': None if done else questions[progress['currentQuestion']]['id'],
            },
        )

    def metrics(self, session, elapsed):
        return {
            'total_questions': len(session.content['questions']),
            'correct_answers': session.progress['correctAnswers'],
            'elapsed': elapsed,
        }

    def score(self, metrics, config):
        return score_math(metrics, config)
