from __future__ import annotations

import math
from typing import Literal, Optional

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .errors import InvalidAction
from .scoring import score_speed_math, speed_math_answer_points, speed_math_base_points
from .session import Outcome, Result

# operations, seconds per problem, default problem count, operand ceiling
LEVELS = {
    'easy': (['+', '-'], 30, 10, 20),
    'medium': (['+', '-', '*'], 25, 15, 50),
    'hard': (['+', '-', '*', '/'], 20, 20, 100),
    'expert': (['+', '-', '*', '/', '^', 'sqrt'], 15, 25, 100),
}


class SpeedMathConfig(GameConfig):
    difficulty: Literal['easy', 'medium', 'hard', 'expert'] = 'easy'
    question_count: Optional[int] = Field(default=None, ge=1, le=50)


class SpeedAnswer(GameAction):
    type: Literal['answer'] = 'answer'
    problem_id: int
    answer: float
    time_taken: float = Field(ge=0)


def make_problem(op, ceiling, rng):
    if op == '+':
        a, b = rng.randint(1, ceiling), rng.randint(1, ceiling)
        return f'{a} + {b}', a + b
    if op == '-':
        a = rng.randint(2, ceiling)
        b = rng.randint(1, a)
        return f'{a} - {b}', a - b
    if op == '*':
        a, b = rng.randint(2, 12), rng.randint(2, 12)
        return f'{a} × {b}', a * b
    if op == '/':
        b, ans = rng.randint(2, 12), rng.randint(1, 12)
        return f'{b * ans} ÷ {b}', ans
    if op == '^':
        a, b = rng.randint(2, 10), rng.randint(2, 3)
        return f'{a}^{b}', a ** b
    root = rng.randint(2, 20)
    return f'√{root * root}', root


class SpeedMathGame(Game):
    """Timed arithmetic drill; problems are answered strictly in order."""
    name = 'speed-math'
    title = 'Speed Math'
    config_model = SpeedMathConfig
    action_models = (SpeedAnswer,)
    default_action = 'answer'
    secret_fields = frozenset({'answer'})

    def finish_config(self, config):
        if config['questionCount'] is None:
            config['questionCount'] = LEVELS[config['difficulty']][2]
        return config

    def generate(self, config, rng):
        operations, per_problem, _, ceiling = LEVELS[config['difficulty']]
        problems = []
        for i in range(config['questionCount']):
            op = rng.choice(operations)
            question, answer = make_problem(op, ceiling, rng)
            problems.append({
                'id': i + 1,
                'question': question,
                'operation': op,
                'points': speed_math_base_points(config['difficulty'], op),
                'answer': answer,
            })
        progress = {
            'currentProblem': 0,
            'correct': 0,
            'streak': 0,
            'bestStreak': 0,
            'points': 0,
            'answers': [],
        }
        return {'problems': problems, 'timePerProblem': per_problem}, progress

    def apply(self, session, action, elapsed):
        progress = session.progress
        problems = session.content['problems']
        limit = session.content['timePerProblem']
        problem = problems[progress['currentProblem']]
        if action.problem_id != problem['id']:
            raise InvalidAction(f"Expected an answer for problem {problem['id']}")

        timed_out = action.time_taken > limit
        correct = not timed_out and math.isclose(action.answer, problem['answer'], abs_tol=1e-6)
        earned = 0
        if correct:
            progress['correct'] += 1
            progress['streak'] += 1
            progress['bestStreak'] = max(progress['bestStreak'], progress['streak'])
            earned = speed_math_answer_points(problem['points'], progress['streak'], action.time_taken, limit)
            progress['points'] += earned
        else:
            progress['streak'] = 0
        progress['answers'].append({
            'problemId': problem['id'],
            'given': action.answer,
            'correct': correct,
            'timeTaken': action.time_taken,
            'pointsEarned': earned,
        })
        progress['currentProblem'] += 1
        session.score = progress['points']

        done = progress['currentProblem'] >= len(problems)
        return Outcome(
            Result.CORRECT if correct else Result.INCORRECT,
            terminal=done,
            details={
                'correct': correct,
                'timedOut': timed_out,
                'correctAnswer': problem['answer'],
                'pointsEarned': earned,
                'streak': progress['streak'],
                'nextProblemId': None if done else problems[progress['currentProblem']]['id'],
            },
        )

    def metrics(self, session, elapsed):
        return {'points': session.progress['points']}

    def score(self, metrics, config):
        return score_speed_math(metrics, config)
