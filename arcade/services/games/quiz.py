"""Trivia quiz drawn from a fixed question bank.

Questions may be answered in any order, each exactly once; answering a
question a second time is rejected.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from .base import Game, GameAction, GameConfig
from .errors import InvalidAction, InvalidConfig
from .scoring import score_quiz
from .session import Outcome, Result

Category = Literal['general', 'geography', 'science', 'arts', 'programming', 'mathematics',
                   'history', 'technology', 'literature', 'sports']
Difficulty = Literal['easy', 'medium', 'hard', 'expert']


def _q(id, q, options, ans, category, difficulty, points):
    return {'id': id, 'q': q, 'options': options, 'ans': ans,
            'category': category, 'difficulty': difficulty, 'points': points}


QUESTION_BANK = [
    _q(1, 'What is 2+2?', ['3', '4', '5', '6'], '4', 'general', 'easy', 10),
    _q(2, 'Capital of France?', ['London', 'Berlin', 'Paris', 'Madrid'], 'Paris', 'geography', 'easy', 10),
    _q(3, 'Color of sky?', ['Red', 'Blue', 'Green', 'Yellow'], 'Blue', 'general', 'easy', 10),
    _q(4, 'What is the largest planet in our solar system?', ['Mars', 'Jupiter', 'Saturn', 'Venus'],
       'Jupiter', 'science', 'medium', 15),
    _q(5, 'Who painted the Mona Lisa?',
       ['Vincent van Gogh', 'Pablo Picasso', 'Leonardo da Vinci', 'Michelangelo'],
       'Leonardo da Vinci', 'arts', 'medium', 15),
    _q(6, 'What is the chemical symbol for water?', ['H2O', 'CO2', 'O2', 'NaCl'], 'H2O', 'science', 'medium', 15),
    _q(7, 'Which programming language is known as the "mother of all languages"?',
       ['Python', 'C', 'Assembly', 'Java'], 'C', 'programming', 'medium', 15),
    _q(8, 'What is the square root of 144?', ['10', '12', '14', '16'], '12', 'mathematics', 'easy', 10),
    _q(9, 'Which ocean is the largest?', ['Atlantic', 'Indian', 'Arctic', 'Pacific'], 'Pacific', 'geography', 'easy', 10),
    _q(10, 'What year did World War II end?', ['1944', '1945', '1946', '1947'], '1945', 'history', 'medium', 15),
    _q(11, 'Which element has atomic number 1?', ['Helium', 'Hydrogen', 'Lithium', 'Beryllium'],
       'Hydrogen', 'science', 'medium', 15),
    _q(12, 'What is the capital of Japan?', ['Seoul', 'Beijing', 'Tokyo', 'Bangkok'], 'Tokyo', 'geography', 'easy', 10),
    _q(13, 'Which planet is known as the Red Planet?', ['Venus', 'Mars', 'Jupiter', 'Saturn'],
       'Mars', 'science', 'medium', 15),
    _q(14, 'What is the speed of light?', ['299,792 km/s', '150,000 km/s', '500,000 km/s', '100,000 km/s'],
       '299,792 km/s', 'science', 'hard', 20),
    _q(15, 'What gas do plants absorb from the atmosphere?', ['Oxygen', 'Nitrogen', 'Carbon Dioxide', 'Hydrogen'],
       'Carbon Dioxide', 'science', 'easy', 10),
    _q(16, 'What does CPU stand for?',
       ['Central Processing Unit', 'Computer Personal Unit', 'Central Program Utility', 'Computer Processing Utility'],
       'Central Processing Unit', 'technology', 'easy', 10),
    _q(17, 'Who founded Microsoft?', ['Steve Jobs', 'Bill Gates', 'Mark Zuckerberg', 'Larry Page'],
       'Bill Gates', 'technology', 'medium', 15),
    _q(18, 'What is the value of Pi (to 2 decimal places)?', ['3.12', '3.14', '3.16', '3.18'],
       '3.14', 'mathematics', 'easy', 10),
    _q(19, 'What is 15% of 200?', ['25', '30', '35', '40'], '30', 'mathematics', 'medium', 15),
    _q(20, 'What is the area of a circle with radius 5?', ['78.54', '50', '25', '31.42'], '78.54', 'mathematics', 'hard', 20),
    _q(21, "Who wrote 'Romeo and Juliet'?", ['Charles Dickens', 'William Shakespeare', 'Jane Austen', 'Mark Twain'],
       'William Shakespeare', 'literature', 'easy', 10),
    _q(22, 'What is the first book in the Harry Potter series?',
       ['Chamber of Secrets', "Philosopher's Stone", 'Prisoner of Azkaban', 'Goblet of Fire'],
       "Philosopher's Stone", 'literature', 'easy', 10),
    _q(23, 'How many players are on a soccer team?', ['9', '10', '11', '12'], '11', 'sports', 'easy', 10),
    _q(24, "In which sport is 'love' a score?", ['Basketball', 'Tennis', 'Golf', 'Cricket'], 'Tennis', 'sports', 'medium', 15),
    _q(25, 'Who was the first President of the United States?',
       ['Thomas Jefferson', 'George Washington', 'Abraham Lincoln', 'John Adams'],
       'George Washington', 'history', 'easy', 10),
    _q(26, 'In which year did the Berlin Wall fall?', ['1987', '1989', '1991', '1993'], '1989', 'history', 'medium', 15),
    _q(27, 'What does HTML stand for?',
       ['Hyper Text Markup Language', 'High Tech Modern Language', 'Home Tool Markup Language',
        'Hyperlinks and Text Markup Language'],
       'Hyper Text Markup Language', 'programming', 'easy', 10),
    _q(28, 'Which programming language is primarily used for iOS development?', ['Java', 'Swift', 'Python', 'C++'],
       'Swift', 'programming', 'medium', 15),
    _q(29, 'What is the time complexity of binary search?', ['O(n)', 'O(log n)', 'O(n²)', 'O(1)'],
       'O(log n)', 'programming', 'hard', 20),
    _q(30, 'What is the Planck constant approximately equal to?',
       ['6.626 × 10⁻³⁴ J·s', '3.14 × 10⁻³⁴ J·s', '9.81 × 10⁻³⁴ J·s', '1.60 × 10⁻³⁴ J·s'],
       '6.626 × 10⁻³⁴ J·s', 'science', 'expert', 25),
]


class QuizConfig(GameConfig):
    number_of_questions: int = Field(default=10, ge=1, le=len(QUESTION_BANK))
    category: Optional[Category] = None
    difficulty: Optional[Difficulty] = None


class Answer(GameAction):
    type: Literal['answer'] = 'answer'
    question_id: int
    selected_answer: str = Field(max_length=200)
    time_spent: float = Field(default=0, ge=0)


class QuizGame(Game):
    name = 'quiz'
    title = 'Trivia Quiz'
    config_model = QuizConfig
    action_models = (Answer,)
    default_action = 'answer'
    secret_fields = frozenset({'ans'})

    def generate(self, config, rng):
        pool = [
            q for q in QUESTION_BANK
            if (config['category'] is None or q['category'] == config['category'])
            and (config['difficulty'] is None or q['difficulty'] == config['difficulty'])
        ]
        if not pool:
            raise InvalidConfig('No questions match the requested category and difficulty')
        picked = rng.sample(pool, min(config['numberOfQuestions'], len(pool)))
        questions = [dict(q) for q in picked]
        progress = {
            'answers': [],
            'correctAnswers': 0,
            'currentScore': 0,
            'totalQuestions': len(questions),
        }
        return {'questions': questions}, progress

    def apply(self, session, action, elapsed):
        progress = session.progress
        questions = session.content['questions']
        question = next((q for q in questions if q['id'] == action.question_id), None)
        if question is None:
            raise InvalidAction(f'Question {action.question_id} is not part of this quiz')
        if any(a['questionId'] == question['id'] for a in progress['answers']):
            raise InvalidAction(f'Question {question["id"]} has already been answered')

        correct = action.selected_answer == question['ans']
        points = question['points'] if correct else 0
        progress['answers'].append({
            'questionId': question['id'],
            'selectedAnswer': action.selected_answer,
            'correct': correct,
            'pointsEarned': points,
            'timeSpent': action.time_spent,
        })
        if correct:
            progress['correctAnswers'] += 1
        progress['currentScore'] += points
        session.score = progress['currentScore']

        answered = {a['questionId'] for a in progress['answers']}
        remaining = [q['id'] for q in questions if q['id'] not in answered]
        return Outcome(
            Result.CORRECT if correct else Result.INCORRECT,
            terminal=not remaining,
            details={
                'correct': correct,
                'correctAnswer': question['ans'],
                'pointsEarned': points,
                'currentScore': progress['currentScore'],
                'questionNumber': len(progress['answers']),
                'totalQuestions': progress['totalQuestions'],
                'nextQuestionId': remaining[0] if remaining else None,
            },
        )

    def metrics(self, session, elapsed):
        progress = session.progress
        return {
            'total_questions': progress['totalQuestions'],
            'answered': len(progress['answers']),
            'correct_answers': progress['correctAnswers'],
            'points': progress['currentScore'],
            'elapsed': elapsed,
        }

    def score(self, metrics, config):
        return score_quiz(metrics, config)
