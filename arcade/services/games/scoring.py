"""Pure scoring functions.

Each ``score_<game>(metrics, config)`` maps observable performance figures
and the immutable session config to a non-negative integer. No I/O, no
mutation; identical inputs always give identical output.
"""
from __future__ import annotations

from typing import Optional

MEMORY_MULTIPLIERS = {'Easy': 1.0, 'Medium': 1.5, 'Hard': 2.0, 'Expert': 2.5}
MATH_MULTIPLIERS = {'Easy': 1, 'Medium': 2, 'Hard': 3, 'Expert': 5}
MAZE_MULTIPLIERS = {'beginner': 1.0, 'intermediate': 1.2, 'advanced': 1.5, 'expert': 2.0, 'master': 2.5}
SCRAMBLE_MULTIPLIERS = {'easy': 1.0, 'medium': 1.2, 'hard': 1.5, 'expert': 2.0}
REACTION_MULTIPLIERS = {'easy': 1.0, 'medium': 1.25, 'hard': 1.5, 'extreme': 2.0}
SUDOKU_MULTIPLIERS = {'easy': 1.0, 'medium': 1.5, 'hard': 2.0, 'expert': 3.0}
SPEED_MATH_MULTIPLIERS = {'easy': 1.0, 'medium': 1.5, 'hard': 2.0, 'expert': 3.0}
SPEED_MATH_OPERATION_MULTIPLIERS = {'+': 1.0, '-': 1.1, '*': 1.3, '/': 1.5, '^': 2.0, 'sqrt': 1.8}

SCRAMBLE_BASE_WORD_SCORE = 100
SCRAMBLE_SPEED_THRESHOLD_MS = 5000
SCRAMBLE_PERFECT_BONUS = 300
QUIZ_PERFECT_BONUS = 50
REACTION_REFERENCE_MS = 200


def _clamp(value: float) -> int:
    return max(0, int(round(value)))


def score_memory(metrics: dict, config: dict) -> int:
    """Memory: fewer flips and a faster finish score higher.

    A round finalized early only earns the share of matched pairs.
    """
    pairs = metrics['total_pairs']
    if not pairs:
        return 0
    moves = metrics['moves']
    penalty = max(0, moves - pairs) * 5
    time_bonus = max(0.0, 500 - metrics['elapsed'] * 2)
    score = (1000 - penalty + time_bonus) * MEMORY_MULTIPLIERS.get(config.get('difficulty'), 1.0)
    if moves <= pairs:
        score += 500
    return _clamp(score * metrics['matches'] / pairs)


def score_quiz(metrics: dict, config: dict) -> int:
    total = metrics['total_questions']
    if not total:
        return 0
    correct = metrics['correct_answers']
    score = metrics['points']
    if correct == total:
        score += QUIZ_PERFECT_BONUS

    # Speed bonus only counts for a fully answered quiz.
    if metrics['answered'] == total:
        average = metrics['elapsed'] / total
        if average < 10:
            score += 30
        elif average < 15:
            score += 20
        elif average < 20:
            score += 10

    accuracy = round(correct / total * 100)
    if accuracy >= 90:
        score += 25
    elif accuracy >= 80:
        score += 15
    elif accuracy >= 70:
        score += 10
    return _clamp(score)


def score_math(metrics: dict, config: dict) -> int:
    total = metrics['total_questions']
    if not total:
        return 0
    correct = metrics['correct_answers']
    accuracy = correct / total * 100
    time_bonus = 0.0
    limit = config.get('timeLimit')
    if limit and correct:
        time_bonus = max(0.0, limit - metrics['elapsed']) / limit * 10
    return min(100, _clamp(accuracy + time_bonus))


def score_number_maze(metrics: dict, config: dict) -> int:
    if not metrics['success']:
        return 0
    moves = metrics['moves']
    elapsed = metrics['elapsed']
    score = 1000 + max(0, 200 - moves * 15) + max(0.0, 300 - elapsed)
    if abs(metrics['target']) <= 25:
        score += 100
    if moves <= 8:
        score += 150
    if elapsed <= 120:
        score += 50
    score *= MAZE_MULTIPLIERS.get(config.get('difficulty'), 1.0)
    return max(50, _clamp(score))


def word_points(word: str, difficulty: str) -> int:
    return _clamp(len(word) * SCRAMBLE_BASE_WORD_SCORE * SCRAMBLE_MULTIPLIERS.get(difficulty, 1.0))


def scramble_guess_points(points: int, streak: int, reaction_time: Optional[float], hints_used: int) -> int:
    """Points for one solved word.

    ``streak`` counts this word; ``reaction_time`` is in milliseconds.
    """
    multiplier = 1.0
    if reaction_time is not None and reaction_time < SCRAMBLE_SPEED_THRESHOLD_MS:
        multiplier += (1 + (SCRAMBLE_SPEED_THRESHOLD_MS - reaction_time) / SCRAMBLE_SPEED_THRESHOLD_MS) * 0.5
    if streak >= 3:
        multiplier += min(3.0, 1 + streak * 0.1) - 1
    if hints_used > 0:
        multiplier = max(0.5, multiplier - hints_used * 0.15)
    return _clamp(points * multiplier)


def score_word_scramble(metrics: dict, config: dict) -> int:
    score = metrics['points']
    words = metrics['total_words']
    perfect = (
        words >= 5
        and metrics['words_solved'] == words
        and metrics['wrong_guesses'] == 0
        and metrics['hints_used'] == 0
    )
    if perfect:
        score += SCRAMBLE_PERFECT_BONUS
    return _clamp(score)


def score_reaction_time(metrics: dict, config: dict) -> int:
    """Reaction test: every term only grows as any single attempt gets faster.

    Consistency is the slowest valid attempt measured against a fixed
    200 ms reference, not against the best attempt.
    """
    times = metrics['times']
    if not times:
        return 0
    average = sum(times) / len(times)
    best = min(times)
    base = max(0, round(500 - (average - 200) * 0.5))
    consistency = max(0, round(50 - (max(times) - REACTION_REFERENCE_MS) * 0.1))
    if best < 200:
        best_bonus = 50
    elif best < 250:
        best_bonus = 25
    elif best < 300:
        best_bonus = 10
    else:
        best_bonus = 0
    multiplier = REACTION_MULTIPLIERS.get(config.get('difficulty'), 1.0)
    return _clamp((base + consistency + best_bonus) * multiplier - metrics['false_starts'] * 10)


def score_sudoku(metrics: dict, config: dict) -> int:
    if not metrics['solved']:
        return 0
    score = 1000 + max(0.0, 3600 - metrics['elapsed']) - metrics['hints_used'] * 50 - metrics['mistakes'] * 25
    score *= SUDOKU_MULTIPLIERS.get(config.get('difficulty'), 1.0)
    return max(50, _clamp(score))


def speed_math_base_points(difficulty: str, operation: str) -> int:
    return _clamp(10 * SPEED_MATH_MULTIPLIERS.get(difficulty, 1.0)
                  * SPEED_MATH_OPERATION_MULTIPLIERS.get(operation, 1.0))


def streak_multiplier(streak: int) -> float:
    if streak >= 20:
        return 3.0
    if streak >= 15:
        return 2.5
    if streak >= 10:
        return 2.0
    if streak >= 5:
        return 1.5
    return 1.0


def speed_math_answer_points(base: int, streak: int, time_taken: float, time_limit: float) -> int:
    speed_bonus = max(0.0, time_limit - time_taken) / time_limit * 10 if time_limit else 0.0
    return _clamp(base * streak_multiplier(streak) + speed_bonus)


def score_speed_math(metrics: dict, config: dict) -> int:
    return _clamp(metrics['points'])


EMOJI_DIFFICULTY_BONUS = {'Easy': 0, 'Medium': 20, 'Hard': 50}
EMOJI_FREE_SECONDS = 60


def score_emoji(metrics: dict, config: dict) -> int:
    """Emoji guess: 100 for a first-try solve, less for retries, hints and dawdling."""
    if not metrics['solved']:
        return 0
    score = 100 - (metrics['attempts'] - 1) * 10 - metrics['hints_used'] * 20
    seconds = metrics['elapsed']
    if seconds > EMOJI_FREE_SECONDS:
        score -= int((seconds - EMOJI_FREE_SECONDS) // 10) * 5
    score += EMOJI_DIFFICULTY_BONUS.get(metrics['difficulty'], 0)
    return _clamp(score)


def score_whack_a_mole(metrics: dict, config: dict) -> int:
    """Whack-a-mole: collected points plus accuracy and streak bonuses.

    Bombs can drive the collected points negative; the bonuses never do.
    """
    points = metrics['points']
    attempts = metrics['hits'] + metrics['misses']
    accuracy = metrics['hits'] / attempts * 100 if attempts else 0.0
    accuracy_bonus = int(max(0, points) * accuracy / 100 * 0.5)
    return _clamp(points + accuracy_bonus + metrics['best_streak'] * 5)


def whack_hit_points(base: int, perfect: bool, combo: float) -> int:
    points = base * 1.5 if perfect else base
    return int(round(points * combo))


def whack_combo(streak: int) -> float:
    return min(5.0, 1 + (streak // 5) * 0.5)


TOWER_MAX_LEVEL = 20
TOWER_TARGET_SECONDS = 120


def score_tower_stacker(metrics: dict, config: dict) -> int:
    level = metrics['level']
    perfect = metrics['perfect_drops']
    score = level * 10 + perfect * 20 + round(metrics['average_accuracy'] * 100) + int(perfect * 1.5)
    if level >= 20:
        score += 200
    elif level >= 15:
        score += 150
    elif level >= 10:
        score += 100
    elif level >= 5:
        score += 50
    # Speed only counts for a finished tower.
    if level >= TOWER_MAX_LEVEL and metrics['elapsed'] < TOWER_TARGET_SECONDS:
        score += int((TOWER_TARGET_SECONDS - metrics['elapsed']) // 2)
    return _clamp(score)


TYPING_CHARS_PER_WORD = 5


def typing_wpm(characters: int, elapsed: float) -> int:
    if elapsed <= 0:
        return 0
    return int(round(characters / TYPING_CHARS_PER_WORD / (elapsed / 60)))


def typing_accuracy(typed: str, text: str) -> int:
    """Percentage of typed characters that match the passage at the same position."""
    if not typed:
        return 100
    correct = sum(1 for i, ch in enumerate(typed) if i < len(text) and ch == text[i])
    return int(round(correct / len(typed) * 100))


def score_typing(metrics: dict, config: dict) -> int:
    wpm = typing_wpm(metrics['characters'], metrics['elapsed'])
    score = wpm * 10 * max(0.5, metrics['accuracy'] / 50)
    # An abandoned passage earns no time bonus.
    if metrics['finished']:
        score += max(0.0, (60 - metrics['elapsed']) * 2)
    return _clamp(score)
