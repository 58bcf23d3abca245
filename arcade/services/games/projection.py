"""Client-safe views of sessions."""
from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional

from .session import Session


def strip_secrets(node: Any, secret_fields: Iterable[str],
                  is_revealed: Optional[Callable[[dict], bool]] = None) -> Any:
    """Return a copy of ``node`` with every secret key removed, at any depth.

    Dicts for which ``is_revealed`` returns True keep their secret keys
    (their children are still walked).
    """
    secrets = frozenset(secret_fields)
    if isinstance(node, dict):
        keep = bool(is_revealed and is_revealed(node))
        return {
            key: strip_secrets(value, secrets, is_revealed)
            for key, value in node.items()
            if keep or key not in secrets
        }
    if isinstance(node, list):
        return [strip_secrets(item, secrets, is_revealed) for item in node]
    return copy.deepcopy(node)


def isoformat(ts: Optional[float]) -> Optional[str]:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


def project(session: Session, secret_fields: Iterable[str], include_answers: bool = False,
            is_revealed: Optional[Callable[[dict], bool]] = None) -> dict:
    """Build the JSON view of a session.

    Secrets are removed from ``content`` and ``progress`` unless
    ``include_answers`` is set; deciding whether the caller may ask for
    answers is up to the engine.
    """
    if include_answers:
        content = copy.deepcopy(session.content)
        progress = copy.deepcopy(session.progress)
    else:
        content = strip_secrets(session.content, secret_fields, is_revealed)
        progress = strip_secrets(session.progress, secret_fields, is_revealed)
    return {
        'sessionId': session.session_id,
        'userId': session.user_id,
        'game': session.game,
        'config': copy.deepcopy(session.config),
        'content': content,
        'progress': progress,
        'completed': session.completed,
        'startTime': isoformat(session.start_time),
        'endTime': isoformat(session.end_time),
        'score': session.score,
    }
