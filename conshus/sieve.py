"""Filter suggested tasks ("ripples") down to clearly actionable text.

Rejects vague chatter and keeps only text that has a real action verb.
"""
from collections.abc import Mapping
import re

from .models import Ripple

ACTION_VERBS = (
    'buy', 'call', 'email', 'text', 'message',
    'schedule', 'book', 'attend',
    'clean', 'wash', 'wipe', 'vacuum', 'mop', 'water', 'feed',
    'pay', 'renew', 'submit', 'file', 'send', 'print', 'scan',
    'write', 'read', 'finish', 'fix', 'update', 'check', 'review',
    'install', 'uninstall', 'replace',
    'pick up', 'drop off', 'prepare', 'plan', 'organize', 'record', 'practice', 'backup', 'back up',
)

BORING_SINGLE_WORDS = frozenset({'day', 'today', 'tomorrow', 'sometime', 'later', 'soon', 'now', 'please'})

FILLER = tuple(re.compile(p, re.IGNORECASE) for p in (
    r"\bidk\b", r"\bsomething\b", r"\blet['’]s see\b", r"\bthat'?s at least\b",
    r"\bwell(,|\s)", r"\byeah\b", r"\bdramatique\b", r"\bsemi-?functional\b",
    r"^\s*(hmm+|uh+|erm)\b",
))

_PHRASE_VERB_RES = tuple(
    re.compile(r"\b" + re.escape(v) + r"\b", re.IGNORECASE) for v in ACTION_VERBS if ' ' in v
)
_WORD_VERB_RES = tuple(
    re.compile(r"\b" + re.escape(v) + r"(e|ed|es|ing)?\b", re.IGNORECASE) for v in ACTION_VERBS if ' ' not in v
)


def has_action_verb(text: str | None) -> bool:
    s = (text or '').lower()
    return any(rx.search(s) for rx in _PHRASE_VERB_RES) or any(rx.search(s) for rx in _WORD_VERB_RES)


def looks_like_junk(text: str | None) -> bool:
    s = (text or '').strip()
    if not s:
        return True
    if not re.search(r"\s", s) and s.lower() in BORING_SINGLE_WORDS:
        return True
    if len(s) < 6:
        return True
    if any(p.search(s) for p in FILLER):
        return True
    letters = len(re.findall(r"[A-Za-zÀ-ɏ]", s))
    punct = len(re.findall(r"[.,!?…]", s))
    return letters < 8 or punct > letters / 2


def is_actiony(text: str | None) -> bool:
    if looks_like_junk(text):
        return False
    return has_action_verb(text)


def why_reject(text: str | None) -> str:
    """'junk', 'no-verb' or 'ok'."""
    if looks_like_junk(text):
        return 'junk'
    if not has_action_verb(text):
        return 'no-verb'
    return 'ok'


def _ripple_text(r):
    if isinstance(r, Ripple):
        return r.extracted_text
    if isinstance(r, Mapping):
        return r.get('extracted_text') or r.get('text')
    return None


def sieve_ripples(ripples) -> list:
    """Keep the ripples (models, or mappings with extracted_text or text) that
    are actiony."""
    return [r for r in ripples or [] if is_actiony(_ripple_text(r))]
