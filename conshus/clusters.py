"""Guess which clusters (life areas) a piece of text belongs to.

Picks up phrases like "for Colton", "in home", "#work", "[games]". Explicit
tag syntax (hashtags, brackets) accepts any name; the cue and keyword rules
only know about a fixed vocabulary. Every rule is a separate function and
extract_assigned_clusters() unions them.
"""
from types import MappingProxyType
import re

KNOWN_CLUSTERS = ('home', 'work', 'colton', 'games', 'crochet', 'spiritual', 'health', 'finance')

HOME_EMOJI = ('\U0001F3E0', '\U0001F9F9', '\U0001F9FA')  # house, broom, basket
WORK_EMOJI = ('\U0001F4BC', '\U0001F4BB', '\U0001F9D1\u200d\U0001F4BB')  # briefcase, laptop, technologist

# A cluster needs at least this many distinct keyword hits. One common word
# ("clean") on its own is not enough.
KEYWORD_MIN_HITS = 2

CLUSTER_HINTS = MappingProxyType({
    'home': ('laundry', 'dishes', 'kitchen', 'declutter', 'trash', 'clean'),
    'work': ('client', 'deploy', 'merge', 'ticket', 'resume', 'interview'),
    'health': ('meds', 'doctor', 'dentist', 'exercise', 'gym', 'sleep', 'medication'),
    'finance': ('budget', 'rent', 'bill', 'invoice', 'payment'),
    'games': ('steam', 'switch', 'game', 'quest', 'level'),
    'crochet': ('crochet', 'yarn', 'stitch', 'pattern', 'hook'),
})

HASHTAG_RE = re.compile(r"(?:^|\s)#([a-z0-9_-]{2,30})\b", re.IGNORECASE)
BRACKET_RE = re.compile(r"[\[{]([a-z0-9 _-]{2,30})[\]}]", re.IGNORECASE)
COLTON_RE = re.compile(r"\bcolton\b", re.IGNORECASE)


def hashtag_clusters(text: str) -> set[str]:
    return {m.group(1).lower() for m in HASHTAG_RE.finditer(text)}


def bracket_clusters(text: str) -> set[str]:
    out = set()
    for m in BRACKET_RE.finditer(text):
        name = re.sub(r"\s+", "-", m.group(1).strip().lower())
        if name:
            out.add(name)
    return out


def cue_clusters(text: str, known_clusters=KNOWN_CLUSTERS) -> set[str]:
    """Known cluster names preceded by for / in / re: / re -> / about."""
    out = set()
    for c in known_clusters:
        if not c:
            continue
        rx = r"\b(?:for|in|re:|re\s*->|about)\s+" + re.escape(c) + r"\b"
        if re.search(rx, text, re.IGNORECASE):
            out.add(c.lower())
    return out


def emoji_clusters(text: str) -> set[str]:
    out = set()
    if any(e in text for e in HOME_EMOJI):
        out.add('home')
    if any(e in text for e in WORK_EMOJI):
        out.add('work')
    if COLTON_RE.search(text):
        out.add('colton')
    return out


def keyword_clusters(text: str, hints=CLUSTER_HINTS, min_hits: int = KEYWORD_MIN_HITS) -> set[str]:
    out = set()
    for cluster, words in hints.items():
        hits = sum(1 for w in set(words) if re.search(r"\b" + re.escape(w) + r"\b", text, re.IGNORECASE))
        if hits >= min_hits:
            out.add(cluster)
    return out


def extract_assigned_clusters(text: str | None, known_clusters=None) -> set[str]:
    """Return the lowercase cluster ids text points at (possibly empty).

    known_clusters limits the preposition cue rule; it defaults to
    KNOWN_CLUSTERS. Callers pretty-case and sort for display.
    """
    if not text or not isinstance(text, str):
        return set()
    if known_clusters is None:
        known_clusters = KNOWN_CLUSTERS
    return (
        hashtag_clusters(text)
        | bracket_clusters(text)
        | cue_clusters(text, known_clusters)
        | emoji_clusters(text)
        | keyword_clusters(text)
    )
