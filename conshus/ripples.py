"""Pull "ripples" (suggested tasks, appointments, goals, moods...) out of entries.

Every ripple type is a list of regexes whose first capture group is the
extracted text. Each hit is scored (confidence), ranked (priority) and tagged
with the contexts, time sensitivity and mood of the surrounding text. The
output is meant to go through sieve.sieve_ripples() before being shown as a
task suggestion.
"""
from collections.abc import Mapping
from types import MappingProxyType
import logging
import re

from .models import MoodAnalysis, MoodHit, Ripple

logger = logging.getLogger(__name__)


def _rx(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


MOOD_INDICATORS = MappingProxyType({
    'positive': _rx(r"\b(?:happy|excited|thrilled|amazed|wonderful|fantastic|great|awesome|love|enjoy|delighted|pleased|optimistic|hopeful|grateful|blessed)\b"),
    'negative': _rx(r"\b(?:sad|depressed|anxious|worried|stressed|frustrated|angry|annoyed|disappointed|overwhelmed|exhausted|tired|miserable|awful|terrible|hate|regret)\b"),
    'neutral': _rx(r"\b(?:okay|fine|normal|usual|regular|standard|typical|average)\b"),
    'energetic': _rx(r"\b(?:energetic|motivated|driven|pumped|ready|determined|focused|productive)\b"),
    'tired': _rx(r"\b(?:tired|exhausted|drained|weary|sleepy|burnt out|fatigue)\b"),
    'uncertain': _rx(r"\b(?:confused|uncertain|unsure|unclear|don't know|not sure|maybe|perhaps|might)\b"),
})

# mood -> bucket of the three-way sentiment score
SENTIMENT_OF_MOOD = MappingProxyType({
    'positive': 'positive', 'energetic': 'positive',
    'negative': 'negative', 'tired': 'negative',
})

CONTEXT_TAGS = MappingProxyType({
    'work': _rx(r"\b(?:work|job|office|meeting|project|deadline|boss|colleague|client|business|professional|career)\b"),
    'personal': _rx(r"\b(?:family|friend|relationship|personal|home|house|self|myself)\b"),
    'health': _rx(r"\b(?:health|doctor|exercise|gym|diet|medical|wellness|fitness|therapy|mental health)\b"),
    'finance': _rx(r"\b(?:money|budget|financial|bank|investment|savings|expense|cost|payment|bills)\b"),
    'education': _rx(r"\b(?:learn|study|course|class|school|university|education|research|knowledge|skill)\b"),
    'creative': _rx(r"\b(?:creative|art|music|writing|design|craft|hobby|project|inspiration)\b"),
    'social': _rx(r"\b(?:social|party|event|gathering|friends|community|networking|relationship)\b"),
    'travel': _rx(r"\b(?:travel|trip|vacation|journey|visit|destination|flight|hotel)\b"),
    'technology': _rx(r"\b(?:tech|technology|software|app|computer|digital|online|internet|coding|programming)\b"),
})

# checked in order; the first level that matches wins
PRIORITY_INDICATORS = MappingProxyType({
    'high': _rx(r"\b(?:critical|urgent|important|priority|must|essential|crucial|vital|asap|immediately|right away)\b"),
    'medium': _rx(r"\b(?:should|ought to|need to|have to|want to|would like to)\b"),
    'low': _rx(r"\b(?:maybe|perhaps|might|could|someday|eventually|when I get around to it)\b"),
})

PRIORITY_RANK = MappingProxyType({'high': 3, 'medium': 2, 'low': 1})

TIME_INDICATORS = MappingProxyType({
    'immediate': _rx(r"\b(?:now|today|tonight|this morning|this afternoon|this evening|right now|immediately)\b"),
    'this_week': _rx(r"\b(?:this week|by friday|before weekend|end of week)\b"),
    'this_month': _rx(r"\b(?:this month|by month end|before (?:january|february|march|april|may|june|july|august|september|october|november|december))\b"),
    'someday': _rx(r"\b(?:someday|eventually|one day|in the future|when I have time)\b"),
})

RIPPLE_PATTERNS = MappingProxyType({
    'urgent_task': (
        _rx(r"\b(?:urgent|asap|immediately|right away|quickly)\b.*?\b(?:need to|must|have to)\s+([^.!?]+)"),
        _rx(r"\b(?:need to|must|have to)\s+([^.!?]+?)\s+(?:urgent|asap|immediately|right away|quickly)"),
    ),
    'suggested_task': (
        _rx(r"\b(?:I (?:need to|should|have to|want to|gotta)|(?:need to|should|have to|want to|gotta)|remember to|don't forget to)\s+([^.!?]+)"),
        _rx(r"\b(?:probably|maybe|might)\s+(?:should|need to|have to)\s+([^.!?]+)"),
    ),
    'procrastinated_task': (
        _rx(r"\b(?:keep putting off|keep avoiding|procrastinating on|still haven't)\s+([^.!?]+)"),
        _rx(r"\b(?:I've been meaning to|been trying to|supposed to)\s+([^.!?]+)"),
    ),
    'recurring_task': (
        _rx(r"\b(?:every|each)\s+(monday|tuesday|wednesday|thursday|friday|saturday|sunday|day|week|month|year)\s*(?:I|we)?\s*(?:need to|should|have to)?\s*([^.!?]+)"),
    ),
    'appointment': (
        _rx(r"\b(?:meeting|appointment|call|lunch|dinner)\s+(?:with\s+)?([^.!?]+?)\s+(?:at|on)\s+([^.!?]+)"),
        _rx(r"\b(?:scheduled|booked)\s+([^.!?]+?)\s+(?:for|at|on)\s+([^.!?]+)"),
    ),
    'deadline': (
        _rx(r"\b(?:due|deadline|expires?)\s+(?:by|on|at)?\s*([^.!?]+)"),
        _rx(r"\b([^.!?]+?)\s+(?:is due|due date|deadline)\s+([^.!?]*)"),
    ),
    'goal': (
        _rx(r"\b(?:goal|aim|hope|dream|want to achieve|working towards)\s+(?:is to|to)?\s*([^.!?]+)"),
        _rx(r"\b(?:trying to|attempting to|striving to)\s+([^.!?]+)"),
    ),
    'wishlist_item': (
        _rx(r"\b(?:wish I could|would love to|dream of|hope to)\s+([^.!?]+)"),
        _rx(r"\b(?:someday|eventually|one day)\s+(?:I'll|I will|I want to)\s+([^.!?]+)"),
    ),
    'decision': (
        _rx(r"\b(?:deciding|considering|thinking about|weighing|contemplating)\s+(?:whether to|if I should)?\s*([^.!?]+)"),
        _rx(r"\b(?:should I|wondering if I should|not sure if I should)\s+([^.!?]+)"),
    ),
    'concern': (
        _rx(r"\b(?:worried about|concerned about|anxious about|stressed about)\s+([^.!?]+)"),
        _rx(r"\b([^.!?]+?)\s+(?:worries me|concerns me|makes me anxious)"),
    ),
    'gratitude': (
        _rx(r"\b(?:grateful for|thankful for|appreciate|blessed to have)\s+([^.!?]+)"),
        _rx(r"\b([^.!?]+?)\s+(?:makes me happy|brings joy|grateful for)"),
    ),
    'learning': (
        _rx(r"\b(?:learning|studying|researching|reading about)\s+([^.!?]+)"),
        _rx(r"\b(?:want to learn|need to understand|curious about)\s+([^.!?]+)"),
    ),
    'habit_forming': (
        _rx(r"\b(?:trying to|working on|building|developing)\s+(?:a habit of|the habit of)?\s*([^.!?]+)"),
        _rx(r"\b(?:want to start|need to start)\s+([^.!?]+?)\s+(?:regularly|daily|weekly)"),
    ),
    'habit_breaking': (
        _rx(r"\b(?:trying to stop|want to quit|need to stop|cutting back on)\s+([^.!?]+)"),
        _rx(r"\b(?:bad habit|addiction to)\s+([^.!?]+)"),
    ),
})

MOOD_ONLY_RE = _rx(r"\b(?:feeling|felt|I'm|I am)\s+([^.!?]+)")
URGENCY_WORD_RE = _rx(r"\b(?:urgent|asap|immediately|critical|important)\b")
HASHTAG_RE = re.compile(r"#(\w+)")

MOOD_ONLY_CONFIDENCE = 0.7


def analyze_mood(text: str | None) -> MoodAnalysis:
    """Count mood indicator words and pick the dominant sentiment.

    Ties resolve toward the later bucket (positive, negative, neutral), so an
    entry with no indicators at all is 'neutral'.
    """
    text = text or ''
    moods: list[MoodHit] = []
    score = {'positive': 0, 'negative': 0, 'neutral': 0}
    for mood, rx in MOOD_INDICATORS.items():
        n = len(rx.findall(text))
        if not n:
            continue
        moods.append(MoodHit(mood=mood, intensity=n))
        score[SENTIMENT_OF_MOOD.get(mood, 'neutral')] += n
    dominant = 'positive'
    for bucket in ('negative', 'neutral'):
        if not score[dominant] > score[bucket]:
            dominant = bucket
    return MoodAnalysis(moods=moods, dominant_sentiment=dominant, sentiment_score=score)


def analyze_priority(text: str | None) -> str:
    text = text or ''
    for level, rx in PRIORITY_INDICATORS.items():
        if rx.search(text):
            return level
    return 'low'


def analyze_context(text: str | None) -> list[str]:
    text = text or ''
    return [name for name, rx in CONTEXT_TAGS.items() if rx.search(text)]


def analyze_time_sensitivity(text: str | None) -> str:
    text = text or ''
    for timing, rx in TIME_INDICATORS.items():
        if rx.search(text):
            return timing
    return 'flexible'


def extract_tags(text: str | None) -> list[str]:
    """Hashtags (lowercased) followed by matching context names, de-duplicated."""
    if not text:
        return []
    tags = [t.lower() for t in HASHTAG_RE.findall(text)] + analyze_context(text)
    return list(dict.fromkeys(tags))


def calculate_confidence(whole: str, extracted: str | None) -> float:
    """Confidence in [0.1, 1.0] from cue words in the match and the length of
    the extracted text. Cue checks are case-sensitive substrings."""
    confidence = 0.5
    if 'need to' in whole or 'must' in whole:
        confidence += 0.3
    if 'urgent' in whole or 'important' in whole:
        confidence += 0.2
    if 'maybe' in whole or 'might' in whole:
        confidence -= 0.2
    size = len((extracted or '').strip())
    if size > 20:
        confidence += 0.1
    if size < 5:
        confidence -= 0.2
    return max(0.1, min(1.0, confidence))


def _entry_fields(entry) -> tuple[str, str | None]:
    if isinstance(entry, str):
        return entry, None
    if isinstance(entry, Mapping):
        content = entry.get('content') or ''
        ident = entry.get('id', entry.get('_id'))
        return (content if isinstance(content, str) else ''), (str(ident) if ident is not None else None)
    return '', None


def _ripples_for(content: str, entry_id: str | None) -> list[Ripple]:
    entry_mood = analyze_mood(content)
    contexts = analyze_context(content)
    out: list[Ripple] = []
    for kind, patterns in RIPPLE_PATTERNS.items():
        for rx in patterns:
            for m in rx.finditer(content):
                whole = m.group(0)
                extracted = (m.group(1) or whole).strip()
                if len(extracted) <= 2:
                    continue
                out.append(Ripple(
                    extracted_text=extracted,
                    original_context=whole.strip(),
                    type=kind,
                    confidence=calculate_confidence(whole, m.group(1)),
                    priority=analyze_priority(whole),
                    contexts=contexts,
                    time_sensitivity=analyze_time_sensitivity(whole),
                    local_mood=analyze_mood(whole),
                    entry_mood=entry_mood,
                    source_entry_id=entry_id,
                    urgency_words=len(URGENCY_WORD_RE.findall(whole)),
                ))

    # mood statements without a task attached
    for m in MOOD_ONLY_RE.finditer(content):
        whole = m.group(0).strip()
        local = analyze_mood(whole)
        if not local.moods:
            continue
        out.append(Ripple(
            extracted_text=whole,
            original_context=whole,
            type='mood_indicator',
            confidence=MOOD_ONLY_CONFIDENCE,
            priority='low',
            contexts=contexts,
            time_sensitivity='immediate',
            local_mood=local,
            entry_mood=entry_mood,
            source_entry_id=entry_id,
            is_pure_mood_indicator=True,
        ))
    return out


def dedupe_ripples(ripples: list[Ripple]) -> list[Ripple]:
    """One ripple per normalized original context; a later duplicate replaces
    the kept one in place only when its confidence is strictly higher."""
    out: list[Ripple] = []
    index: dict[str, int] = {}
    for r in ripples:
        key = re.sub(r"\s+", " ", r.original_context.lower()).strip()
        if key not in index:
            index[key] = len(out)
            out.append(r)
        elif r.confidence > out[index[key]].confidence:
            out[index[key]] = r
    return out


def extract_ripples(entries) -> list[Ripple]:
    """Ripples for a list of entries (strings or mappings with 'content' and
    optionally 'id'/'_id'), de-duplicated and sorted by priority then
    confidence, highest first."""
    if isinstance(entries, (str, Mapping)):
        entries = [entries]
    found: list[Ripple] = []
    for entry in entries or []:
        content, entry_id = _entry_fields(entry)
        if not content.strip():
            continue
        found.extend(_ripples_for(content, entry_id))
    unique = dedupe_ripples(found)
    logger.debug('extracted %d ripples (%d before dedupe)', len(unique), len(found))
    return sorted(unique, key=lambda r: (-PRIORITY_RANK.get(r.priority, 0), -r.confidence))
