"""Weighted keyword scoring for tag, mood and cluster suggestions.

Each category lists keywords by level (primary, secondary, contextual for
topics; intense, moderate, mild, contextual for moods) plus a few regex
phrases. Keywords match as whole words, case-insensitively. A category's
score is the sum of the weights of its hits; confidence is score / 5 capped
at 1, then averaged with a length-based confidence for the whole entry.
Categories below SUGGESTION_THRESHOLD are dropped.
"""
from functools import lru_cache
from types import MappingProxyType
import re

from .models import CategoryScore, EntryContext, MetadataSuggestion, ScoredLabel

LEVEL_WEIGHTS = MappingProxyType({
    'primary': 3, 'secondary': 2, 'contextual': 1.5,
    'intense': 3, 'moderate': 2, 'mild': 1,
})
PHRASE_WEIGHT = 2.5
SCORE_FOR_FULL_CONFIDENCE = 5
WORDS_FOR_FULL_CONFIDENCE = 50
SUGGESTION_THRESHOLD = 0.3

TAG_PATTERNS = MappingProxyType({
    'reflection': {
        'primary': ('journaling', 'realized', 'reflecting', 'introspective', 'processing'),
        'secondary': ('thinking', 'pondering', 'considering', 'contemplating'),
        'contextual': ('insight', 'epiphany', 'understanding', 'clarity', 'perspective'),
        'phrases': (r"i've been thinking about", r"it occurred to me", r"i realized that"),
    },
    'work': {
        'primary': ('deadline', 'meeting', 'project', 'client', 'boss'),
        'secondary': ('email', 'task', 'office', 'colleague', 'presentation'),
        'contextual': ('professional', 'career', 'business', 'workplace', 'conference'),
        'phrases': (r"work meeting", r"at the office", r"project deadline", r"work related"),
    },
    'colton': {
        'primary': ('colton', 'son', 'kiddo'),
        'secondary': ('school dropoff', 'bedtime', 'kindergarten', 'pajamas'),
        'contextual': ('parenting', 'daddy time', 'kid activities', 'family time'),
        'phrases': (r"colton's school", r"with colton", r"colton said", r"my son"),
    },
    'dream': {
        'primary': ('dream', 'nightmare', 'lucid dreaming'),
        'secondary': ('asleep', 'sleeping', 'subconscious'),
        'contextual': ('rem sleep', 'vivid', 'symbolic', 'unconscious'),
        'phrases': (r"had a dream", r"dreamed about", r"in my dream", r"while sleeping"),
    },
    'gratitude': {
        'primary': ('grateful', 'thankful', 'blessed', 'appreciative'),
        'secondary': ('appreciate', 'counting blessings', 'fortunate'),
        'contextual': ('mindfulness', 'positive mindset', 'abundance'),
        'phrases': (r"grateful for", r"thankful that", r"feel blessed", r"appreciate having"),
    },
    'health': {
        'primary': ('therapy', 'mental health', 'wellness', 'exercise'),
        'secondary': ('doctor', 'meditation', 'self-care', 'healing'),
        'contextual': ('mindfulness', 'recovery', 'growth', 'balance'),
        'phrases': (r"therapy session", r"mental health", r"taking care of myself"),
    },
    'finance': {
        'primary': ('budget', 'money', 'expenses', 'financial'),
        'secondary': ('bills', 'savings', 'spending', 'income'),
        'contextual': ('investment', 'debt', 'financial planning'),
        'phrases': (r"tight budget", r"money worries", r"financial stress"),
    },
    'creativity': {
        'primary': ('creative', 'art', 'writing', 'music'),
        'secondary': ('inspiration', 'artistic', 'crafting', 'design'),
        'contextual': ('expression', 'imagination', 'innovative'),
        'phrases': (r"creative project", r"artistic expression", r"inspired to create"),
    },
    'social': {
        'primary': ('friends', 'social', 'party', 'gathering'),
        'secondary': ('conversation', 'community', 'connection', 'relationship'),
        'contextual': ('networking', 'socializing', 'bonding'),
        'phrases': (r"hanging out", r"social event", r"catching up with"),
    },
})

MOOD_PATTERNS = MappingProxyType({
    'happy': {
        'intense': ('ecstatic', 'thrilled', 'overjoyed', 'elated', 'euphoric'),
        'moderate': ('happy', 'joyful', 'cheerful', 'content', 'pleased'),
        'mild': ('good', 'okay', 'fine', 'calm', 'peaceful'),
        'contextual': ('grateful', 'excited', 'cozy', 'satisfied', 'optimistic'),
        'phrases': (r"feeling great", r"so happy", r"in a good mood", r"feeling blessed"),
    },
    'sad': {
        'intense': ('devastated', 'heartbroken', 'depressed', 'miserable', 'despairing'),
        'moderate': ('sad', 'down', 'melancholy', 'blue', 'gloomy'),
        'mild': ('tired', 'drained', 'low energy', 'meh', 'blah'),
        'contextual': ('lonely', 'overwhelmed', 'disconnected', 'empty'),
        'phrases': (r"feeling down", r"really sad", r"heavy heart", r"emotionally drained"),
    },
    'angry': {
        'intense': ('furious', 'enraged', 'livid', 'seething', 'irate'),
        'moderate': ('angry', 'mad', 'pissed', 'irritated', 'annoyed'),
        'mild': ('bothered', 'mildly frustrated', 'slightly annoyed'),
        'contextual': ('frustrated', 'resentful', 'bitter', 'hostile'),
        'phrases': (r"so angry", r"really frustrated", r"pissed off", r"had enough"),
    },
    'anxious': {
        'intense': ('panicked', 'terrified', 'overwhelmed with anxiety', 'paralyzed'),
        'moderate': ('anxious', 'worried', 'stressed', 'nervous', 'uneasy'),
        'mild': ('slightly worried', 'a bit nervous', 'concerned'),
        'contextual': ('restless', 'on edge', 'tense', 'apprehensive'),
        'phrases': (r"really anxious", r"stressed out", r"worry about", r"anxiety attack"),
    },
    'excited': {
        'intense': ('thrilled', 'ecstatic', 'pumped', 'stoked', 'exhilarated'),
        'moderate': ('excited', 'enthusiastic', 'eager', 'energized'),
        'mild': ('looking forward', 'interested', 'curious'),
        'contextual': ('motivated', 'inspired', 'anticipating'),
        'phrases': (r"so excited", r"can't wait", r"really looking forward"),
    },
    'confused': {
        'intense': ('completely lost', 'utterly confused', 'bewildered'),
        'moderate': ('confused', 'puzzled', 'uncertain', 'unclear'),
        'mild': ('not sure', 'questioning', 'wondering'),
        'contextual': ('ambivalent', 'conflicted', 'indecisive'),
        'phrases': (r"don't understand", r"confused about", r"not sure what"),
    },
    'peaceful': {
        'intense': ('blissful', 'serene', 'transcendent', 'deeply peaceful'),
        'moderate': ('peaceful', 'calm', 'centered', 'balanced'),
        'mild': ('relaxed', 'at ease', 'comfortable'),
        'contextual': ('mindful', 'present', 'grounded', 'harmonious'),
        'phrases': (r"feeling peaceful", r"so calm", r"inner peace", r"centered and grounded"),
    },
})

# 'relationships' is carried through to the suggestion, never scored
CLUSTER_PATTERNS = MappingProxyType({
    'Home': {
        'primary': ('home', 'house', 'cleaning', 'chores', 'domestic'),
        'secondary': ('dishes', 'laundry', 'cooking', 'groceries', 'maintenance'),
        'contextual': ('household', 'family life', 'domestic duties', 'home improvement'),
        'phrases': (r"around the house", r"home life", r"household tasks"),
        'relationships': ('family', 'daily_routine', 'self_care'),
    },
    'Colton': {
        'primary': ('colton', 'son', 'parenting', 'fatherhood'),
        'secondary': ('kindergarten', 'school', 'bedtime', 'playtime'),
        'contextual': ('child development', 'family bonding', 'daddy duties'),
        'phrases': (r"time with colton", r"colton's development", r"being a dad"),
        'relationships': ('family', 'personal_growth', 'daily_routine'),
    },
    'Stream': {
        'primary': ('stream', 'coding', 'development', 'programming'),
        'secondary': ('entrymodal', 'cluster', 'project', 'software'),
        'contextual': ('technology', 'innovation', 'problem solving', 'creativity'),
        'phrases': (r"working on stream", r"coding project", r"development work"),
        'relationships': ('work', 'creativity', 'problem_solving'),
    },
    'Self': {
        'primary': ('therapy', 'self-care', 'personal growth', 'introspection'),
        'secondary': ('journaling', 'meditation', 'reflection', 'insight'),
        'contextual': ('mindfulness', 'healing', 'self-discovery', 'mental health'),
        'phrases': (r"working on myself", r"personal development", r"self reflection"),
        'relationships': ('health', 'growth', 'spirituality'),
    },
    'Work': {
        'primary': ('work', 'career', 'professional', 'job'),
        'secondary': ('meeting', 'project', 'deadline', 'colleague'),
        'contextual': ('productivity', 'leadership', 'business', 'goals'),
        'phrases': (r"at work", r"work project", r"professional development"),
        'relationships': ('goals', 'stress', 'achievement'),
    },
    'Relationships': {
        'primary': ('relationship', 'friendship', 'connection', 'social'),
        'secondary': ('friend', 'partner', 'family', 'communication'),
        'contextual': ('intimacy', 'trust', 'support', 'love'),
        'phrases': (r"relationship with", r"connecting with", r"social interaction"),
        'relationships': ('emotional', 'support', 'growth'),
    },
})

# later entries win when several match
TIME_OF_DAY_PATTERNS = MappingProxyType({
    'morning': (r"morning", r"woke up", r"coffee", r"breakfast", r"start of day"),
    'evening': (r"evening", r"dinner", r"winding down", r"end of day", r"nighttime"),
    'routine': (r"daily routine", r"habit", r"regularly", r"every day", r"consistent"),
    'transition': (r"changing", r"transition", r"moving from", r"shift", r"adjustment"),
})

INTENSIFIER_RE = re.compile(
    r"\b(?:very|extremely|incredibly|absolutely|completely|totally|really|so|deeply)\b",
    re.IGNORECASE,
)


@lru_cache(maxsize=None)
def _keyword_re(keyword: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(keyword) + r"\b", re.IGNORECASE)


@lru_cache(maxsize=None)
def _phrase_re(phrase: str) -> re.Pattern:
    return re.compile(phrase, re.IGNORECASE)


def score_categories(content: str, patterns) -> list[CategoryScore]:
    """Score every category with at least one hit, highest score first."""
    results = []
    for category, levels in patterns.items():
        score = 0.0
        matches = 0
        intensity = 'mild'
        for level, entries in levels.items():
            if level == 'relationships':
                continue
            if level == 'phrases':
                for phrase in entries:
                    if _phrase_re(phrase).search(content):
                        score += PHRASE_WEIGHT
                        matches += 1
                continue
            weight = LEVEL_WEIGHTS.get(level, 1)
            for keyword in entries:
                if not _keyword_re(keyword).search(content):
                    continue
                score += weight
                matches += 1
                if level == 'intense':
                    intensity = 'intense'
                elif level == 'moderate' and intensity != 'intense':
                    intensity = 'moderate'
        if score > 0:
            results.append(CategoryScore(
                category=category,
                score=score,
                intensity=intensity,
                matches=matches,
                relationships=list(levels.get('relationships', ())),
            ))
    results.sort(key=lambda r: r.score, reverse=True)
    return results


def describe_context(content: str) -> EntryContext:
    time_of_day = None
    for name, phrases in TIME_OF_DAY_PATTERNS.items():
        if any(_phrase_re(p).search(content) for p in phrases):
            time_of_day = name
    n = len(INTENSIFIER_RE.findall(content))
    if n > 2:
        emotional = 'high'
    elif n > 0:
        emotional = 'medium'
    else:
        emotional = 'low'
    return EntryContext(time_of_day=time_of_day, emotional_intensity=emotional)


def word_count(content: str) -> int:
    return len(content.split())


def _adjusted(results: list[CategoryScore], base: float) -> list[tuple[CategoryScore, float]]:
    out = []
    for r in results:
        confidence = min(r.score / SCORE_FOR_FULL_CONFIDENCE, 1)
        adjusted = min((confidence + base) / 2, 1)
        if adjusted >= SUGGESTION_THRESHOLD:
            out.append((r, adjusted))
    return out


def suggest_metadata(content) -> MetadataSuggestion:
    """Suggest tags, moods and clusters for an entry with confidences.

    Non-string or empty content returns an empty suggestion with no context.
    """
    if not content or not isinstance(content, str):
        return MetadataSuggestion()
    words = word_count(content)
    base = min(words / WORDS_FOR_FULL_CONFIDENCE, 1)

    tags = _adjusted(score_categories(content, TAG_PATTERNS), base)
    moods = _adjusted(score_categories(content, MOOD_PATTERNS), base)
    clusters = _adjusted(score_categories(content, CLUSTER_PATTERNS), base)

    relationships = dict.fromkeys(rel for r, _ in tags + clusters for rel in r.relationships)
    confidences = [c for _, c in tags + moods + clusters]
    return MetadataSuggestion(
        tags=[ScoredLabel(name=r.category, confidence=c, intensity=r.intensity, matches=r.matches) for r, c in tags],
        moods=[ScoredLabel(name=r.category, confidence=c, intensity=r.intensity, matches=r.matches) for r, c in moods],
        clusters=[
            ScoredLabel(name=r.category, confidence=c, relationships=r.relationships, matches=r.matches)
            for r, c in clusters
        ],
        context=describe_context(content),
        suggested_relationships=list(relationships),
        content_length=len(content),
        word_count=words,
        overall_confidence=max(confidences, default=0.0),
    )
