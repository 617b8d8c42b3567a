from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExtractedEvent(BaseModel):
    """An important date pulled out of free text. `date` is YYYY-MM-DD with no
    time or timezone component."""
    model_config = ConfigDict(frozen=True)

    title: str
    date: str


class Appointment(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    date: str
    # 24-hour 'HH:MM'
    time_start: str


class RepeatDescriptor(BaseModel):
    """Structured repeat settings as stored on a task (unit + interval + days)."""
    model_config = ConfigDict(populate_by_name=True)

    unit: str
    interval: Optional[int] = 1
    by_day: List[str] = Field(default_factory=list, alias='byDay')


class RepeatRule(BaseModel):
    """Result of parsing a recurrence phrase such as 'every other week'."""
    freq: str
    interval: int = 1
    byweekday: List[str] = Field(default_factory=list)
    bymonthday: Optional[int] = None
    bysetpos: Optional[int] = None
    bymonth: Optional[int] = None
    rrule: str = ''
    next_iso: Optional[str] = None


class MoodHit(BaseModel):
    model_config = ConfigDict(frozen=True)

    mood: str
    # number of indicator words found
    intensity: int


class MoodAnalysis(BaseModel):
    moods: List[MoodHit] = Field(default_factory=list)
    dominant_sentiment: str = 'neutral'
    sentiment_score: Dict[str, int] = Field(default_factory=dict)


class Ripple(BaseModel):
    """A task-like or mood-like fragment pulled out of a journal entry."""
    extracted_text: str
    original_context: str
    type: str
    confidence: float
    priority: str
    contexts: List[str] = Field(default_factory=list)
    time_sensitivity: str = 'flexible'
    local_mood: MoodAnalysis = Field(default_factory=MoodAnalysis)
    entry_mood: MoodAnalysis = Field(default_factory=MoodAnalysis)
    source_entry_id: Optional[str] = None
    urgency_words: int = 0
    is_pure_mood_indicator: bool = False


class CategoryScore(BaseModel):
    """Raw keyword score of one category before confidence adjustment."""
    model_config = ConfigDict(frozen=True)

    category: str
    score: float
    intensity: str = 'mild'
    matches: int = 0
    relationships: List[str] = Field(default_factory=list)

class ScoredLabel(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    confidence: float
    intensity: Optional[str] = None
    relationships: List[str] = Field(default_factory=list)
    matches: int = 0


class EntryContext(BaseModel):
    time_of_day: Optional[str] = None
    emotional_intensity: str = 'low'


class MetadataSuggestion(BaseModel):
    tags: List[ScoredLabel] = Field(default_factory=list)
    moods: List[ScoredLabel] = Field(default_factory=list)
    clusters: List[ScoredLabel] = Field(default_factory=list)
    context: Optional[EntryContext] = None
    suggested_relationships: List[str] = Field(default_factory=list)
    content_length: int = 0
    word_count: int = 0
    overall_confidence: float = 0.0


class EntryAnalysis(BaseModel):
    tags: List[str] = Field(default_factory=list)
    moods: List[str] = Field(default_factory=list)
    clusters: List[str] = Field(default_factory=list)
    context: Optional[EntryContext] = None
    # immediate | short_term | long_term | unspecified
    time_sensitivity: str = 'unspecified'
    confidence: float = 0.0
    important_events: List[ExtractedEvent] = Field(default_factory=list)
    appointments: List[Appointment] = Field(default_factory=list)
    # actionable ripples only
    ripples: List[Ripple] = Field(default_factory=list)
