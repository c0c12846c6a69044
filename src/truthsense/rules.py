"""
Immutable rule table for the headline scorer.

Every keyword list, weight, threshold and message the scorer uses lives here
as frozen dataclasses holding tuples, so a RuleSet can be shared freely
between callers and swapped out in tests without touching the aggregation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class SignalCategory(str, Enum):
    IMPOSSIBLE_CLAIM = "ImpossibleClaim"
    CLICKBAIT = "Clickbait"
    SENSATIONAL = "Sensational"
    ABSOLUTE_LANGUAGE = "AbsoluteLanguage"
    LISTICLE = "Listicle"
    PUNCTUATION = "Punctuation"
    CAPITALIZATION = "Capitalization"
    LENGTH = "Length"
    TRUSTWORTHY_CUE = "TrustworthyCue"
    RESEARCH_MENTION = "ResearchMention"


class ScoreTarget(str, Enum):
    FAKE = "fake"
    TRUST = "trust"


@dataclass(frozen=True)
class NormalizedHeadline:
    """Trimmed headline, its lower-cased form and its whitespace tokens."""

    original: str
    text: str
    words: tuple[str, ...]


@dataclass(frozen=True)
class SignalHit:
    category: SignalCategory
    target: ScoreTarget
    weight: float
    reason: str


class Detector(Protocol):
    category: SignalCategory

    def evaluate(self, headline: NormalizedHeadline) -> SignalHit | None:
        ...


@dataclass(frozen=True)
class KeywordSignal:
    """Fires when any keyword is a substring of the lower-cased text."""

    category: SignalCategory
    keywords: tuple[str, ...]
    weight: float
    target: ScoreTarget
    explanation: str

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)

    def evaluate(self, headline: NormalizedHeadline) -> SignalHit | None:
        if not self.matches(headline.text):
            return None
        return SignalHit(self.category, self.target, self.weight, self.explanation)


@dataclass(frozen=True)
class WholeWordSignal:
    """Like KeywordSignal, but each word must stand on word boundaries."""

    category: SignalCategory
    words: tuple[str, ...]
    weight: float
    target: ScoreTarget
    explanation: str
    _pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        alternation = "|".join(re.escape(word) for word in self.words)
        object.__setattr__(self, "_pattern", re.compile(rf"\b(?:{alternation})\b", re.ASCII))

    def matches(self, text: str) -> bool:
        return self._pattern.search(text) is not None

    def evaluate(self, headline: NormalizedHeadline) -> SignalHit | None:
        if not self.matches(headline.text):
            return None
        return SignalHit(self.category, self.target, self.weight, self.explanation)


@dataclass(frozen=True)
class PunctuationSignal:
    """Graded exclamation-mark signal: one mark or several, never both."""

    single_weight: float = 1.0
    multiple_weight: float = 2.0
    single_explanation: str = "The exclamation mark increases the emotional tone of the headline."
    multiple_explanation: str = (
        "Multiple exclamation marks suggest strong sensationalism and possible clickbait."
    )
    category: SignalCategory = SignalCategory.PUNCTUATION

    def evaluate(self, headline: NormalizedHeadline) -> SignalHit | None:
        count = headline.original.count("!")
        if count >= 2:
            return SignalHit(self.category, ScoreTarget.FAKE, self.multiple_weight, self.multiple_explanation)
        if count == 1:
            return SignalHit(self.category, ScoreTarget.FAKE, self.single_weight, self.single_explanation)
        return None


@dataclass(frozen=True)
class CapitalizationSignal:
    min_word_length: int = 4
    min_count: int = 2
    weight: float = 2.0
    explanation: str = (
        "Using several ALL-CAPS words is a common pattern in misleading or spammy headlines."
    )
    category: SignalCategory = SignalCategory.CAPITALIZATION

    def count_caps(self, words: tuple[str, ...]) -> int:
        # digits and punctuation are unchanged by upper(), so "2024" counts too
        return sum(1 for word in words if len(word) >= self.min_word_length and word == word.upper())

    def evaluate(self, headline: NormalizedHeadline) -> SignalHit | None:
        if self.count_caps(headline.words) < self.min_count:
            return None
        return SignalHit(self.category, ScoreTarget.FAKE, self.weight, self.explanation)


@dataclass(frozen=True)
class LengthSignal:
    short_below: int = 5
    short_weight: float = 1.0
    short_explanation: str = "The headline is very short, which can reduce context and clarity."
    long_above: int = 18
    long_weight: float = 0.5
    long_explanation: str = (
        "The headline is relatively detailed, which can sometimes indicate more informative reporting."
    )
    category: SignalCategory = SignalCategory.LENGTH

    def evaluate(self, headline: NormalizedHeadline) -> SignalHit | None:
        count = len(headline.words)
        if count < self.short_below:
            return SignalHit(self.category, ScoreTarget.FAKE, self.short_weight, self.short_explanation)
        if count > self.long_above:
            return SignalHit(self.category, ScoreTarget.TRUST, self.long_weight, self.long_explanation)
        return None


@dataclass(frozen=True)
class OverrideRule:
    """Pinned result for an everyday product paired with an impossible outcome."""

    anchor: str = "coffee"
    outcomes: tuple[str, ...] = ("immortal", "live forever")
    confidence: int = 94
    explanation: str = (
        "The headline combines a common everyday product with an impossible outcome (immortality). "
        "Such claims strongly match patterns of misleading or sensational content."
    )

    def applies(self, text: str) -> bool:
        return self.anchor in text and any(outcome in text for outcome in self.outcomes)


@dataclass(frozen=True)
class DecisionPolicy:
    fake_threshold: float = 3.5
    trust_threshold: float = 0.0
    fake_base: float = 70.0
    fake_step: float = 5.0
    fake_cap: float = 95.0
    trust_base: float = 65.0
    trust_step: float = 6.0
    trust_cap: float = 92.0
    borderline_base: float = 65.0
    borderline_step: float = 5.0
    borderline_explanation: str = (
        "Some signals suggest sensationalism, but the evidence is mixed, "
        "so the classification is less certain."
    )
    default_explanation: str = (
        "The headline does not strongly match typical patterns of either clickbait or neutral "
        "reporting, so the system estimated its credibility based on general tone and structure."
    )
    empty_explanation: str = "No headline text was provided."


IMPOSSIBLE_CLAIMS = KeywordSignal(
    category=SignalCategory.IMPOSSIBLE_CLAIM,
    keywords=(
        "immortal",
        "immortality",
        "live forever",
        "cure cancer",
        "cures all diseases",
        "100% guarantee",
        "time travel",
        "teleportation",
        "resurrect the dead",
    ),
    weight=3.0,
    target=ScoreTarget.FAKE,
    explanation=(
        "The headline mentions outcomes that are biologically or physically impossible "
        "(e.g., immortality or total cures)."
    ),
)

CLICKBAIT_PHRASES = KeywordSignal(
    category=SignalCategory.CLICKBAIT,
    keywords=(
        "you won't believe",
        "shocking",
        "this will change your life",
        "what happens next",
        "goes viral",
        "mind-blowing",
        "unbelievable",
        "blows your mind",
        "top secret",
        "hidden truth",
    ),
    weight=3.0,
    target=ScoreTarget.FAKE,
    explanation="It uses strong clickbait phrases often associated with misleading headlines.",
)

SENSATIONAL_WORDS = KeywordSignal(
    category=SignalCategory.SENSATIONAL,
    keywords=("miracle", "outrageous", "explosive", "insane", "crazy", "jaw-dropping", "scandal", "exposed"),
    weight=2.0,
    target=ScoreTarget.FAKE,
    explanation="The language is highly emotional or sensational, which is typical of misleading content.",
)

ABSOLUTE_LANGUAGE = KeywordSignal(
    category=SignalCategory.ABSOLUTE_LANGUAGE,
    keywords=("never", "always", "everyone", "no one", "proves once and for all"),
    weight=1.5,
    target=ScoreTarget.FAKE,
    explanation="Absolute language is used, which can signal overconfident or exaggerated claims.",
)

LISTICLE_PATTERNS = KeywordSignal(
    category=SignalCategory.LISTICLE,
    keywords=("reasons why", "things you need to know", "tips to"),
    weight=1.0,
    target=ScoreTarget.FAKE,
    explanation="The headline resembles a listicle pattern, which is often used in clickbait formats.",
)

TRUSTWORTHY_CUES = KeywordSignal(
    category=SignalCategory.TRUSTWORTHY_CUE,
    keywords=(
        "according to",
        "researchers at",
        "study published in",
        "report from",
        "official data",
        "peer-reviewed",
        "university of",
        "in a journal",
    ),
    weight=2.0,
    target=ScoreTarget.TRUST,
    explanation="The headline references sources or research, which is more typical of balanced reporting.",
)

RESEARCH_MENTION = WholeWordSignal(
    category=SignalCategory.RESEARCH_MENTION,
    words=("study", "research", "scientists"),
    weight=1.0,
    target=ScoreTarget.TRUST,
    explanation=(
        "The headline mentions research or scientists, which may indicate an attempt to present evidence."
    ),
)


@dataclass(frozen=True)
class RuleSet:
    """Everything the scorer needs; the battery order fixes explanation order."""

    battery: tuple[Detector, ...]
    override: OverrideRule = field(default_factory=OverrideRule)
    decision: DecisionPolicy = field(default_factory=DecisionPolicy)


DEFAULT_BATTERY: tuple[Detector, ...] = (
    IMPOSSIBLE_CLAIMS,
    CLICKBAIT_PHRASES,
    SENSATIONAL_WORDS,
    ABSOLUTE_LANGUAGE,
    LISTICLE_PATTERNS,
    PunctuationSignal(),
    CapitalizationSignal(),
    LengthSignal(),
    TRUSTWORTHY_CUES,
    RESEARCH_MENTION,
)

DEFAULT_RULES = RuleSet(battery=DEFAULT_BATTERY)
