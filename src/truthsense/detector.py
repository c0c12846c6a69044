"""
Rule-based headline scorer.

It does not verify facts against the real world. It looks for impossible or
exaggerated claims, clickbait phrasing, emotional tone and formatting, and
for neutral, source-based wording, then turns the weighted signals into a
label, a bounded confidence and an explanation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .models import ClassificationResult, HeadlineAnalysis
from .rules import DEFAULT_RULES, NormalizedHeadline, RuleSet, ScoreTarget, SignalHit

logger = logging.getLogger(__name__)


def normalize(headline: str) -> NormalizedHeadline | None:
    """Trim and lower-case a headline; None when nothing is left."""
    original = headline.strip()
    if not original:
        return None
    return NormalizedHeadline(original=original, text=original.lower(), words=tuple(original.split()))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ScoreCard:
    hits: tuple[SignalHit, ...]
    fake_score: float
    trust_score: float

    @property
    def total(self) -> float:
        return self.fake_score - self.trust_score


class HeadlineScorer:
    """Classify headlines against a fixed RuleSet."""

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self.rules = rules

    def classify(self, headline: str) -> ClassificationResult:
        return self.analyze(headline).result

    def analyze(self, headline: str) -> HeadlineAnalysis:
        decision = self.rules.decision
        normalized = normalize(headline)
        if normalized is None:
            return HeadlineAnalysis(
                result=ClassificationResult(label="fake", confidence=0, explanation=decision.empty_explanation),
                branch="empty",
            )

        override = self.rules.override
        if override.applies(normalized.text):
            logger.debug("Override rule matched: %s", normalized.original[:60])
            return HeadlineAnalysis(
                result=ClassificationResult(
                    label="fake",
                    confidence=override.confidence,
                    explanation=override.explanation,
                ),
                branch="override",
            )

        card = self.extract(normalized)
        return self.aggregate(card)

    def extract(self, headline: NormalizedHeadline) -> ScoreCard:
        hits = []
        fake_score = 0.0
        trust_score = 0.0
        for detector in self.rules.battery:
            hit = detector.evaluate(headline)
            if hit is None:
                continue
            hits.append(hit)
            if hit.target is ScoreTarget.FAKE:
                fake_score += hit.weight
            else:
                trust_score += hit.weight
        return ScoreCard(hits=tuple(hits), fake_score=fake_score, trust_score=trust_score)

    def aggregate(self, card: ScoreCard) -> HeadlineAnalysis:
        decision = self.rules.decision
        reasons = [hit.reason for hit in card.hits]
        total = card.total

        if total >= decision.fake_threshold:
            label = "fake"
            branch = "fake"
            confidence = min(decision.fake_cap, decision.fake_base + card.fake_score * decision.fake_step)
        elif total <= decision.trust_threshold:
            label = "trustworthy"
            branch = "trustworthy"
            confidence = min(decision.trust_cap, decision.trust_base + card.trust_score * decision.trust_step)
        else:
            # borderline band leans fake whatever the balance of signals
            label = "fake"
            branch = "borderline"
            confidence = decision.borderline_base + total * decision.borderline_step
            reasons.append(decision.borderline_explanation)

        explanation = " ".join(reasons) if reasons else decision.default_explanation
        confidence_pct = max(0, min(100, round_half_up(confidence)))
        logger.debug(
            "Scored headline: branch=%s fake=%.1f trust=%.1f confidence=%d",
            branch,
            card.fake_score,
            card.trust_score,
            confidence_pct,
        )
        return HeadlineAnalysis(
            result=ClassificationResult(label=label, confidence=confidence_pct, explanation=explanation),
            branch=branch,
            fake_score=card.fake_score,
            trust_score=card.trust_score,
            total_score=total,
            signals=tuple(hit.category.value for hit in card.hits),
        )


_default_scorer = HeadlineScorer()


def classify(headline: str, rules: RuleSet = DEFAULT_RULES) -> ClassificationResult:
    scorer = _default_scorer if rules is DEFAULT_RULES else HeadlineScorer(rules)
    return scorer.classify(headline)


def analyze(headline: str, rules: RuleSet = DEFAULT_RULES) -> HeadlineAnalysis:
    scorer = _default_scorer if rules is DEFAULT_RULES else HeadlineScorer(rules)
    return scorer.analyze(headline)
