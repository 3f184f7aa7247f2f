"""
SpanResolver 단위 테스트

우선순위/신뢰도/길이 기반 겹침 해소 검증.
"""

import pytest

from pii_masking.modules.core.privacy import (
    Candidate,
    ConfidenceTier,
    PIICategory,
    SpanResolver,
)


def _candidate(
    category: PIICategory,
    start: int,
    end: int,
    confidence: ConfidenceTier = ConfidenceTier.HIGH,
) -> Candidate:
    return Candidate(category, start, end, "x" * (end - start), confidence)


@pytest.fixture
def resolver() -> SpanResolver:
    return SpanResolver()


class TestSpanResolver:
    """겹침 해소 테스트"""

    def test_higher_priority_category_wins(self, resolver: SpanResolver) -> None:
        """카드번호가 계좌번호보다 먼저 확정"""
        card = _candidate(PIICategory.CARD, 0, 19)
        account = _candidate(PIICategory.BANK_ACCOUNT, 0, 14)

        spans = resolver.resolve([account, card])

        assert [(s.category, s.start, s.end) for s in spans] == [(PIICategory.CARD, 0, 19)]

    def test_structured_beats_name(self, resolver: SpanResolver) -> None:
        phone = _candidate(PIICategory.PHONE, 5, 18)
        name = _candidate(PIICategory.PERSON_NAME, 3, 6)

        spans = resolver.resolve([name, phone])

        assert [s.category for s in spans] == [PIICategory.PHONE]

    def test_higher_tier_wins_within_category(self, resolver: SpanResolver) -> None:
        low = _candidate(PIICategory.PERSON_NAME, 0, 3, ConfidenceTier.LOW)
        high = _candidate(PIICategory.PERSON_NAME, 1, 4, ConfidenceTier.HIGH)

        [span] = resolver.resolve([low, high])

        assert (span.start, span.end, span.confidence) == (1, 4, ConfidenceTier.HIGH)

    def test_longest_wins_at_same_start(self, resolver: SpanResolver) -> None:
        short = _candidate(PIICategory.ADDRESS, 0, 5)
        long = _candidate(PIICategory.ADDRESS, 0, 12)

        [span] = resolver.resolve([short, long])

        assert span.end == 12

    def test_adjacent_spans_do_not_overlap(self, resolver: SpanResolver) -> None:
        """[start, end) 구간이므로 맞닿은 구간은 모두 확정"""
        first = _candidate(PIICategory.EMAIL, 0, 5)
        second = _candidate(PIICategory.PHONE, 5, 10)

        assert len(resolver.resolve([first, second])) == 2

    def test_output_sorted_and_disjoint(self, resolver: SpanResolver) -> None:
        candidates = [
            _candidate(PIICategory.PERSON_NAME, 40, 43, ConfidenceTier.MEDIUM),
            _candidate(PIICategory.ADDRESS, 20, 35),
            _candidate(PIICategory.PHONE, 0, 13),
            _candidate(PIICategory.BANK_ACCOUNT, 8, 22),
            _candidate(PIICategory.PERSON_NAME, 33, 36),
        ]

        spans = resolver.resolve(candidates)

        assert [(s.start, s.end) for s in spans] == [(0, 13), (20, 35), (40, 43)]
        for left, right in zip(spans, spans[1:]):
            assert left.end <= right.start

    def test_empty(self, resolver: SpanResolver) -> None:
        assert resolver.resolve([]) == []
