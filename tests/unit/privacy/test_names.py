"""
NameCandidateDetector 단위 테스트

성씨 사전 + 문맥 휴리스틱 기반 이름 후보 탐지 검증.

테스트 케이스:
1. 호칭/직함 (HIGH)
2. 자기소개 (HIGH)
3. 메타데이터 줄/타임스탬프 (MEDIUM)
4. 조사 (LOW, 선택)
5. 화이트리스트 및 직함 단독 제외
6. 중복 병합
"""

import pytest

from pii_masking.modules.core.privacy import (
    DEFAULT_WHITELIST,
    Candidate,
    ConfidenceTier,
    NameCandidateDetector,
    PIICategory,
    build_name_detector,
)


@pytest.fixture(scope="module")
def detector() -> NameCandidateDetector:
    """기본 화이트리스트 탐지기"""
    return NameCandidateDetector(whitelist=DEFAULT_WHITELIST)


def _names(detector: NameCandidateDetector, text: str, tier: ConfidenceTier) -> list[tuple[str, str]]:
    return [(c.matched_text, c.confidence.value) for c in detector.detect(text, tier)]


class TestHonorificStrategy:
    """호칭/직함 전략 테스트"""

    def test_name_before_title(self, detector: NameCandidateDetector) -> None:
        text = "김철수 부장님이 오셨어요"
        [candidate] = detector.detect(text, ConfidenceTier.HIGH)

        assert candidate.matched_text == "김철수"
        assert (candidate.start, candidate.end) == (0, 3)
        assert candidate.category == PIICategory.PERSON_NAME
        assert candidate.confidence == ConfidenceTier.HIGH
        assert candidate.detector == "names.honorific"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("박민수씨 안녕하세요", "박민수"),
            ("이영희 선생님께 여쭤봤어요", "이영희"),
            ("정우성님 감사합니다", "정우성"),
        ],
    )
    def test_attached_and_spaced_titles(
        self, detector: NameCandidateDetector, text: str, expected: str
    ) -> None:
        assert _names(detector, text, ConfidenceTier.HIGH) == [(expected, "high")]

    def test_title_only_is_not_a_name(self, detector: NameCandidateDetector) -> None:
        """성씨 + 직함만 있는 경우 ("김부장님")"""
        assert detector.detect("김부장님 오셨어요", ConfidenceTier.HIGH) == []

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("이영희 PD가 왔다", "이영희"),
            ("김철수 작가가 말했다", "김철수"),
            ("김민수 의사가", "김민수"),
            ("이영희 PD.", "이영희"),
            ("김철수 작가.", "김철수"),
            ("박민수 변호사입니다", "박민수"),
            ("최지훈군이 왔어요", "최지훈"),
        ],
    )
    def test_bare_titles(self, detector: NameCandidateDetector, text: str, expected: str) -> None:
        assert _names(detector, text, ConfidenceTier.HIGH) == [(expected, "high")]

    @pytest.mark.parametrize(
        "text",
        ["정말 감사합니다", "김작가가 말했다", "이번 검사에서", "지난 검사가 있었다", "조양호텔"],
    )
    def test_bare_title_must_end_the_word(self, detector: NameCandidateDetector, text: str) -> None:
        assert detector.detect(text, ConfidenceTier.HIGH) == []

    @pytest.mark.parametrize("text", ["고객님 안녕하세요", "이사님께 여쭤볼게요", "박사님 말씀대로"])
    def test_whitelisted_words(self, detector: NameCandidateDetector, text: str) -> None:
        assert detector.detect(text, ConfidenceTier.HIGH) == []


class TestIntroductionStrategy:
    """자기소개 전략 테스트"""

    def test_naming_phrase_with_copula(self, detector: NameCandidateDetector) -> None:
        text = "제 이름은 김철수입니다"
        [candidate] = detector.detect(text, ConfidenceTier.HIGH)

        assert candidate.matched_text == "김철수"
        assert (candidate.start, candidate.end) == (6, 9)
        assert candidate.confidence == ConfidenceTier.HIGH

    def test_naming_phrase_without_copula(self, detector: NameCandidateDetector) -> None:
        assert _names(detector, "제 이름은 최민호, 서른 살이에요", ConfidenceTier.HIGH) == [
            ("최민호", "high")
        ]

    def test_self_phrase_requires_copula(self, detector: NameCandidateDetector) -> None:
        assert _names(detector, "저는 이영희예요", ConfidenceTier.HIGH) == [("이영희", "high")]
        assert detector.detect("저는 정말 좋았어요", ConfidenceTier.HIGH) == []
        assert detector.detect("저는 학생입니다", ConfidenceTier.HIGH) == []

    @pytest.mark.parametrize(
        "text",
        [
            "안녕하세요 김철수입니다",
            "안녕하세요, 김철수입니다.",
            "안녕하십니까. 김철수입니다",
            "처음 뵙겠습니다 김철수입니다",
            "안녕하세요 김철수, 오늘 잘 부탁드려요",
        ],
    )
    def test_greeting_introduction(self, detector: NameCandidateDetector, text: str) -> None:
        assert _names(detector, text, ConfidenceTier.HIGH) == [("김철수", "high")]

    @pytest.mark.parametrize(
        "text",
        ["안녕하세요 반갑습니다", "안녕하세요 고객님", "안녕하세요, 오늘은 날씨가 좋네요", "안녕하세요 지금부터"],
    )
    def test_greeting_without_name(self, detector: NameCandidateDetector, text: str) -> None:
        assert detector.detect(text, ConfidenceTier.HIGH) == []

    def test_bare_name_with_copula_has_no_cue(self, detector: NameCandidateDetector) -> None:
        """문맥 단서 없는 "김철수입니다"는 어떤 등급으로도 탐지되지 않음"""
        assert detector.detect("김철수입니다", ConfidenceTier.LOW) == []


class TestMetadataStrategy:
    """메타데이터 줄 전략 테스트"""

    def test_name_only_line(self, detector: NameCandidateDetector) -> None:
        text = "인터뷰 녹취록\n김철수\n안녕하세요"
        [candidate] = detector.detect(text, ConfidenceTier.MEDIUM)

        assert (candidate.start, candidate.end) == (8, 11)
        assert candidate.confidence == ConfidenceTier.MEDIUM
        assert candidate.detector == "names.metadata"

    def test_name_after_timestamp(self, detector: NameCandidateDetector) -> None:
        assert _names(detector, "14:05 김철수: 네 맞습니다", ConfidenceTier.MEDIUM) == [
            ("김철수", "medium")
        ]

    def test_not_reported_at_high(self, detector: NameCandidateDetector) -> None:
        assert detector.detect("김철수\n", ConfidenceTier.HIGH) == []

    @pytest.mark.parametrize("line", ["정말", "정말요", "안녕", "오늘도"])
    def test_whitelisted_short_lines(self, detector: NameCandidateDetector, line: str) -> None:
        """대화 조각 줄은 이름으로 보지 않음"""
        assert detector.detect(f"{line}\n", ConfidenceTier.MEDIUM) == []


class TestParticleStrategy:
    """조사 전략 (LOW) 테스트"""

    def test_low_only_when_requested(self, detector: NameCandidateDetector) -> None:
        text = "그때 김철수가 말했어요"

        assert detector.detect(text, ConfidenceTier.MEDIUM) == []
        assert _names(detector, text, ConfidenceTier.LOW) == [("김철수", "low")]

    def test_particle_must_end_the_word(self, detector: NameCandidateDetector) -> None:
        assert detector.detect("이상하게 느껴졌어요", ConfidenceTier.LOW) == []


class TestDetectorConfiguration:
    """전략 구성/병합 테스트"""

    def test_strategies_by_min_confidence(self, detector: NameCandidateDetector) -> None:
        labels = [s.label for s in detector.strategies(ConfidenceTier.MEDIUM)]
        assert labels == ["names.honorific", "names.introduction", "names.metadata"]

        assert len(detector.strategies(ConfidenceTier.LOW)) == 4
        assert all(s.confidence == ConfidenceTier.HIGH for s in detector.strategies(ConfidenceTier.HIGH))

    def test_merge_keeps_highest_tier(self) -> None:
        low = Candidate(PIICategory.PERSON_NAME, 0, 3, "김철수", ConfidenceTier.LOW)
        high = Candidate(PIICategory.PERSON_NAME, 0, 3, "김철수", ConfidenceTier.HIGH)
        other = Candidate(PIICategory.PERSON_NAME, 10, 13, "이영희", ConfidenceTier.MEDIUM)

        merged = NameCandidateDetector.merge([other, low, high])

        assert merged == [high, other]

    def test_extra_surname(self) -> None:
        detector = build_name_detector(whitelist=DEFAULT_WHITELIST, extra_surnames=["탁"])
        assert _names(detector, "탁재훈씨 오셨어요", ConfidenceTier.HIGH) == [("탁재훈", "high")]

    def test_empty_extra_title_ignored(self) -> None:
        """빈 직함이 모든 성씨+음절 토큰을 이름으로 만들지 않음"""
        detector = build_name_detector(whitelist=DEFAULT_WHITELIST, extra_titles=[""])
        assert detector.detect("김철수 왔어요", ConfidenceTier.HIGH) == []

    def test_whitelist_is_snapshot(self) -> None:
        words = {"정말"}
        detector = NameCandidateDetector(whitelist=words)
        words.add("김철수")

        assert detector.is_excluded("정말")
        assert not detector.is_excluded("김철수")

    def test_empty_text(self, detector: NameCandidateDetector) -> None:
        assert detector.detect("") == []
