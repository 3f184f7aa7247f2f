"""
인명 후보 탐지기 (NameCandidateDetector)

성씨 사전 + 문맥 휴리스틱으로 한국어 인명 후보를 찾습니다.

전략별 신뢰도:
    HIGH   - 호칭/직함 앞 ("김철수 부장님", "박민수씨", "이영희 PD가")
    HIGH   - 자기소개 ("제 이름은 김철수입니다", "저는 이영희예요", "안녕하세요, 김철수입니다")
    MEDIUM - 메타데이터 줄 (이름만 있는 줄, "14:05 김철수")
    LOW    - 조사 앞 ("김철수가", "이영희는") - 기본 비활성

이름 형태: 성씨 1음절 + 1~2음절 (총 2~3음절).
화이트리스트 단어와 일치하는 후보는 모든 전략에서 제외됩니다.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ....lib.logger import get_logger
from .models import Candidate, ConfidenceTier, PIICategory

logger = get_logger(__name__)


# ========================================
# 사전
# ========================================
# 빈도 상위 성씨
DEFAULT_SURNAMES: tuple[str, ...] = (
    "김", "이", "박", "최", "정", "강", "조", "윤", "장", "임",
    "한", "오", "서", "신", "권", "황", "안", "송", "류", "전",
    "홍", "고", "문", "양", "손", "배", "백", "허", "유", "남",
    "심", "노", "하", "곽", "성", "차", "주", "우", "구", "민",
    "진", "나", "지", "엄", "채", "원", "천", "방", "공", "현",
)  # fmt: skip

# 호칭/직함 (이름 바로 뒤)
DEFAULT_TITLES: tuple[str, ...] = (
    "님",
    "씨",
    "선생님",
    "선생",
    "교수님",
    "교수",
    "박사님",
    "박사",
    "사장님",
    "사장",
    "대표님",
    "대표",
    "회장님",
    "회장",
    "이사님",
    "이사",
    "전무님",
    "상무님",
    "부장님",
    "부장",
    "차장님",
    "차장",
    "과장님",
    "과장",
    "대리님",
    "대리",
    "주임님",
    "사원님",
    "팀장님",
    "팀장",
    "실장님",
    "실장",
    "원장님",
    "원장",
    "매니저님",
    "매니저",
    "작가님",
    "기자님",
    "감독님",
    "변호사님",
    "부회장님",
    "부사장님",
    "고문님",
    "앵커님",
    "PD님",
    "CP님",
)

# 님 없이 쓰는 직함 (뒤에 조사/서술 종결까지만 허용: "이영희 PD가", "김철수 작가.")
BARE_TITLES: tuple[str, ...] = (
    "주임",
    "사원",
    "전무",
    "상무",
    "부회장",
    "부사장",
    "감사",
    "고문",
    "PD",
    "CP",
    "작가",
    "기자",
    "앵커",
    "감독",
    "교사",
    "의사",
    "간호사",
    "변호사",
    "검사",
    "판사",
)

# 이름에 붙여 쓰는 한 음절 호칭 ("김철수군", "이영희양")
ATTACHED_TITLES: tuple[str, ...] = ("군", "양")

# 이름 자체를 밝히는 도입구 (서술 종결 없이도 인정)
NAMING_PHRASES: tuple[str, ...] = ("제 이름은", "내 이름은", "이름은", "성함은")

# 인사 뒤 자기소개 ("안녕하세요, 김철수입니다"), 뒤에 쉼표/마침표 하나 허용
GREETING_PHRASES: tuple[str, ...] = ("안녕하세요", "안녕하십니까", "처음 뵙겠습니다")

# 화자 자신을 가리키는 도입구 (서술 종결이 뒤따라야 인정)
SELF_PHRASES: tuple[str, ...] = ("저는", "나는", "제가", "본인은")

# 서술 종결 (이름 뒤에 붙는 계사)
COPULAS: tuple[str, ...] = ("입니다", "이에요", "예요", "이라고", "라고", "이고", "이며", "인데")

# 조사 (LOW 전략, 오탐 제외 시 어미 분리에도 사용)
PARTICLES: tuple[str, ...] = (
    "께서",
    "에게",
    "한테",
    "이랑",
    "랑",
    "이",
    "가",
    "은",
    "는",
    "을",
    "를",
    "와",
    "과",
    "도",
    "의",
    "에",
)

_TRAILING_SYLLABLES = frozenset(p for p in PARTICLES if len(p) == 1) | {"요", "님", "씨"}


def _alternation(tokens: Iterable[str]) -> str:
    """긴 토큰 우선 정규식 대안 생성"""
    return "|".join(re.escape(t) for t in sorted(set(tokens) - {""}, key=len, reverse=True))


@dataclass(frozen=True)
class NameStrategy:
    """
    이름 탐지 전략

    Attributes:
        label: 로그용 라벨 (예: "names.honorific")
        confidence: 이 전략이 만드는 후보의 신뢰도
        detect: 텍스트 → 후보 목록 함수
    """

    label: str
    confidence: ConfidenceTier
    detect: Callable[[str], list[Candidate]]


class NameCandidateDetector:
    """
    인명 후보 탐지기

    사전과 정규식은 생성 시 고정되며 이후 변경되지 않습니다.
    화이트리스트를 바꾸려면 새 인스턴스를 만드세요.

    사용 예시:
        detector = NameCandidateDetector(whitelist={"정말"})
        candidates = detector.detect("김철수 부장님이 오셨어요")
        # [Candidate(PERSON_NAME, 0, 3, "김철수", HIGH)]
    """

    def __init__(
        self,
        whitelist: Iterable[str] | None = None,
        surnames: Iterable[str] | None = None,
        titles: Iterable[str] | None = None,
    ):
        """
        Args:
            whitelist: 이름에서 제외할 단어
            surnames: 성씨 사전 (None이면 기본 사전)
            titles: 호칭/직함 목록 (None이면 기본 목록)
        """
        self._whitelist: frozenset[str] = frozenset(whitelist or ())
        self._surnames: tuple[str, ...] = tuple(dict.fromkeys(surnames or DEFAULT_SURNAMES))
        self._titles: frozenset[str] = frozenset(titles or DEFAULT_TITLES)
        self._guarded_titles: frozenset[str] = (
            self._titles | frozenset(BARE_TITLES) | frozenset(ATTACHED_TITLES)
        )

        name = rf"(?P<name>[{''.join(self._surnames)}][가-힣]{{1,2}})"
        title_end = rf"(?:{_alternation(PARTICLES + COPULAS)})?(?![가-힣])"
        title = (
            rf"[ \t]?(?:{_alternation(self._titles)})"
            rf"|[ \t]?(?:{_alternation(BARE_TITLES)}){title_end}"
            rf"|(?:{_alternation(ATTACHED_TITLES)}){title_end}"
        )
        greeting = rf"(?:{_alternation(GREETING_PHRASES)})[,.!]?"

        self._honorific_pattern = re.compile(rf"(?<![가-힣]){name}(?={title})")
        self._naming_pattern = re.compile(
            rf"(?<![가-힣])(?:{_alternation(NAMING_PHRASES)}|{greeting})[ \t]*{name}"
            rf"(?:(?={_alternation(COPULAS)})|(?![가-힣]))"
        )
        self._self_intro_pattern = re.compile(
            rf"(?<![가-힣])(?:{_alternation(SELF_PHRASES)})[ \t]*{name}(?={_alternation(COPULAS)})"
        )
        self._metadata_line_pattern = re.compile(rf"^[ \t]*{name}[ \t]*$", re.MULTILINE)
        self._timestamp_pattern = re.compile(
            rf"(?<!\d)\d{{1,2}}:\d{{2}}(?::\d{{2}})?[ \t]+{name}(?![가-힣])"
        )
        self._particle_pattern = re.compile(
            rf"(?<![가-힣]){name}(?=(?:{_alternation(PARTICLES)})(?![가-힣]))"
        )

        self._strategies: tuple[NameStrategy, ...] = (
            NameStrategy("names.honorific", ConfidenceTier.HIGH, self._detect_honorific),
            NameStrategy("names.introduction", ConfidenceTier.HIGH, self._detect_introduction),
            NameStrategy("names.metadata", ConfidenceTier.MEDIUM, self._detect_metadata),
            NameStrategy("names.particle", ConfidenceTier.LOW, self._detect_particle),
        )

    @property
    def whitelist(self) -> frozenset[str]:
        return self._whitelist

    @property
    def surnames(self) -> tuple[str, ...]:
        return self._surnames

    def strategies(
        self, min_confidence: ConfidenceTier = ConfidenceTier.LOW
    ) -> tuple[NameStrategy, ...]:
        """min_confidence 이상의 후보를 만드는 전략만 반환"""
        return tuple(s for s in self._strategies if s.confidence.at_least(min_confidence))

    def detect(
        self, text: str, min_confidence: ConfidenceTier = ConfidenceTier.LOW
    ) -> list[Candidate]:
        """
        모든 전략 실행 후 중복 병합

        Args:
            text: 원본 텍스트
            min_confidence: 최소 신뢰도

        Returns:
            PERSON_NAME 후보 목록 (동일 구간은 최고 신뢰도 하나만)
        """
        if not text:
            return []

        candidates: list[Candidate] = []
        for strategy in self.strategies(min_confidence):
            candidates.extend(strategy.detect(text))
        return self.merge(candidates)

    @staticmethod
    def merge(candidates: Iterable[Candidate]) -> list[Candidate]:
        """동일 (start, end) 후보를 최고 신뢰도 하나로 병합"""
        best: dict[tuple[int, int], Candidate] = {}
        for candidate in candidates:
            key = (candidate.start, candidate.end)
            current = best.get(key)
            if current is None or candidate.confidence.rank > current.confidence.rank:
                best[key] = candidate
        return sorted(best.values(), key=lambda c: (c.start, c.end))

    def is_excluded(self, name: str) -> bool:
        """
        화이트리스트 제외 여부

        어미에 조사나 호칭이 붙은 형태("서울에", "오늘도", "정말요", "고객님")도 본체로 확인합니다.
        """
        if name in self._whitelist:
            return True
        return name[-1] in _TRAILING_SYLLABLES and name[:-1] in self._whitelist

    # ========================================
    # 전략
    # ========================================
    def _collect(
        self,
        pattern: re.Pattern[str],
        text: str,
        confidence: ConfidenceTier,
        label: str,
        reject: Callable[[str], bool] | None = None,
    ) -> list[Candidate]:
        candidates: list[Candidate] = []

        for match in pattern.finditer(text):
            value = match.group("name")
            if self.is_excluded(value) or (reject is not None and reject(value)):
                continue
            candidates.append(
                Candidate(
                    category=PIICategory.PERSON_NAME,
                    start=match.start("name"),
                    end=match.end("name"),
                    matched_text=value,
                    confidence=confidence,
                    detector=label,
                )
            )

        return candidates

    def _is_title_only(self, name: str) -> bool:
        """성씨 뒤가 직함 자체인 경우 ("김부장" + "님")"""
        return name[1:] in self._guarded_titles

    def _detect_honorific(self, text: str) -> list[Candidate]:
        return self._collect(
            self._honorific_pattern,
            text,
            ConfidenceTier.HIGH,
            "names.honorific",
            reject=self._is_title_only,
        )

    def _detect_introduction(self, text: str) -> list[Candidate]:
        return self._collect(
            self._naming_pattern, text, ConfidenceTier.HIGH, "names.introduction"
        ) + self._collect(
            self._self_intro_pattern, text, ConfidenceTier.HIGH, "names.introduction"
        )

    def _detect_metadata(self, text: str) -> list[Candidate]:
        return self._collect(
            self._metadata_line_pattern, text, ConfidenceTier.MEDIUM, "names.metadata"
        ) + self._collect(self._timestamp_pattern, text, ConfidenceTier.MEDIUM, "names.metadata")

    def _detect_particle(self, text: str) -> list[Candidate]:
        return self._collect(self._particle_pattern, text, ConfidenceTier.LOW, "names.particle")


def build_name_detector(
    whitelist: Iterable[str] | None = None,
    extra_surnames: Iterable[str] = (),
    extra_titles: Iterable[str] = (),
) -> NameCandidateDetector:
    """기본 사전에 설정 추가분을 합쳐 탐지기 생성"""
    surnames = tuple(DEFAULT_SURNAMES) + tuple(extra_surnames)
    titles = tuple(DEFAULT_TITLES) + tuple(extra_titles)
    detector = NameCandidateDetector(whitelist=whitelist, surnames=surnames, titles=titles)

    logger.debug(
        "이름 탐지기 생성",
        extra={
            "surnames": len(detector.surnames),
            "titles": len(titles),
            "whitelist_size": len(detector.whitelist),
        },
    )
    return detector
