"""
주소 탐지기 (AddressMatcher)

광역 행정구역(시/도) 토큰에서 시작해 시/군/구, 읍/면/동/로/길,
번지, 건물명, 동/층/호까지 이어지는 가장 긴 주소 구간을 찾습니다.

    "서울특별시 강남구 테헤란로 123" → 하나의 ADDRESS 후보
    "경기도 성남시 분당구 정자동 123-4 푸른아파트 101동 202호" → 하나의 ADDRESS 후보

"서울", "경기"처럼 행정 접미사 없는 약칭만 단독으로 나오면 주소로 보지 않습니다.
"""

from __future__ import annotations

import re

from .models import Candidate, ConfidenceTier, PIICategory

# 광역 행정구역 (정식 명칭 우선)
PROVINCES: tuple[str, ...] = (
    "서울특별시",
    "부산광역시",
    "대구광역시",
    "인천광역시",
    "광주광역시",
    "대전광역시",
    "울산광역시",
    "세종특별자치시",
    "경기도",
    "강원특별자치도",
    "강원도",
    "충청북도",
    "충청남도",
    "전북특별자치도",
    "전라북도",
    "전라남도",
    "경상북도",
    "경상남도",
    "제주특별자치도",
    "제주도",
    "서울시",
    "부산시",
    "대구시",
    "인천시",
    "광주시",
    "대전시",
    "울산시",
    "세종시",
    # 약칭 (하위 구성요소가 있어야 주소로 인정)
    "서울",
    "부산",
    "대구",
    "인천",
    "광주",
    "대전",
    "울산",
    "세종",
    "경기",
    "강원",
    "충북",
    "충남",
    "전북",
    "전남",
    "경북",
    "경남",
    "제주",
)

BUILDING_SUFFIXES: tuple[str, ...] = ("아파트", "오피스텔", "빌딩", "타워", "빌라", "맨션")

_GAP = r"[ \t]"

# 주소 구성요소 뒤: 조사나 서술 종결 하나까지만 허용 ("강남구에", "123입니다")
_END = (
    r"(?=(?:입니다|이에요|예요|이고|이며|인데|에서|에|의|은|는|이|가|으로|로|까지|부터|도)?"
    r"(?![가-힣]))"
)


def _build_pattern() -> re.Pattern[str]:
    provinces = "|".join(sorted(PROVINCES, key=len, reverse=True))
    buildings = "|".join(BUILDING_SUFFIXES)

    return re.compile(
        rf"(?<![가-힣])(?P<province>{provinces}){_END}"
        rf"(?P<rest>"
        # 시/군/구 (최대 2단계: 성남시 분당구)
        rf"(?:{_GAP}[가-힣]{{1,5}}?(?:시|군|구){_END}){{0,2}}"
        # 읍/면/동/리/로/길 (도로명 번길 포함: 중앙로12길, 정자일로 95번길)
        rf"(?:{_GAP}[가-힣0-9]{{1,10}}?(?:읍|면|동|리|로|길)(?:\d{{1,4}}번?길)?{_END}){{0,2}}"
        # 번지 (뒤에 "-숫자"가 이어지면 전화/사업자번호의 일부이므로 제외)
        rf"(?:{_GAP}\d{{1,5}}(?:-\d{{1,5}})?(?!-?\d)(?:번지)?{_END})?"
        # 건물명
        rf"(?:{_GAP}[가-힣A-Za-z0-9]{{1,15}}?(?:{buildings}))?"
        # 동/층/호
        rf"(?:{_GAP}\d{{1,4}}동)?(?:{_GAP}\d{{1,3}}층)?(?:{_GAP}\d{{1,5}}호)?"
        rf")"
    )


class AddressMatcher:
    """
    행정구역 기반 주소 탐지기

    상태가 없으므로 여러 스레드에서 동시에 사용해도 안전합니다.
    """

    PATTERN = _build_pattern()

    # 행정 접미사가 붙은 정식 표기 (단독이어도 주소로 인정)
    _FORMAL_SUFFIXES: tuple[str, ...] = ("특별시", "광역시", "특별자치시", "특별자치도", "도", "시")

    def detect(self, text: str) -> list[Candidate]:
        """
        주소 후보 탐지

        Args:
            text: 원본 텍스트

        Returns:
            ADDRESS 후보 목록 (HIGH 신뢰도)
        """
        if not text:
            return []

        candidates: list[Candidate] = []

        for match in self.PATTERN.finditer(text):
            province = match.group("province")
            rest = match.group("rest")

            if not rest and not province.endswith(self._FORMAL_SUFFIXES):
                continue

            candidates.append(
                Candidate(
                    category=PIICategory.ADDRESS,
                    start=match.start(),
                    end=match.end(),
                    matched_text=match.group(),
                    confidence=ConfidenceTier.HIGH,
                    detector="address",
                )
            )

        return candidates
