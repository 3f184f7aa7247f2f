"""
겹침 해소기 (SpanResolver)

여러 탐지기가 만든 후보를 겹치지 않는 확정 스팬 집합으로 줄입니다.

규칙:
1. 카테고리 우선순위가 높은 후보가 먼저 자리를 차지합니다.
2. 같은 카테고리 안에서는 신뢰도 → 시작 위치 → 길이(긴 것) 순.
3. 이미 확정된 구간과 한 글자라도 겹치면 버립니다.

결과는 시작 위치 오름차순입니다.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable

from ....lib.logger import get_logger
from .models import Candidate, ResolvedSpan

logger = get_logger(__name__)


def _sort_key(candidate: Candidate) -> tuple[int, int, int, int]:
    return (
        candidate.category.priority,
        -candidate.confidence.rank,
        candidate.start,
        -candidate.length,
    )


class SpanResolver:
    """
    우선순위 기반 그리디 겹침 해소

    상태가 없으므로 하나의 인스턴스를 공유해도 됩니다.
    """

    def resolve(self, candidates: Iterable[Candidate]) -> list[ResolvedSpan]:
        """
        후보 → 겹치지 않는 확정 스팬

        Args:
            candidates: 모든 탐지기의 후보 (순서 무관)

        Returns:
            시작 위치 오름차순의 확정 스팬 목록
        """
        ordered = sorted(candidates, key=_sort_key)

        # 확정 구간 (start 오름차순, 서로 겹치지 않으므로 end도 오름차순)
        starts: list[int] = []
        accepted: list[Candidate] = []

        for candidate in ordered:
            index = bisect_right(starts, candidate.start)

            if index > 0 and accepted[index - 1].end > candidate.start:
                continue
            if index < len(accepted) and accepted[index].start < candidate.end:
                continue

            starts.insert(index, candidate.start)
            accepted.insert(index, candidate)

        dropped = len(ordered) - len(accepted)
        if dropped:
            logger.debug(
                "겹치는 후보 제외",
                extra={"candidates": len(ordered), "accepted": len(accepted), "dropped": dropped},
            )

        return [ResolvedSpan.from_candidate(c) for c in accepted]
