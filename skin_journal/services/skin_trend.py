# skin_trend.py
"""
[피부 기록 추이 분석]
저장된 피부 기록(분류 라벨 + 신뢰도)을 바탕으로
최근 두 기록 사이의 변화(개선/악화/유지)를 판정하고,
그래프/캘린더 화면용 데이터를 만들어 주는 모듈입니다.
"""

import re
import logging
from datetime import date

from .config import NO_ISSUES_LABEL, TREND_TOLERANCE, CHART_POINT_LIMIT
from .models import ChartDataPoint, TrendVerdict

# 로깅 설정
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# 예: "Prediction: Acne - Confidence: 75.5%"
_PREDICTION_PATTERN = re.compile(
    r"^\s*(?:prediction:\s*)?(?P<label>.*?)\s+-\s+confidence:\s*(?P<value>[-+]?\d*\.?\d+)\s*%?\s*$",
    re.IGNORECASE,
)
_PREFIX_PATTERN = re.compile(r"^\s*prediction:\s*", re.IGNORECASE)


def _is_no_issues(label: str) -> bool:
    return label.strip().lower() == NO_ISSUES_LABEL


def sort_entries(entries: list) -> list:
    """시간순(오래된 것 먼저) 정렬"""
    return sorted(entries, key=lambda e: e.timestamp)


# ==============================================================================
# 1. 최근 두 기록 비교 (Trend)
# ==============================================================================

def compare_trend(entries: list) -> TrendVerdict:
    """
    최근 두 기록을 비교하여 피부 상태 변화를 판정합니다.

    판정 순서:
        1. 이전 != 'no issues' 이고 최신 == 'no issues' -> 개선
        2. 이전 == 'no issues' 이고 최신 != 'no issues' -> 악화
        3. 신뢰도 차이 < 0.05 -> 유지, 최신 신뢰도가 더 낮으면 개선, 아니면 악화
    """
    if len(entries) < 2:
        return TrendVerdict.NOT_ENOUGH_DATA

    ordered = sort_entries(entries)
    previous, latest = ordered[-2], ordered[-1]

    prev_normal = _is_no_issues(previous.label)
    latest_normal = _is_no_issues(latest.label)

    if not prev_normal and latest_normal:
        return TrendVerdict.IMPROVED
    if prev_normal and not latest_normal:
        return TrendVerdict.WORSENED

    if abs(latest.confidence - previous.confidence) < TREND_TOLERANCE:
        return TrendVerdict.STAYED_THE_SAME
    if latest.confidence < previous.confidence:
        return TrendVerdict.IMPROVED
    return TrendVerdict.WORSENED


# ==============================================================================
# 2. 분류기 출력 문자열 해석
# ==============================================================================

def parse_prediction_description(text: str) -> tuple:
    """
    "Prediction: Acne - Confidence: 75.5%" -> ("Acne", 0.755)
    형식이 맞지 않으면 (접두어를 뗀 원문, 0.0) 을 반환합니다.
    """
    text = text or ""
    m = _PREDICTION_PATTERN.match(text)
    if m:
        return m.group("label").strip(), float(m.group("value")) / 100.0

    logger.warning(f"⚠️ 예측 문자열 형식이 예상과 다릅니다: {text!r}")
    return _PREFIX_PATTERN.sub("", text).strip(), 0.0


# ==============================================================================
# 3. 화면용 데이터 (Chart / Calendar)
# ==============================================================================

def build_chart_points(entries: list, limit: int = CHART_POINT_LIMIT) -> list:
    """최근 limit 개의 기록을 오래된 순서로 그래프 포인트로 변환"""
    if limit <= 0:
        return []
    recent = sort_entries(entries)[-limit:]
    return [
        ChartDataPoint(
            timestamp=e.timestamp,
            confidence=e.confidence,
            classification_label=e.label,
        )
        for e in recent
    ]


def entries_for_day(entries: list, day: date) -> list:
    """특정 날짜에 기록된 항목만 시간순으로 반환"""
    return [e for e in sort_entries(entries) if e.timestamp.date() == day]


def latest_two(entries: list) -> tuple:
    """(이전 기록, 최신 기록) - 기록이 부족하면 None 으로 채움"""
    ordered = sort_entries(entries)
    previous = ordered[-2] if len(ordered) >= 2 else None
    latest = ordered[-1] if ordered else None
    return previous, latest
