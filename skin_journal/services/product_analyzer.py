# product_analyzer.py
"""
[제품 성분 분석 담당]
성분표 텍스트(직접 입력 또는 OCR 결과)를 분석하여
현재 피부 상태에 맞는 제품 조언을 생성하는 로직 엔진입니다.

기능 목록:
1. Parsing: 성분표 텍스트 -> 성분 토큰 리스트
2. Matching: 토큰 -> 성분 사전 레코드 (대표명 우선, 별칭 보조, 중복 제거)
3. Condition Mapping: 분류기 예측 문자열 -> 피부 상태
4. Advice: 인식된 성분 + 피부 상태 -> 종합 판정 및 노트
"""

import re
import logging

from .config import (
    INGREDIENT_LABELS,
    TOKEN_DELIMITERS,
    MIN_TOKEN_LENGTH,
    CONDITION_KEYWORDS,
    DEFAULT_CONDITION,
    POSITIVE_NOTE_TEMPLATE,
    CAUTION_NOTE_TEMPLATE,
    NO_INDICATOR_NOTE,
    NO_INGREDIENTS_NOTE,
)
from .ingredient_db import IngredientDatabase
from .models import (
    AdviceVerdict,
    Assessment,
    Product,
    RecognizedIngredient,
    SkinCondition,
)

# 로깅 설정
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

_SPLIT_PATTERN = re.compile("[" + re.escape(TOKEN_DELIMITERS) + "]")


# ==============================================================================
# 1. 성분표 분해 (Parsing)
# ==============================================================================

def _strip_label(text: str) -> str:
    """'Ingredients:' 또는 'INCI:' 라벨이 있으면 그 뒤의 텍스트만 남깁니다."""
    for label in INGREDIENT_LABELS:
        m = re.search(re.escape(label), text, re.IGNORECASE)
        if m:
            return text[m.end():]
    return text


def parse_ingredient_tokens(text: str) -> list:
    """
    성분표 텍스트를 성분 토큰 리스트로 분해합니다.
    (원문 대소문자/순서/중복 유지, 짧은 토큰 제거)
    """
    if not text:
        return []

    body = _strip_label(text)
    tokens = [t.strip() for t in _SPLIT_PATTERN.split(body)]
    return [t for t in tokens if len(t) >= MIN_TOKEN_LENGTH]


# ==============================================================================
# 2. 성분 매칭 (Matching)
# ==============================================================================

def match_ingredients(tokens: list, db: IngredientDatabase) -> list:
    """
    토큰을 성분 사전과 대조하여 인식된 성분 리스트를 반환합니다.
    - 사전에 없는 토큰은 조용히 버림
    - 같은 성분은 처음 매칭된 한 번만 포함
    """
    recognized = []
    seen_names = set()

    for token in tokens:
        record = db.resolve(token)
        if record is None:
            continue
        if record.key in seen_names:
            continue

        recognized.append(RecognizedIngredient(record=record, raw_token=token))
        seen_names.add(record.key)

    logger.debug(f"성분 매칭: 토큰 {len(tokens)}개 중 {len(recognized)}개 인식")
    return recognized


# ==============================================================================
# 3. 예측 문자열 -> 피부 상태 (Condition Mapping)
# ==============================================================================

def map_prediction_to_condition(prediction: str) -> SkinCondition:
    """config.py 의 CONDITION_KEYWORDS 순서대로 부분 문자열을 검사합니다."""
    lowered = (prediction or "").lower()
    for keyword, condition in CONDITION_KEYWORDS:
        if keyword in lowered:
            return SkinCondition(condition)
    return SkinCondition(DEFAULT_CONDITION)


# ==============================================================================
# 4. 조언 생성 (Advice)
# ==============================================================================

def generate_advice(matches: list, condition: SkinCondition) -> AdviceVerdict:
    positive_notes = []
    cautionary_notes = []
    good_count = 0
    bad_count = 0

    for match in matches:
        record = match.record
        if condition in record.good_for:
            positive_notes.append(
                POSITIVE_NOTE_TEMPLATE.format(name=record.name, condition=condition.value)
            )
            good_count += 1
        if condition in record.bad_for:
            cautionary_notes.append(
                CAUTION_NOTE_TEMPLATE.format(name=record.name, condition=condition.value)
            )
            bad_count += 1

    # 주의 성분이 하나라도 있으면 '피하는 것이 좋음'
    if bad_count > 0:
        assessment = Assessment.POTENTIALLY_AVOID
    elif good_count > 0:
        assessment = Assessment.GOOD
    else:
        assessment = Assessment.NEUTRAL

    if not matches:
        positive_notes.append(NO_INGREDIENTS_NOTE)
    elif not positive_notes and not cautionary_notes:
        positive_notes.append(NO_INDICATOR_NOTE)

    return AdviceVerdict(
        assessment=assessment,
        positive_notes=tuple(positive_notes),
        cautionary_notes=tuple(cautionary_notes),
        for_condition=condition,
    )


# ==============================================================================
# 5. 제품 분석 통합 (Main Process)
# ==============================================================================

def analyze_product(product: Product, current_prediction: str, db: IngredientDatabase) -> Product:
    """
    제품의 성분표를 분석하고, 현재 피부 상태 기준 조언을 붙인 새 Product 를 반환합니다.
    """
    tokens = parse_ingredient_tokens(product.ingredient_list_text)
    recognized = match_ingredients(tokens, db)

    condition = map_prediction_to_condition(current_prediction)
    advice = generate_advice(recognized, condition)

    logger.info(
        f"🧴 [{product.name}] 성분 {len(recognized)}개 인식 -> {advice.assessment.value} ({condition.value})"
    )
    return product.model_copy(update={
        "analyzed_ingredients": recognized,
        "advice": advice,
    })
