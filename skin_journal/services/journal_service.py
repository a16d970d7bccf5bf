# journal_service.py
"""
[피부 기록 및 제품 조언 서비스]
API 서버의 요청을 받아 저장소(core.utils)와 분석 로직(product_analyzer, skin_trend)을
연결하는 모듈입니다. 분석 로직 자체는 순수 함수이며, 저장/조회는 이 모듈에서만 호출합니다.
"""

import logging
import datetime
from typing import Optional

from skin_journal.core.utils import (
    save_journal_entry_db,
    load_journal_entries_db,
    delete_journal_entry_db,
    save_product_db,
    load_products_db,
    update_product_analysis_db,
    delete_product_db,
)
from .config import NO_ISSUES_LABEL
from .ingredient_db import get_ingredient_database
from .models import JournalEntry, Product, SkinCondition
from .product_analyzer import analyze_product, map_prediction_to_condition
from .recommendation import generate_recommendations
from .skin_trend import (
    build_chart_points,
    compare_trend,
    entries_for_day,
    latest_two,
    parse_prediction_description,
)

# 로깅 설정
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# ==============================================================================
# 1. 피부 기록 (Journal)
# ==============================================================================

def record_journal_entry(
        user_id: str,
        prediction: Optional[str] = None,
        label: Optional[str] = None,
        confidence: Optional[float] = None,
        image_path: Optional[str] = None,
        timestamp: Optional[datetime.datetime] = None
) -> JournalEntry:
    """
    분류기 결과를 피부 기록으로 저장합니다.
    - prediction: "Prediction: Acne - Confidence: 75.5%" 형식의 문자열
    - 또는 label + confidence 를 직접 전달
    """
    if prediction:
        label, confidence = parse_prediction_description(prediction)
    elif label is None or confidence is None:
        raise ValueError("prediction 또는 label/confidence 가 필요합니다.")

    if not 0.0 <= confidence <= 1.0:
        raise ValueError(f"신뢰도는 0~1 범위여야 합니다: {confidence}")

    entry = JournalEntry(
        timestamp=timestamp or datetime.datetime.now(),
        label=label,
        confidence=confidence,
        description=prediction,
        image_path=image_path
    )

    new_id = save_journal_entry_db(user_id, entry)
    if not new_id:
        raise RuntimeError("피부 기록 저장 실패")

    logger.info(f"📝 [Journal] 기록 저장 (User: {user_id}, {label} / {confidence:.2f})")
    return entry.model_copy(update={"id": new_id})


def list_journal_entries(user_id: str) -> list:
    return load_journal_entries_db(user_id)


def delete_journal_entry(user_id: str, entry_id: int):
    if not delete_journal_entry_db(user_id, entry_id):
        raise LookupError(f"기록을 찾을 수 없습니다: {entry_id}")


def get_skin_trend(user_id: str) -> dict:
    """최근 두 기록 비교 결과 + 그래프용 데이터"""
    entries = load_journal_entries_db(user_id)
    verdict = compare_trend(entries)
    previous, latest = latest_two(entries)

    logger.info(f"📈 [Trend] User: {user_id}, 기록 {len(entries)}개 -> {verdict.value}")
    return {
        "verdict": verdict,
        "previous": previous,
        "latest": latest,
        "chart": build_chart_points(entries)
    }


def get_calendar_day(user_id: str, day: datetime.date) -> list:
    return entries_for_day(load_journal_entries_db(user_id), day)


def current_prediction_for(user_id: str) -> str:
    """가장 최근 기록의 라벨 (기록이 없으면 'no issues')"""
    _, latest = latest_two(load_journal_entries_db(user_id))
    return latest.label if latest else NO_ISSUES_LABEL


# ==============================================================================
# 2. 제품 분석 (Products)
# ==============================================================================

def analyze_ingredient_text(name: str, ingredient_text: str, prediction: str) -> Product:
    """저장 없이 성분표만 분석"""
    product = Product(name=name, ingredient_list_text=ingredient_text)
    return analyze_product(product, prediction, get_ingredient_database())


def add_product(user_id: str, name: str, ingredient_text: str,
                prediction: Optional[str] = None) -> Product:
    """
    제품을 분석하여 저장합니다.
    prediction 이 없으면 사용자의 가장 최근 피부 기록을 기준으로 합니다.
    """
    if prediction is None:
        prediction = current_prediction_for(user_id)

    analyzed = analyze_ingredient_text(name, ingredient_text, prediction)

    new_id = save_product_db(user_id, analyzed)
    if not new_id:
        raise RuntimeError("제품 저장 실패")
    return analyzed.model_copy(update={"id": new_id})


def list_products(user_id: str) -> list:
    return load_products_db(user_id)


def delete_product(user_id: str, product_id: int):
    if not delete_product_db(user_id, product_id):
        raise LookupError(f"제품을 찾을 수 없습니다: {product_id}")


def reanalyze_all_products(user_id: str, prediction: Optional[str] = None) -> dict:
    """
    피부 상태가 바뀌었을 때 저장된 모든 제품의 조언을 다시 생성합니다.
    제품별로 따로 저장하므로, 갱신에 실패한 제품이 있어도 나머지는 계속 진행합니다.

    Returns:
        dict: {updated: 갱신된 제품 리스트, failed_ids: 갱신 실패한 제품 ID 리스트}
    """
    if prediction is None:
        prediction = current_prediction_for(user_id)

    db = get_ingredient_database()
    updated_products = []
    failed_ids = []
    for product in load_products_db(user_id):
        updated = analyze_product(product, prediction, db)
        if update_product_analysis_db(updated):
            updated_products.append(updated)
        else:
            failed_ids.append(product.id)

    if failed_ids:
        logger.warning(f"⚠️ [Products] 분석 결과 갱신 실패: {failed_ids} (User: {user_id})")
    logger.info(f"🔄 [Products] {len(updated_products)}개 제품 재분석 완료 (User: {user_id})")
    return {"updated": updated_products, "failed_ids": failed_ids}


# ==============================================================================
# 3. 추천 (Recommendations)
# ==============================================================================

def get_recommendations(prediction: Optional[str] = None,
                        condition: Optional[SkinCondition] = None) -> dict:
    if condition is None:
        condition = map_prediction_to_condition(prediction or NO_ISSUES_LABEL)

    return {
        "condition": condition,
        "recommendations": generate_recommendations(condition, get_ingredient_database())
    }
