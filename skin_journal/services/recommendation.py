# recommendation.py
"""
[피부 상태별 추천 생성]
성분 사전과 일반 관리 팁(config.GENERAL_TIPS)을 조합하여
현재 피부 상태에 맞는 추천 카드 목록을 만듭니다.
"""

from .config import GENERAL_TIPS, SEEK_DEFAULT_DESCRIPTION, AVOID_DEFAULT_DESCRIPTION
from .ingredient_db import IngredientDatabase
from .models import RecommendationType, SkinCondition, SkincareRecommendation

# 화면 표시 순서: 일반 팁 -> 찾아볼 성분 -> 피할 성분
TYPE_ORDER = {
    RecommendationType.GENERAL_TIP: 0,
    RecommendationType.INGREDIENT_TO_SEEK: 1,
    RecommendationType.INGREDIENT_TO_AVOID: 2,
}


def generate_recommendations(condition: SkinCondition, db: IngredientDatabase) -> list:
    recommendations = []

    # 1. 성분 기반 추천
    for record in db.values():
        if condition in record.good_for:
            recommendations.append(SkincareRecommendation(
                type=RecommendationType.INGREDIENT_TO_SEEK,
                title=record.name,
                description=record.description or SEEK_DEFAULT_DESCRIPTION.format(condition=condition.value),
                related_condition=condition,
            ))
        if condition in record.bad_for:
            recommendations.append(SkincareRecommendation(
                type=RecommendationType.INGREDIENT_TO_AVOID,
                title=record.name,
                description=record.description or AVOID_DEFAULT_DESCRIPTION.format(condition=condition.value),
                related_condition=condition,
            ))

    # 2. 일반 관리 팁
    for title, description in GENERAL_TIPS.get(condition.value, {}).items():
        recommendations.append(SkincareRecommendation(
            type=RecommendationType.GENERAL_TIP,
            title=title,
            description=description,
            related_condition=condition,
        ))

    # 3. 정렬 (유형 순서 -> 제목 가나다/알파벳 순)
    recommendations.sort(key=lambda r: (TYPE_ORDER[r.type], r.title))
    return recommendations
