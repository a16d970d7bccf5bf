# models.py
"""
[데이터 모델]
성분 분석, 조언, 피부 기록 추이에서 주고받는 값 객체들을 정의합니다.
모든 모델은 불변(frozen)이며 FastAPI 응답으로 그대로 직렬화됩니다.
"""

from datetime import datetime
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class SkinCondition(str, Enum):
    ACNE_PRONE = "Acne-Prone"
    DRY = "Dry"
    OILY = "Oily"
    SENSITIVE = "Sensitive"
    NORMAL = "Normal"  # 분류기의 "no issues"


class Assessment(str, Enum):
    GOOD = "Potentially Good"
    NEUTRAL = "Neutral"
    USE_WITH_CAUTION = "Use with Caution"
    POTENTIALLY_AVOID = "Potentially Avoid"


class TrendVerdict(str, Enum):
    IMPROVED = "Improved"
    WORSENED = "Worsened"
    STAYED_THE_SAME = "Stayed the Same"
    NOT_ENOUGH_DATA = "Not Enough Data"


class RecommendationType(str, Enum):
    INGREDIENT_TO_SEEK = "Ingredients to Look For"
    INGREDIENT_TO_AVOID = "Ingredients to Consider Avoiding"
    GENERAL_TIP = "General Skincare Tips"


# ==============================================================================
# 1. 성분 / 조언
# ==============================================================================

class IngredientRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    aliases: Tuple[str, ...] = ()
    good_for: FrozenSet[SkinCondition] = frozenset()
    bad_for: FrozenSet[SkinCondition] = frozenset()
    description: Optional[str] = None

    @property
    def key(self) -> str:
        """사전 키로 쓰는 정규화된 이름"""
        return self.name.strip().lower()


class RecognizedIngredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    record: IngredientRecord
    raw_token: str


class AdviceVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    assessment: Assessment
    positive_notes: Tuple[str, ...] = ()
    cautionary_notes: Tuple[str, ...] = ()
    for_condition: SkinCondition


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    name: str
    ingredient_list_text: str
    analyzed_ingredients: Optional[List[RecognizedIngredient]] = None
    advice: Optional[AdviceVerdict] = None


class SkincareRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: RecommendationType
    title: str
    description: str
    related_condition: SkinCondition


# ==============================================================================
# 2. 피부 기록 (Journal)
# ==============================================================================

class JournalEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    label: str
    confidence: float
    id: Optional[int] = None
    description: Optional[str] = None
    image_path: Optional[str] = None


class ChartDataPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    confidence: float = Field(description="그래프 Y축 (0.0 ~ 1.0)")
    classification_label: str
