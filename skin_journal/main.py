# main.py
"""
[Skin Journal API Server]
FastAPI 기반의 메인 서버 구동 파일입니다.
앱(iOS/Android)은 촬영/분류/OCR 결과 문자열만 보내고,
피부 기록 추이 판정과 제품 성분 조언은 이 서버가 담당합니다.
"""

import logging
import datetime
from typing import Optional

from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# ---------------------------------------------------------
# [Services Import]
# 핵심 로직은 services 폴더의 모듈에서 가져옵니다.
# ---------------------------------------------------------
from skin_journal.core.utils import init_db
from skin_journal.services.ingredient_db import get_ingredient_database
from skin_journal.services.models import SkinCondition
from skin_journal.services.journal_service import (
    record_journal_entry,
    list_journal_entries,
    delete_journal_entry,
    get_skin_trend,
    get_calendar_day,
    analyze_ingredient_text,
    add_product,
    list_products,
    delete_product,
    reanalyze_all_products,
    get_recommendations,
)

# 로깅 설정
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------
# [Lifespan 설정] 시작과 종료를 관리하는 함수
# ---------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🔄 서버 시작: DB 테이블 점검 및 성분 사전 로드...")
    init_db()
    get_ingredient_database()
    logger.info("✅ 서버 시작 완료")

    yield

    logger.info("👋 서버 종료")


app = FastAPI(
    title="Skin Journal API",
    description="피부 기록 추이 분석 및 성분 기반 제품 조언",
    version="1.0.0",
    lifespan=lifespan
)

# CORS 설정 (앱/웹 통신 허용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------
# [Pydantic Models] 요청 데이터 검증용 모델
# ---------------------------------------------------------

class JournalEntryRequest(BaseModel):
    user_id: str
    prediction: Optional[str] = None  # "Prediction: Acne - Confidence: 75.5%"
    label: Optional[str] = None
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    image_path: Optional[str] = None
    timestamp: Optional[datetime.datetime] = None


class AnalyzeRequest(BaseModel):
    name: str = "Untitled"
    ingredient_text: str
    prediction: str = "no issues"


class ProductRequest(BaseModel):
    user_id: str
    name: str
    ingredient_text: str
    prediction: Optional[str] = None  # 없으면 최근 피부 기록 기준


class ReanalyzeRequest(BaseModel):
    user_id: str
    prediction: Optional[str] = None


# ==============================================================================
# 1. Journal (피부 기록)
# ==============================================================================

@app.post("/journal/entries", tags=["Journal"])
async def create_entry_endpoint(req: JournalEntryRequest):
    try:
        return record_journal_entry(
            user_id=req.user_id,
            prediction=req.prediction,
            label=req.label,
            confidence=req.confidence,
            image_path=req.image_path,
            timestamp=req.timestamp
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        logger.error(f"기록 저장 중 오류: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/journal/entries", tags=["Journal"])
async def list_entries_endpoint(user_id: str):
    return {"status": "success", "data": list_journal_entries(user_id)}


@app.delete("/journal/entries/{entry_id}", tags=["Journal"])
async def delete_entry_endpoint(entry_id: int, user_id: str):
    try:
        delete_journal_entry(user_id, entry_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"status": "success", "message": "기록 삭제 완료"}


@app.get("/journal/trend", tags=["Journal"])
async def trend_endpoint(user_id: str):
    """
    [피부 변화 추이]
    - 최근 두 기록 비교 결과 (Improved / Worsened / Stayed the Same / Not Enough Data)
    - 그래프용 최근 기록 포인트
    """
    return {"status": "success", "data": get_skin_trend(user_id)}


@app.get("/journal/calendar", tags=["Journal"])
async def calendar_endpoint(user_id: str, day: datetime.date):
    return {"status": "success", "day": day, "data": get_calendar_day(user_id, day)}


# ==============================================================================
# 2. Products (제품 성분 분석)
# ==============================================================================

@app.post("/products/analyze", tags=["Products"])
async def analyze_endpoint(req: AnalyzeRequest):
    """저장 없이 성분표 텍스트만 분석합니다."""
    return analyze_ingredient_text(req.name, req.ingredient_text, req.prediction)


@app.post("/products", tags=["Products"])
async def add_product_endpoint(req: ProductRequest):
    try:
        return add_product(req.user_id, req.name, req.ingredient_text, req.prediction)
    except RuntimeError as e:
        logger.error(f"제품 저장 중 오류: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/products", tags=["Products"])
async def list_products_endpoint(user_id: str):
    return {"status": "success", "data": list_products(user_id)}


@app.delete("/products/{product_id}", tags=["Products"])
async def delete_product_endpoint(product_id: int, user_id: str):
    try:
        delete_product(user_id, product_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"status": "success", "message": "제품 삭제 완료"}


@app.post("/products/reanalyze", tags=["Products"])
async def reanalyze_endpoint(req: ReanalyzeRequest):
    """
    피부 상태가 바뀌었을 때 저장된 모든 제품의 조언을 갱신합니다.
    일부 제품 갱신에 실패하면 status 가 "partial" 이고 failed_ids 에 해당 ID 가 담깁니다.
    """
    result = reanalyze_all_products(req.user_id, req.prediction)
    status = "partial" if result["failed_ids"] else "success"
    return {"status": status, "data": result["updated"], "failed_ids": result["failed_ids"]}


# ==============================================================================
# 3. Recommendations & Reference (추천 / 성분 사전)
# ==============================================================================

@app.get("/recommendations", tags=["Recommendation"])
async def recommendations_endpoint(
        prediction: Optional[str] = None,
        condition: Optional[SkinCondition] = None
):
    return get_recommendations(prediction=prediction, condition=condition)


@app.get("/ingredients", tags=["Reference"])
async def ingredients_endpoint():
    db = get_ingredient_database()
    return {"total_count": len(db), "data": list(db.values())}


# ==============================================================================
# 4. 메인 실행부
# ==============================================================================
if __name__ == "__main__":
    import uvicorn

    logger.info("🚀 API 서버를 시작합니다...")
    uvicorn.run(app, host="0.0.0.0", port=8000)
