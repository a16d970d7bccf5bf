# utils.py
"""
[데이터 저장소 담당]
피부 기록(journal_entries)과 사용자 제품(products)을 PostgreSQL 에 저장/조회합니다.
분석 로직은 이 모듈을 직접 알지 못하며, 서비스 계층이 필요한 시점에 호출합니다.

기능 목록:
1. Database 초기화: 테이블 생성
2. Journal: 피부 기록 저장 / 조회 / 삭제
3. Products: 제품 저장 / 조회 / 분석 결과 갱신 / 삭제
"""

import json
import logging

import psycopg2

# 설정 파일 로드 (DB 접속 정보)
from skin_journal.services.config import DB_CONFIG
from skin_journal.services.models import (
    AdviceVerdict,
    JournalEntry,
    Product,
    RecognizedIngredient,
)

# 로깅 설정
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# ==============================================================================
# 1. 데이터베이스 초기화 (PostgreSQL)
# ==============================================================================

def init_db():
    """
    [DB 초기화 통합 함수]
    서버 시작 시 필요한 테이블을 안전하게 생성합니다.
    """
    try:
        conn = psycopg2.connect(**DB_CONFIG)
        cursor = conn.cursor()

        # ---------------------------------------------------------
        # 1. journal_entries (피부 기록)
        # ---------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS journal_entries (
                id SERIAL PRIMARY KEY,
                user_id VARCHAR(50) NOT NULL,
                label TEXT NOT NULL,
                confidence REAL NOT NULL,
                description TEXT,
                image_path TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
        """)

        # ---------------------------------------------------------
        # 2. products (사용자 제품 + 분석 결과)
        # ---------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS products (
                id SERIAL PRIMARY KEY,
                user_id VARCHAR(50) NOT NULL,
                name TEXT NOT NULL,
                ingredient_text TEXT,
                analyzed_ingredients TEXT,   -- JSON (인식된 성분 리스트)
                advice TEXT,                 -- JSON (조언 결과)
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
        """)

        conn.commit()
        cursor.close()
        conn.close()
        logger.info("✅ DB 테이블 초기화 완료")

    except Exception as e:
        logger.error(f"❌ DB 초기화 중 오류 발생: {e}")


# ==============================================================================
# 2. 피부 기록 (Journal)
# ==============================================================================

def save_journal_entry_db(user_id: str, entry: JournalEntry):
    """피부 기록을 저장하고 새 ID 를 반환합니다. (실패 시 None)"""
    try:
        conn = psycopg2.connect(**DB_CONFIG)
        cursor = conn.cursor()

        insert_sql = """
            INSERT INTO journal_entries
            (user_id, label, confidence, description, image_path, created_at)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING id;
        """
        cursor.execute(insert_sql, (
            user_id,
            entry.label,
            entry.confidence,
            entry.description,
            entry.image_path,
            entry.timestamp
        ))
        new_id = cursor.fetchone()[0]

        conn.commit()
        cursor.close()
        conn.close()
        return new_id

    except Exception as e:
        logger.error(f"❌ 피부 기록 저장 실패: {e}")
        return None


def load_journal_entries_db(user_id: str) -> list:
    """사용자의 전체 피부 기록을 시간순으로 가져옵니다."""
    try:
        conn = psycopg2.connect(**DB_CONFIG)
        cursor = conn.cursor()

        query = """
            SELECT id, created_at, label, confidence, description, image_path
            FROM journal_entries
            WHERE user_id = %s
            ORDER BY created_at ASC
        """
        cursor.execute(query, (user_id,))
        rows = cursor.fetchall()

        cursor.close()
        conn.close()

        return [
            JournalEntry(
                id=r[0],
                timestamp=r[1],
                label=r[2],
                confidence=r[3],
                description=r[4],
                image_path=r[5]
            )
            for r in rows
        ]

    except Exception as e:
        logger.error(f"❌ 피부 기록 조회 실패: {e}")
        return []


def delete_journal_entry_db(user_id: str, entry_id: int) -> bool:
    """기록 삭제 (해당 사용자의 기록이 아니면 False)"""
    try:
        conn = psycopg2.connect(**DB_CONFIG)
        cursor = conn.cursor()

        cursor.execute(
            "DELETE FROM journal_entries WHERE id = %s AND user_id = %s",
            (entry_id, user_id)
        )
        deleted = cursor.rowcount > 0

        conn.commit()
        cursor.close()
        conn.close()
        return deleted

    except Exception as e:
        logger.error(f"❌ 피부 기록 삭제 실패: {e}")
        return False


# ==============================================================================
# 3. 사용자 제품 (Products)
# ==============================================================================

def _dump_analysis(product: Product) -> tuple:
    """분석 결과(List/Model)를 JSON 문자열로 변환"""
    ings_json = None
    advice_json = None
    if product.analyzed_ingredients is not None:
        ings_json = json.dumps(
            [r.model_dump(mode="json") for r in product.analyzed_ingredients],
            ensure_ascii=False
        )
    if product.advice is not None:
        advice_json = json.dumps(product.advice.model_dump(mode="json"), ensure_ascii=False)
    return ings_json, advice_json


def save_product_db(user_id: str, product: Product):
    """제품과 분석 결과를 저장하고 새 ID 를 반환합니다. (실패 시 None)"""
    try:
        conn = psycopg2.connect(**DB_CONFIG)
        cursor = conn.cursor()

        ings_json, advice_json = _dump_analysis(product)

        insert_sql = """
            INSERT INTO products
            (user_id, name, ingredient_text, analyzed_ingredients, advice)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING id;
        """
        cursor.execute(insert_sql, (
            user_id,
            product.name,
            product.ingredient_list_text,
            ings_json,
            advice_json
        ))
        new_id = cursor.fetchone()[0]

        conn.commit()
        cursor.close()
        conn.close()

        logger.info(f"✅ [DB] 제품 저장 완료 (User: {user_id}, ID: {new_id})")
        return new_id

    except Exception as e:
        logger.error(f"❌ 제품 저장 실패: {e}")
        return None


def load_products_db(user_id: str) -> list:
    """
    사용자의 제품 목록을 가져옵니다.
    (JSON 문자열로 저장된 분석 결과를 모델 객체로 복원)
    """
    try:
        conn = psycopg2.connect(**DB_CONFIG)
        cursor = conn.cursor()

        query = """
            SELECT id, name, ingredient_text, analyzed_ingredients, advice
            FROM products
            WHERE user_id = %s
            ORDER BY id ASC
        """
        cursor.execute(query, (user_id,))
        rows = cursor.fetchall()

        cursor.close()
        conn.close()

        products = []
        for row in rows:
            product_id, name, text, ings_raw, advice_raw = row

            ings = None
            if ings_raw:
                ings = [RecognizedIngredient.model_validate(i) for i in json.loads(ings_raw)]
            advice = AdviceVerdict.model_validate(json.loads(advice_raw)) if advice_raw else None

            products.append(Product(
                id=product_id,
                name=name,
                ingredient_list_text=text or "",
                analyzed_ingredients=ings,
                advice=advice
            ))

        return products

    except Exception as e:
        logger.error(f"❌ 제품 조회 실패: {e}")
        return []


def update_product_analysis_db(product: Product) -> bool:
    """재분석된 제품의 분석 결과만 갱신합니다."""
    try:
        conn = psycopg2.connect(**DB_CONFIG)
        cursor = conn.cursor()

        ings_json, advice_json = _dump_analysis(product)
        cursor.execute(
            "UPDATE products SET analyzed_ingredients = %s, advice = %s WHERE id = %s",
            (ings_json, advice_json, product.id)
        )
        updated = cursor.rowcount > 0

        conn.commit()
        cursor.close()
        conn.close()
        return updated

    except Exception as e:
        logger.error(f"❌ 제품 분석 결과 갱신 실패: {e}")
        return False


def delete_product_db(user_id: str, product_id: int) -> bool:
    try:
        conn = psycopg2.connect(**DB_CONFIG)
        cursor = conn.cursor()

        cursor.execute(
            "DELETE FROM products WHERE id = %s AND user_id = %s",
            (product_id, user_id)
        )
        deleted = cursor.rowcount > 0

        conn.commit()
        cursor.close()
        conn.close()
        return deleted

    except Exception as e:
        logger.error(f"❌ 제품 삭제 실패: {e}")
        return False
