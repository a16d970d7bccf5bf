# ingredient_db.py
"""
[성분 사전]
data/ingredients.json 에 정의된 성분 정보를 서버 시작 시 한 번 읽어
불변 사전(IngredientDatabase)으로 제공합니다.

- 키: 소문자 + 공백 제거된 대표 성분명
- 조회 테이블: 대표명을 먼저 넣고, 별칭은 비어 있는 키에만 추가
"""

import json
import logging
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Optional

from .config import INGREDIENT_DB_PATH
from .models import IngredientRecord

# 로깅 설정
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    return name.strip().lower()


class IngredientDatabase(Mapping):
    """대표명 -> IngredientRecord 불변 매핑"""

    def __init__(self, records: Iterable[IngredientRecord]):
        by_name = {}
        for record in records:
            key = normalize_name(record.name)
            if not key:
                raise ValueError("성분명이 비어 있는 레코드가 있습니다.")
            if key in by_name:
                raise ValueError(f"중복된 성분명: {record.name}")
            by_name[key] = record

        # 대표명이 별칭보다 우선
        lookup = dict(by_name)
        for record in by_name.values():
            for alias in record.aliases:
                lookup.setdefault(normalize_name(alias), record)

        self._records = MappingProxyType(by_name)
        self._lookup = MappingProxyType(lookup)

    def __getitem__(self, key: str) -> IngredientRecord:
        return self._records[key]

    def __iter__(self):
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def resolve(self, token: str) -> Optional[IngredientRecord]:
        """토큰을 대표명 또는 별칭으로 찾아 레코드를 반환 (없으면 None)"""
        return self._lookup.get(normalize_name(token))


def load_ingredient_database(path: str = INGREDIENT_DB_PATH) -> IngredientDatabase:
    """
    JSON 파일(레코드 리스트)을 읽어 IngredientDatabase 를 생성합니다.

    Raises:
        ValueError: 중복 성분명, 알 수 없는 피부 상태 값 등 파일 내용이 잘못된 경우
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("성분 사전 파일은 레코드 리스트여야 합니다.")

    # pydantic ValidationError 는 ValueError 의 하위 클래스
    records = [IngredientRecord.model_validate(item) for item in raw]
    db = IngredientDatabase(records)

    logger.info(f"📂 성분 사전 로드 완료: {len(db)}개 ({path})")
    return db


@lru_cache(maxsize=None)
def get_ingredient_database() -> IngredientDatabase:
    """서버 전체에서 공유하는 성분 사전 (최초 호출 시 한 번만 로드)"""
    return load_ingredient_database(INGREDIENT_DB_PATH)
