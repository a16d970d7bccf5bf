# config.py
"""
[전역 설정 및 상수 관리]
서버, 데이터베이스, 성분 분석 및 피부 추이 비교 로직에서 사용하는 모든 상수를 관리합니다.

목차:
1. RESOURCES : 성분 사전 파일 경로
2. INGREDIENT PARSING : 성분표 텍스트 분해 규칙
3. CONDITION MAPPING : 분류기 예측 문자열 -> 피부 상태 매핑
4. TREND RULES : 피부 변화 추이 판정 기준
5. ADVICE TEXT : 조언 문구 및 일반 관리 팁
6. INFRASTRUCTURE : 데이터베이스 접속 정보
"""

import os
from dotenv import load_dotenv

# .env 파일 로드 (환경변수 설정)
load_dotenv()

# ==============================================================================
# 1. RESOURCES (정적 리소스)
# ==============================================================================

# 성분 사전(JSON) 경로 (환경변수 우선)
PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
INGREDIENT_DB_PATH = os.getenv(
    "INGREDIENT_DB_PATH",
    os.path.join(PACKAGE_DIR, "data", "ingredients.json")
)

# ==============================================================================
# 2. INGREDIENT PARSING (성분표 분해 규칙)
# ==============================================================================

# 성분표 머리말: 앞에 있는 것부터 검사하고, 첫 번째로 발견된 라벨 뒤만 사용
INGREDIENT_LABELS = ["Ingredients:", "INCI:"]

# 성분 구분자 (쉼표, 세미콜론, 줄바꿈, 슬래시, 마침표)
TOKEN_DELIMITERS = ",;\n/."

# 최소 성분명 길이 (2글자 이하 토큰은 버림)
MIN_TOKEN_LENGTH = 3

# ==============================================================================
# 3. CONDITION MAPPING (예측 문자열 -> 피부 상태)
# ==============================================================================

# 위에서부터 순서대로 검사 (대소문자 무시, 부분 문자열 포함 여부)
# 값은 SkinCondition 의 value
CONDITION_KEYWORDS = [
    ("acne", "Acne-Prone"),
    ("no issues", "Normal"),
    ("dry", "Dry"),
    ("oily", "Oily"),
    ("redness", "Sensitive"),
    ("sensitiv", "Sensitive"),
]

# 어떤 키워드에도 걸리지 않으면 사용할 기본 상태
DEFAULT_CONDITION = "Normal"

# ==============================================================================
# 4. TREND RULES (추이 판정 기준)
# ==============================================================================

# 분류기가 '문제 없음'으로 내보내는 라벨 (소문자 비교)
NO_ISSUES_LABEL = "no issues"

# 신뢰도 차이가 이 값 미만이면 '변화 없음'
# 신뢰도가 낮아질수록 '개선'으로 본다 (문제 라벨에 대한 확신이 줄어든 것)
TREND_TOLERANCE = 0.05

# 추이 그래프에 보여줄 최근 기록 개수
CHART_POINT_LIMIT = 5

# ==============================================================================
# 5. ADVICE TEXT (조언 문구)
# ==============================================================================

POSITIVE_NOTE_TEMPLATE = "{name}: Beneficial for {condition}."
CAUTION_NOTE_TEMPLATE = "{name}: May be problematic for {condition}."

NO_INDICATOR_NOTE = (
    "No specific strong indicators for or against for your skin type "
    "based on recognized ingredients."
)
NO_INGREDIENTS_NOTE = "Could not recognize any ingredients to provide advice."

# 성분 설명이 없을 때 추천 카드에 쓰는 기본 문구
SEEK_DEFAULT_DESCRIPTION = "Beneficial for {condition} skin."
AVOID_DEFAULT_DESCRIPTION = (
    "May be problematic for {condition} skin. Consider avoiding or using with caution."
)

# [일반 관리 팁] 피부 상태별 (제목: 설명)
GENERAL_TIPS = {
    "Acne-Prone": {
        "Regular Cleansing": "Cleanse your face twice a day to remove excess oil and impurities.",
        "Avoid Picking": "Resist the urge to pick or squeeze blemishes, as it can worsen inflammation and lead to scarring.",
        "Non-Comedogenic Products": "Look for makeup and skincare products labeled 'non-comedogenic' to avoid clogging pores.",
    },
    "Dry": {
        "Hydrate Well": "Use a gentle, hydrating cleanser and a rich moisturizer daily.",
        "Lukewarm Water": "Wash your face with lukewarm, not hot, water.",
        "Humidifier": "Consider using a humidifier in dry environments.",
    },
    "Oily": {
        "Lightweight Moisturizer": "Even oily skin needs hydration; use a lightweight, oil-free moisturizer.",
        "Blotting Papers": "Use blotting papers throughout the day to manage excess shine.",
        "Avoid Over-Washing": "Washing too frequently can strip the skin, causing it to produce more oil.",
    },
    "Sensitive": {
        "Patch Test": "Always patch test new products on a small area of skin before applying to your entire face.",
        "Fragrance-Free": "Choose fragrance-free and hypoallergenic products when possible.",
        "Gentle Ingredients": "Look for soothing ingredients like aloe vera, chamomile, or calendula.",
    },
    "Normal": {
        "Maintain Balance": "Focus on maintaining your skin's natural balance with a consistent routine.",
        "Sun Protection": "Use sunscreen daily to protect against UV damage.",
        "Listen to Your Skin": "Pay attention to how your skin reacts to different products or environmental changes.",
    },
}

# ==============================================================================
# 6. INFRASTRUCTURE (DB)
# ==============================================================================

# [데이터베이스] PostgreSQL 접속 정보 (환경변수 우선)
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "database": os.getenv("DB_NAME", "postgres"),
    "user": os.getenv("DB_USER", "postgres"),
    "password": os.getenv("DB_PASSWORD", "password"),
    "port": os.getenv("DB_PORT", "5432")
}
