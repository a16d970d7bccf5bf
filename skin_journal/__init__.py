# Skin Journal - 피부 기록 추이 분석 및 성분 기반 제품 조언
