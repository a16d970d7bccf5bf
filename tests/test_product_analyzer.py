import pytest

from skin_journal.services.config import (
    MIN_TOKEN_LENGTH,
    NO_INDICATOR_NOTE,
    NO_INGREDIENTS_NOTE,
)
from skin_journal.services.ingredient_db import IngredientDatabase
from skin_journal.services.models import (
    Assessment,
    IngredientRecord,
    Product,
    RecognizedIngredient,
    SkinCondition,
)
from skin_journal.services.product_analyzer import (
    analyze_product,
    generate_advice,
    map_prediction_to_condition,
    match_ingredients,
    parse_ingredient_tokens,
)


# ==============================================================================
# parse_ingredient_tokens
# ==============================================================================

def test_parse_splits_on_all_delimiters():
    text = "Aqua, Glycerin; Niacinamide\nFragrance/Parfum. Squalane"
    assert parse_ingredient_tokens(text) == [
        "Aqua", "Glycerin", "Niacinamide", "Fragrance", "Parfum", "Squalane"
    ]


def test_parse_drops_text_before_label():
    text = "Gentle Cleanser 200ml\nINGREDIENTS: Water, Glycerin"
    assert parse_ingredient_tokens(text) == ["Water", "Glycerin"]


def test_parse_inci_label():
    assert parse_ingredient_tokens("Made in Korea INCI: Aqua, Retinol") == ["Aqua", "Retinol"]


def test_parse_label_after_non_ascii_prefix():
    # 소문자 변환 시 길이가 바뀌는 문자(İ)가 라벨 앞에 있어도 라벨 위치가 어긋나지 않아야 함
    text = "İİİİ Ingredients: Glycerin, Niacinamide"
    assert parse_ingredient_tokens(text) == ["Glycerin", "Niacinamide"]


def test_parse_uses_first_label_only():
    text = "Ingredients: Aqua, Ingredients: Glycerin"
    assert parse_ingredient_tokens(text) == ["Aqua", "Ingredients: Glycerin"]


def test_parse_keeps_casing_order_and_duplicates():
    assert parse_ingredient_tokens("aQua, Glycerin, aQua") == ["aQua", "Glycerin", "aQua"]


def test_parse_drops_short_tokens():
    assert parse_ingredient_tokens("Aqua, C1, ab, x, BHA") == ["Aqua", "BHA"]


@pytest.mark.parametrize("text", ["", ",,;;\n//..", "   ", "Ingredients:"])
def test_parse_empty_inputs(text):
    assert parse_ingredient_tokens(text) == []


@pytest.mark.parametrize("text", [
    "a, bb, ccc, dddd",
    "Ingredients: , ; Aqua . , E1",
    "  PEG-10 ,  ab  ,\n\n ,Zinc",
])
def test_parse_never_returns_short_tokens(text):
    for token in parse_ingredient_tokens(text):
        assert token == token.strip()
        assert len(token) >= MIN_TOKEN_LENGTH


# ==============================================================================
# match_ingredients
# ==============================================================================

def test_match_by_name_and_alias(db):
    matches = match_ingredients(["Sodium Hyaluronate", "NIACINAMIDE"], db)
    assert [m.record.name for m in matches] == ["Hyaluronic Acid", "Niacinamide"]
    assert [m.raw_token for m in matches] == ["Sodium Hyaluronate", "NIACINAMIDE"]


def test_match_drops_unknown_tokens(db):
    matches = match_ingredients(["Unobtainium", "Glycerin", "Mystery Extract"], db)
    assert [m.record.name for m in matches] == ["Glycerin"]


def test_match_deduplicates_by_primary_name(db):
    matches = match_ingredients(["Parfum", "Fragrance", "parfum", "Aqua", "Water"], db)
    assert [m.record.name for m in matches] == ["Fragrance", "Aqua"]
    # 처음 매칭된 원문 토큰을 유지
    assert matches[0].raw_token == "Parfum"


def test_match_period_split_alcohol_denat(db):
    tokens = parse_ingredient_tokens("Alcohol Denat., Glycerin")
    matches = match_ingredients(tokens, db)
    assert [m.record.name for m in matches] == ["Alcohol Denat.", "Glycerin"]


def test_match_results_are_unique(db):
    tokens = ["vitamin c", "ascorbic acid", "l-ascorbic acid", "Vitamin C", "zinc", "zinc oxide"]
    names = [m.record.name for m in match_ingredients(tokens, db)]
    assert len(names) == len(set(names))


# ==============================================================================
# generate_advice
# ==============================================================================

def _matches(db, *tokens):
    return match_ingredients(list(tokens), db)


def test_sensitive_scenario_potentially_avoid(db):
    tokens = parse_ingredient_tokens("Aqua, Fragrance, Niacinamide")
    matches = match_ingredients(tokens, db)
    assert [m.record.name for m in matches] == ["Aqua", "Fragrance", "Niacinamide"]

    verdict = generate_advice(matches, SkinCondition.SENSITIVE)

    assert verdict.assessment == Assessment.POTENTIALLY_AVOID
    assert verdict.cautionary_notes == ("Fragrance: May be problematic for Sensitive.",)
    assert verdict.positive_notes == (
        "Aqua: Beneficial for Sensitive.",
        "Niacinamide: Beneficial for Sensitive.",
    )
    assert verdict.for_condition == SkinCondition.SENSITIVE


def test_only_good_ingredients_is_good(db):
    verdict = generate_advice(_matches(db, "Niacinamide", "Salicylic Acid"), SkinCondition.OILY)
    assert verdict.assessment == Assessment.GOOD
    assert len(verdict.positive_notes) == 2
    assert verdict.cautionary_notes == ()


def test_every_bad_ingredient_dominates(db):
    # 모든 성분이 Dry 에 주의 성분 (일부는 good_for 도 겹침)
    matches = _matches(db, "Retinol", "Benzoyl Peroxide", "Tea Tree Oil", "Alcohol Denat")
    verdict = generate_advice(matches, SkinCondition.DRY)
    assert verdict.assessment == Assessment.POTENTIALLY_AVOID
    assert len(verdict.cautionary_notes) == 4


def test_ingredient_in_both_sets_adds_both_notes():
    record = IngredientRecord(
        name="Witch Hazel",
        good_for=frozenset({SkinCondition.OILY}),
        bad_for=frozenset({SkinCondition.OILY}),
    )
    verdict = generate_advice([RecognizedIngredient(record=record, raw_token="witch hazel")],
                              SkinCondition.OILY)
    assert verdict.positive_notes == ("Witch Hazel: Beneficial for Oily.",)
    assert verdict.cautionary_notes == ("Witch Hazel: May be problematic for Oily.",)
    assert verdict.assessment == Assessment.POTENTIALLY_AVOID


def test_recognized_but_irrelevant_is_neutral(db):
    verdict = generate_advice(_matches(db, "Coconut Oil"), SkinCondition.NORMAL)
    assert verdict.assessment == Assessment.NEUTRAL
    assert verdict.positive_notes == (NO_INDICATOR_NOTE,)
    assert verdict.cautionary_notes == ()


def test_nothing_recognized_is_neutral():
    verdict = generate_advice([], SkinCondition.ACNE_PRONE)
    assert verdict.assessment == Assessment.NEUTRAL
    assert verdict.positive_notes == (NO_INGREDIENTS_NOTE,)


def test_advice_is_deterministic(db):
    matches = _matches(db, "Shea Butter", "Glycerin", "Retinol")
    first = generate_advice(matches, SkinCondition.ACNE_PRONE)
    second = generate_advice(matches, SkinCondition.ACNE_PRONE)
    assert first == second


def test_use_with_caution_is_never_produced(db):
    for condition in SkinCondition:
        for tokens in (["Aqua"], ["Fragrance"], ["Coconut Oil", "Glycerin"], []):
            verdict = generate_advice(_matches(db, *tokens), condition)
            assert verdict.assessment != Assessment.USE_WITH_CAUTION


# ==============================================================================
# map_prediction_to_condition / analyze_product
# ==============================================================================

@pytest.mark.parametrize("prediction, expected", [
    ("Acne", SkinCondition.ACNE_PRONE),
    ("Prediction: ACNE - Confidence: 80%", SkinCondition.ACNE_PRONE),
    ("no issues", SkinCondition.NORMAL),
    ("Dryness", SkinCondition.DRY),
    ("Oily skin", SkinCondition.OILY),
    ("Soil stain", SkinCondition.NORMAL),
    ("Boil", SkinCondition.NORMAL),
    ("Redness", SkinCondition.SENSITIVE),
    ("Sensitivity", SkinCondition.SENSITIVE),
    ("Wrinkles", SkinCondition.NORMAL),
    ("", SkinCondition.NORMAL),
])
def test_map_prediction_to_condition(prediction, expected):
    assert map_prediction_to_condition(prediction) == expected


def test_analyze_product_returns_new_product(db):
    product = Product(name="Calming Toner", ingredient_list_text="Ingredients: Aqua, Parfum, Aloe Vera")

    analyzed = analyze_product(product, "Prediction: Acne - Confidence: 70%", db)

    assert product.advice is None
    assert [m.record.name for m in analyzed.analyzed_ingredients] == ["Aqua", "Fragrance", "Aloe Vera"]
    assert analyzed.advice.for_condition == SkinCondition.ACNE_PRONE
    assert analyzed.advice.assessment == Assessment.GOOD
    assert analyzed.name == "Calming Toner"


def test_reanalysis_replaces_advice(db):
    product = Product(name="Serum", ingredient_list_text="Retinol, Squalane")

    for_acne = analyze_product(product, "Acne", db)
    for_dry = analyze_product(for_acne, "Dryness", db)

    assert for_acne.advice.assessment == Assessment.GOOD
    assert for_dry.advice.assessment == Assessment.POTENTIALLY_AVOID
    assert for_dry.advice.for_condition == SkinCondition.DRY
