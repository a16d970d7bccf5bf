from skin_journal.services.config import GENERAL_TIPS
from skin_journal.services.ingredient_db import IngredientDatabase
from skin_journal.services.models import IngredientRecord, RecommendationType, SkinCondition
from skin_journal.services.recommendation import TYPE_ORDER, generate_recommendations


def _titles(recs, rec_type):
    return [r.title for r in recs if r.type == rec_type]


def test_sensitive_recommendations(db):
    recs = generate_recommendations(SkinCondition.SENSITIVE, db)

    assert "Niacinamide" in _titles(recs, RecommendationType.INGREDIENT_TO_SEEK)
    assert "Fragrance" in _titles(recs, RecommendationType.INGREDIENT_TO_AVOID)
    assert set(_titles(recs, RecommendationType.GENERAL_TIP)) == set(GENERAL_TIPS["Sensitive"])
    assert all(r.related_condition == SkinCondition.SENSITIVE for r in recs)


def test_recommendations_sorted_by_type_then_title(db):
    recs = generate_recommendations(SkinCondition.DRY, db)

    keys = [(TYPE_ORDER[r.type], r.title) for r in recs]
    assert keys == sorted(keys)
    assert recs[0].type == RecommendationType.GENERAL_TIP


def test_coconut_oil_is_sought_for_dry_skin(db):
    recs = generate_recommendations(SkinCondition.DRY, db)
    # Coconut Oil 은 Dry 에 good_for 이면서 Acne/Oily/Sensitive 에만 bad_for
    assert "Coconut Oil" in _titles(recs, RecommendationType.INGREDIENT_TO_SEEK)
    assert "Coconut Oil" not in _titles(recs, RecommendationType.INGREDIENT_TO_AVOID)


def test_missing_description_uses_default_text():
    db = IngredientDatabase([
        IngredientRecord(name="Oat Extract", good_for=frozenset({SkinCondition.DRY})),
        IngredientRecord(name="Menthol", bad_for=frozenset({SkinCondition.DRY})),
    ])

    recs = generate_recommendations(SkinCondition.DRY, db)
    by_title = {r.title: r for r in recs}

    assert by_title["Oat Extract"].description == "Beneficial for Dry skin."
    assert by_title["Menthol"].description.startswith("May be problematic for Dry skin.")
