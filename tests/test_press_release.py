import pytest

from presscraft.models import FactSheet, PrType, SpecItem
from presscraft.press_release import generate_draft, render_promotion, select_renderer


def make_sheet(**overrides) -> FactSheet:
    base = {
        "brandName": "데스커",
        "productName": "모션데스크",
        "prType": "new_product",
        "definition": "몰입을 위한 가장 완벽한 책상",
        "features": ["듀얼 모터", "메모리 버튼", "배선 트레이"],
        "usageContext": "홈오피스",
        "coreMessages": ["업무 몰입도 향상", "건강한 업무 습관"],
        "launchDate": "3월 18일",
        "discountPromo": "",
        "channels": "데스커 공식몰",
        "commentIntent": "일하는 방식의 변화를 담았다",
    }
    base.update(overrides)
    return FactSheet.model_validate(base)


@pytest.mark.parametrize("pr_type", [t.value for t in PrType])
def test_every_angle_mentions_brand_and_product(pr_type):
    draft = generate_draft(make_sheet(prType=pr_type))
    assert draft.strip()
    assert "데스커" in draft
    assert "모션데스크" in draft
    assert draft.rstrip().endswith(("# # #", "자동 삽입)", "제안합니다."))


def test_angle_headers():
    assert generate_draft(make_sheet(prType="new_product")).startswith("[신제품 출시]\n    \n")
    assert generate_draft(make_sheet(prType="campaign")).startswith("[브랜드 캠페인]")
    assert generate_draft(make_sheet(prType="trend")).startswith("[업계 트렌드]")
    assert generate_draft(make_sheet(prType="promotion")).startswith("[프로모션]")
    assert generate_draft(make_sheet(prType="issue")).startswith("[브랜드 이슈]")


def test_activity_renders_as_issue():
    assert generate_draft(make_sheet(prType="activity")) == generate_draft(make_sheet(prType="issue"))
    assert select_renderer("activity") is select_renderer(PrType.ISSUE)


def test_unknown_angle_renders_as_new_product():
    assert generate_draft(make_sheet(prType="webinar")).startswith("[신제품 출시]")


def test_promotion_without_discount_omits_benefits_paragraph():
    draft = generate_draft(make_sheet(prType="promotion", discountPromo=""))
    assert "주요 혜택으로" not in draft
    assert "\n\n데스커 관계자는" in draft


def test_promotion_with_discount_includes_benefits_verbatim():
    draft = generate_draft(make_sheet(prType="promotion", discountPromo="20% off"))
    assert "주요 혜택으로 20% off 등이 마련되었다." in draft
    assert "▲듀얼 모터 ▲메모리 버튼" in draft
    assert "- 20% off" in draft


def test_new_product_uses_spec_stories_before_feature_fallbacks():
    specs = [SpecItem(category="dimensions", value="W1200")]
    draft = generate_draft(make_sheet(), specs)
    assert "첫째, W1200 사이즈로 콤팩트한 공간에도" in draft
    assert "둘째, 메모리 버튼을(를) 통해 차별화된 경험을 제공한다." in draft
    assert "셋째, 배선 트레이 적용으로 디테일한 부분까지 완성도를 높였다." in draft


def test_new_product_promo_sentence_only_with_discount():
    without = generate_draft(make_sheet())
    assert "출시를 기념하여" not in without
    assert "\n 제품에 대한 자세한 정보는 데스커 공식몰에서" in without

    with_promo = generate_draft(make_sheet(discountPromo="런칭 10% 할인"))
    assert "한편, 이번 출시를 기념하여 런칭 10% 할인 혜택을 제공한다. 제품에 대한" in with_promo


def test_missing_list_entries_render_as_empty_strings():
    draft = generate_draft(make_sheet(prType="trend", features=["높이 조절"], coreMessages=None))
    assert "▲높이 조절 ▲ ▲ 등" in draft


def test_campaign_offer_defaults_and_growth_keywords():
    draft = generate_draft(make_sheet(prType="campaign"))
    assert "다양한 온/오프라인 이벤트를 진행한다" in draft
    assert "'성장'과 '몰입' 메시지 전달" in draft
    assert "'가능성'을 응원하기" in draft


def test_issue_keeps_trailing_space_and_joined_keywords():
    draft = generate_draft(make_sheet(prType="issue"))
    assert "브랜드 외연 확장에 나섰다. \n" in draft
    assert "'가능성, 성장, 도전, 몰입, 워크 앤 라이프스타일, 일잘러, 주체적인 삶'의 가치" in draft


def test_generate_draft_does_not_mutate_fact_sheet():
    sheet = make_sheet(features=["하나"])
    before = sheet.model_dump()
    generate_draft(sheet)
    render_promotion(sheet, [])
    assert sheet.model_dump() == before
