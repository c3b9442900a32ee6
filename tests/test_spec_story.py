from presscraft.models import SpecCategory, SpecItem
from presscraft.spec_story import map_spec_to_story, spec_to_story


def spec(category: str, value: str, detail: str = "") -> SpecItem:
    return SpecItem(category=category, value=value, detail=detail)


def test_empty_input_maps_to_empty_list():
    assert map_spec_to_story([]) == []


def test_length_and_order_preserved():
    specs = [
        spec("function", "LED 조명"),
        spec("dimensions", "W1600"),
        spec("other", "무상 설치"),
    ]
    stories = map_spec_to_story(specs)
    assert len(stories) == 3
    assert stories[0].startswith("LED 조명 기능은")
    assert stories[1].startswith("W1600의 넉넉한 사이즈")
    assert stories[2] == "무상 설치를 통해 사용자 편의성을 높였다."


def test_compact_dimensions_sentence():
    story = spec_to_story(spec("dimensions", "W1200 x D700"))
    assert story == "W1200 x D700 사이즈로 콤팩트한 공간에도 여유롭게 배치하여 나만의 홈오피스를 완성할 수 있다."


def test_compact_wins_when_both_size_groups_match():
    assert "콤팩트" in spec_to_story(spec("dimensions", "W1200 / W1600"))


def test_unmatched_dimensions_use_generic_sentence():
    assert spec_to_story(spec("dimensions", "W900")) == "W900의 효율적인 규격으로 공간 활용성을 극대화했다."


def test_material_keywords_are_case_insensitive():
    assert "ESG 경영" in spec_to_story(spec("material", "E0 등급 PB"))
    assert "내구성" in spec_to_story(spec("material", "lpm 마감"))


def test_unmatched_material_uses_default_with_detail():
    assert spec_to_story(spec("material", "원목", "북미산 오크")) == "원목 - 북미산 오크"


def test_function_keyword_priority():
    assert "최적의 높이" in spec_to_story(spec("function", "듀얼 모터 높이 조절"))
    assert "깔끔하게 정리" in spec_to_story(spec("function", "배선 정리"))


def test_unknown_category_coerces_to_other():
    item = SpecItem(category="color", value="화이트")
    assert item.category is SpecCategory.OTHER
    assert spec_to_story(item) == "화이트를 통해 사용자 편의성을 높였다."
