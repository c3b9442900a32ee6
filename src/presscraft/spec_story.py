"""Rule-based Spec-to-Story mapping: product specs become benefit sentences."""

from __future__ import annotations

from typing import Iterable, List

from .models import SpecCategory, SpecItem


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _dimensions_story(value: str, lowered: str) -> str:
    if _contains_any(lowered, ("1200", "1000")):
        return f"{value} 사이즈로 콤팩트한 공간에도 여유롭게 배치하여 나만의 홈오피스를 완성할 수 있다."
    if _contains_any(lowered, ("1400", "1600", "1800")):
        return f"{value}의 넉넉한 사이즈로 멀티태스킹에 최적화된 넓은 작업 공간을 제공한다."
    return f"{value}의 효율적인 규격으로 공간 활용성을 극대화했다."


def _material_story(value: str, lowered: str) -> str | None:
    if _contains_any(lowered, ("e0", "친환경")):
        return (
            f"엄격한 품질 관리를 거친 {value} 자재를 사용하여 건강한 학습 및 업무 환경을 조성한다. "
            "이는 ESG 경영을 실천하는 브랜드의 철학을 담고 있다."
        )
    if _contains_any(lowered, ("lpm", "강화")):
        return f"스크래치와 오염에 강한 {value} 마감을 적용하여, 오랜 사용에도 변함없는 내구성을 자랑한다."
    return None


def _function_story(value: str, lowered: str) -> str | None:
    if _contains_any(lowered, ("모터", "높이")):
        return f"{value} 기능을 통해 사용자의 체형과 컨디션에 맞춘 최적의 높이를 제공, 업무 몰입도를 비약적으로 높여준다."
    if _contains_any(lowered, ("조명", "led")):
        return f"{value} 기능은 눈의 피로를 최소화하여 장시간 집중이 필요한 작업에 도움을 준다."
    if _contains_any(lowered, ("수납", "배선")):
        return f"{value} 솔루션을 통해 복잡한 데스크 위를 깔끔하게 정리, 심리적 안정감을 주는 인테리어 효과까지 누릴 수 있다."
    return None


def _default_story(spec: SpecItem) -> str:
    if spec.detail:
        return f"{spec.value} - {spec.detail}"
    return f"{spec.value}를 통해 사용자 편의성을 높였다."


def spec_to_story(spec: SpecItem) -> str:
    """Return the narrative sentence for a single spec."""
    lowered = spec.value.lower()
    story: str | None = None
    if spec.category is SpecCategory.DIMENSIONS:
        story = _dimensions_story(spec.value, lowered)
    elif spec.category is SpecCategory.MATERIAL:
        story = _material_story(spec.value, lowered)
    elif spec.category is SpecCategory.FUNCTION:
        story = _function_story(spec.value, lowered)
    return story or _default_story(spec)


def map_spec_to_story(specs: Iterable[SpecItem]) -> List[str]:
    """Map each spec to one sentence, keeping input order and length."""
    return [spec_to_story(spec) for spec in specs]
