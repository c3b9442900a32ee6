"""Press-release draft generation from a fact sheet and product specs."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Sequence

from . import templates
from .models import FactSheet, PrType, SpecItem
from .spec_story import map_spec_to_story

Renderer = Callable[[FactSheet, Sequence[str]], str]


def _padded(items: Sequence[str], slots: int) -> List[str]:
    values = list(items[:slots])
    return values + [""] * (slots - len(values))


def _base_fields(fact_sheet: FactSheet) -> dict:
    """Template fields shared by every angle."""
    return {
        "brand_name": fact_sheet.brand_name,
        "product_name": fact_sheet.product_name,
        "definition": fact_sheet.definition,
        "usage_context": fact_sheet.usage_context,
        "launch_date": fact_sheet.launch_date,
        "discount_promo": fact_sheet.discount_promo,
        "channels": fact_sheet.channels,
        "comment_intent": fact_sheet.comment_intent,
        "features": _padded(fact_sheet.features, templates.FEATURE_SLOTS),
        "core_messages": _padded(fact_sheet.core_messages, templates.CORE_MESSAGE_SLOTS),
        "growth": templates.GROWTH_KEYWORDS,
        "growth_joined": ", ".join(templates.GROWTH_KEYWORDS),
    }


def render_new_product(fact_sheet: FactSheet, stories: Sequence[str]) -> str:
    fields = _base_fields(fact_sheet)
    fields["stories"] = [
        (stories[idx] if idx < len(stories) and stories[idx] else "")
        or fallback.format(feature=fields["features"][idx])
        for idx, fallback in enumerate(templates.NEW_PRODUCT_FEATURE_FALLBACKS)
    ]
    fields["promo_sentence"] = (
        templates.NEW_PRODUCT_PROMO.format(discount_promo=fact_sheet.discount_promo)
        if fact_sheet.discount_promo
        else ""
    )
    return templates.NEW_PRODUCT.format(**fields)


def render_campaign(fact_sheet: FactSheet, stories: Sequence[str]) -> str:
    fields = _base_fields(fact_sheet)
    fields["campaign_offer"] = fact_sheet.discount_promo or templates.CAMPAIGN_DEFAULT_OFFER
    return templates.CAMPAIGN.format(**fields)


def render_trend(fact_sheet: FactSheet, stories: Sequence[str]) -> str:
    return templates.TREND.format(**_base_fields(fact_sheet))


def render_promotion(fact_sheet: FactSheet, stories: Sequence[str]) -> str:
    fields = _base_fields(fact_sheet)
    fields["benefits_paragraph"] = (
        templates.PROMOTION_BENEFITS.format(**fields) + "\n\n"
        if fact_sheet.discount_promo
        else ""
    )
    return templates.PROMOTION.format(**fields)


def render_issue(fact_sheet: FactSheet, stories: Sequence[str]) -> str:
    return templates.ISSUE.format(**_base_fields(fact_sheet))


RENDERERS: Dict[PrType, Renderer] = {
    PrType.NEW_PRODUCT: render_new_product,
    PrType.CAMPAIGN: render_campaign,
    PrType.TREND: render_trend,
    PrType.PROMOTION: render_promotion,
    PrType.ISSUE: render_issue,
}


def select_renderer(pr_type: PrType | str | None) -> Renderer:
    """Return the renderer for an angle; unknown angles render as a new product."""
    return RENDERERS[PrType.coerce(pr_type)]


def generate_draft(fact_sheet: FactSheet, specs: Iterable[SpecItem] = ()) -> str:
    """
    Render the full press release for a fact sheet.

    Specs are turned into benefit sentences first; only the new-product
    angle places them in the body. The fact sheet is not modified.
    """
    stories = map_spec_to_story(specs)
    return select_renderer(fact_sheet.pr_type)(fact_sheet, stories)
