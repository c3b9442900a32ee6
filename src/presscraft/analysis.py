"""Fact-sheet extraction from uploaded documents and product pages.

The LLM path asks a model for the fact-sheet JSON and validates it into a
FactSheet. When no model answers (missing key, quota, unparseable output) a
line-based heuristic fills what it can and the result carries an advisory
message so the user knows to review it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests
from openai import OpenAI, OpenAIError, RateLimitError
from pydantic import ValidationError
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .config import Settings, get_settings
from .llm import client_from_settings, response_text_or_raise, strip_code_fences
from .models import FactSheet, PrType, SpecCategory, SpecItem
from .scraper import fetch_page
from .text_extraction import is_sufficient

logger = logging.getLogger(__name__)

NO_INFO = "정보 없음"
FILE_TEXT_LIMIT = 20000
PAGE_TEXT_LIMIT = 18000
RATE_LIMIT_WAIT_SECONDS = 15

INSUFFICIENT_TEXT_MESSAGE = "파일에서 충분한 텍스트를 추출하지 못했습니다."
PAGE_UNAVAILABLE_MESSAGE = "페이지 내용을 가져오지 못했습니다."
FALLBACK_MESSAGE = "⚠️ AI 분석을 사용할 수 없어 기본 파싱만 적용됨. 수동으로 보완해주세요."

# Brands recognised by the heuristic parser: url/text token -> (brand, sales channel).
KNOWN_BRANDS = {
    "desker": ("데스커(DESKER)", "데스커 공식몰"),
    "데스커": ("데스커(DESKER)", "데스커 공식몰"),
}
SPEC_LABELS = {
    "규격": SpecCategory.DIMENSIONS,
    "사이즈": SpecCategory.DIMENSIONS,
    "크기": SpecCategory.DIMENSIONS,
    "치수": SpecCategory.DIMENSIONS,
    "size": SpecCategory.DIMENSIONS,
    "소재": SpecCategory.MATERIAL,
    "재질": SpecCategory.MATERIAL,
    "material": SpecCategory.MATERIAL,
    "기능": SpecCategory.FUNCTION,
    "function": SpecCategory.FUNCTION,
}
FEATURE_KEYWORDS = ("적용", "지원", "기능", "소재", "모터", "높이", "사이즈", "컬러", "설치", "조절", "수납")

FACT_SHEET_JSON = """{
  "brandName": "브랜드명",
  "productName": "제품명 또는 캠페인명",
  "definition": "한 줄 정의 (슬로건/테마)",
  "features": ["특징1", "특징2", "특징3"],
  "coreMessages": ["핵심 메시지1", "핵심 메시지2"],
  "usageContext": "타겟 사용자/사용 맥락",
  "launchDate": "출시일/배포일",
  "discountPromo": "프로모션/할인 정보",
  "channels": "판매 채널",
  "commentIntent": "관계자 코멘트 요약",
  "specs": ["규격: W1200 * D700 * H720", "소재: 목재, 스틸"]
}"""

PROMPT_TEMPLATE = """당신은 보도자료 작성 전문가입니다.
아래 {source_label}에서 제품/브랜드 정보를 추출하여 보도자료 팩트 시트를 작성해주세요.
정보가 없는 항목은 "정보 없음"으로 표기하세요.

반드시 아래 JSON 구조로만 응답하세요 (JSON만, 다른 텍스트 없이):

{schema}

브랜드 힌트: {hint}
{title_line}내용:
---
{body}
---
"""


@dataclass
class AnalysisResult:
    success: bool
    data: Optional[FactSheet] = None
    message: Optional[str] = None
    used_fallback: bool = False
    specs: List[SpecItem] = field(default_factory=list)


def build_prompt(raw_text: str, hint: str, *, source_label: str, title: str = "", limit: int) -> str:
    return PROMPT_TEMPLATE.format(
        source_label=source_label,
        schema=FACT_SHEET_JSON,
        hint=hint or NO_INFO,
        title_line=f"페이지 타이틀: {title}\n" if title else "",
        body=raw_text[:limit],
    )


def _complete_once(client: OpenAI, model: str, prompt: str, settings: Settings) -> str:
    request_kwargs: dict[str, Any] = {
        "model": model,
        "input": [{"role": "user", "content": prompt}],
        "temperature": settings.temperature,
    }
    if settings.max_tokens and settings.max_tokens > 0:
        request_kwargs["max_output_tokens"] = settings.max_tokens

    for attempt in Retrying(
        stop=stop_after_attempt(max(1, settings.max_retries)),
        wait=wait_exponential(multiplier=RATE_LIMIT_WAIT_SECONDS, max=60),
        retry=retry_if_exception_type(RateLimitError),
        reraise=True,
    ):
        with attempt:
            response = client.responses.create(**request_kwargs)
    return response_text_or_raise(response, step=f"Fact extraction ({model})")


def call_llm(prompt: str, client: OpenAI, settings: Optional[Settings] = None) -> Optional[str]:
    """Try each configured model in order; return the first answer or None."""
    settings = settings or get_settings()
    for model in settings.analysis_models:
        try:
            text = _complete_once(client, model, prompt, settings)
        except (OpenAIError, RuntimeError) as exc:
            logger.warning("Model %s failed, trying next: %s", model, exc)
            continue
        logger.info("Model %s answered (%d chars)", model, len(text))
        return text
    return None


def _load_answer(text: str) -> Optional[dict[str, Any]]:
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError:
        logger.error("Fact sheet JSON could not be parsed: %s", text[:80])
        return None
    if isinstance(data, list):
        data = data[0] if data and isinstance(data[0], dict) else None
    if not isinstance(data, dict):
        return None
    return data


def _fact_sheet_from(data: dict[str, Any], pr_type: PrType | str | None) -> Optional[FactSheet]:
    data = {**data, "prType": PrType.coerce(pr_type or data.get("prType"))}
    try:
        return FactSheet.model_validate(data)
    except ValidationError as exc:
        logger.error("Fact sheet JSON failed validation: %s", exc)
        return None


def parse_fact_sheet_json(text: str, pr_type: PrType | str | None = None) -> Optional[FactSheet]:
    """Validate a model answer into a FactSheet; None when it is not a JSON object."""
    data = _load_answer(text)
    if data is None:
        return None
    return _fact_sheet_from(data, pr_type)


def parse_specs(values: Any) -> List[SpecItem]:
    """
    Turn the model's "label: value" spec strings into SpecItems.

    Known labels pick the category; anything else is kept whole as an
    uncategorized spec. Placeholders ("정보 없음") are dropped.
    """
    if not isinstance(values, list):
        return []
    specs: List[SpecItem] = []
    for raw in values:
        text = str(raw or "").strip()
        if not text or text == NO_INFO:
            continue
        label, separator, value = text.partition(":")
        category = SPEC_LABELS.get(label.strip().lower()) if separator else None
        if category is None:
            specs.append(SpecItem(category=SpecCategory.OTHER, value=text))
            continue
        value = value.strip()
        if value and value != NO_INFO:
            specs.append(SpecItem(category=category, value=value))
    return specs


def analyze_text(
    raw_text: str,
    hint: str,
    client: Optional[OpenAI],
    *,
    pr_type: PrType | str | None = None,
    title: str = "",
    source_label: str = "문서",
    limit: int = FILE_TEXT_LIMIT,
) -> Optional[AnalysisResult]:
    """Ask the model for a fact sheet and specs; None when no model is available or usable."""
    if client is None:
        return None
    prompt = build_prompt(raw_text, hint, source_label=source_label, title=title, limit=limit)
    answer = call_llm(prompt, client)
    if not answer:
        return None
    data = _load_answer(answer)
    if data is None:
        return None
    fact_sheet = _fact_sheet_from(data, pr_type)
    if fact_sheet is None:
        return None
    return AnalysisResult(success=True, data=fact_sheet, specs=parse_specs(data.get("specs")))


def _candidate_lines(text: str) -> List[str]:
    lines = [line.strip() for line in (text or "").splitlines()]
    return [line for line in lines if 5 < len(line) < 150]


def _detect_brand(*sources: str) -> Optional[tuple[str, str]]:
    for source in sources:
        lowered = (source or "").lower()
        for token, brand in KNOWN_BRANDS.items():
            if token in lowered:
                return brand
    return None


def fallback_from_file(text: str, file_name: str, pr_type: PrType | str | None = None) -> FactSheet:
    lines = _candidate_lines(text)
    first_meaningful = next((line for line in lines if len(line) > 10), file_name)
    return FactSheet(
        brand_name=NO_INFO,
        product_name=first_meaningful,
        pr_type=PrType.coerce(pr_type),
        definition=f"{NO_INFO} (AI 분석 불가)",
        features=lines[:3],
        core_messages=[],
        usage_context=NO_INFO,
    )


def _product_from_title(meta_title: str) -> str:
    # "제품명 | 사이트명" or "제품명 - 사이트명"
    for separator in ("|", "-"):
        if separator in meta_title:
            return meta_title.split(separator)[0].strip()
    return meta_title.strip()


def fallback_from_page(
    raw_text: str, meta_title: str, url: str, pr_type: PrType | str | None = None
) -> FactSheet:
    detected = _detect_brand(url, raw_text)
    brand_name = detected[0] if detected else NO_INFO
    product_name = _product_from_title(meta_title)

    lines = _candidate_lines(raw_text)
    features = [line for line in lines if any(k in line for k in FEATURE_KEYWORDS)][:3]
    for line in lines:
        if len(features) >= 3:
            break
        if line not in features and 10 < len(line) < 80:
            features.append(line)

    return FactSheet(
        brand_name=brand_name,
        product_name=product_name or "상품 정보 없음",
        pr_type=PrType.coerce(pr_type),
        definition=f"{brand_name} {product_name}",
        features=features,
        core_messages=[product_name or NO_INFO],
        usage_context=NO_INFO,
        channels=detected[1] if detected else "공식 홈페이지",
    )


def analyze_file_content(
    text: str,
    file_name: str,
    client: Optional[OpenAI] = None,
    *,
    pr_type: PrType | str | None = None,
    use_default_client: bool = True,
) -> AnalysisResult:
    """Build a fact sheet from extracted document text."""
    if not is_sufficient(text):
        return AnalysisResult(success=False, message=INSUFFICIENT_TEXT_MESSAGE)

    logger.info("Analyzing %s (%d chars)", file_name, len(text))
    if client is None and use_default_client:
        client = client_from_settings()
    extracted = analyze_text(text, "", client, pr_type=pr_type, source_label="문서")
    if extracted:
        return extracted

    logger.warning("LLM analysis unavailable for %s; using heuristic parser.", file_name)
    return AnalysisResult(
        success=True,
        data=fallback_from_file(text, file_name, pr_type),
        message=FALLBACK_MESSAGE,
        used_fallback=True,
    )


def analyze_page(
    raw_text: str,
    meta_title: str,
    url: str,
    client: Optional[OpenAI] = None,
    *,
    pr_type: PrType | str | None = None,
    use_default_client: bool = True,
) -> AnalysisResult:
    """Build a fact sheet from a scraped product page."""
    if not raw_text and not meta_title:
        return AnalysisResult(success=False, message=PAGE_UNAVAILABLE_MESSAGE)

    if client is None and use_default_client:
        client = client_from_settings()
    extracted = None
    if len(raw_text) > 50 or meta_title:
        detected = _detect_brand(url)
        extracted = analyze_text(
            raw_text,
            detected[0] if detected else NO_INFO,
            client,
            pr_type=pr_type,
            title=meta_title,
            source_label="제품 페이지 내용",
            limit=PAGE_TEXT_LIMIT,
        )
    if extracted:
        return extracted

    logger.warning("LLM analysis unavailable for %s; using heuristic parser.", url)
    return AnalysisResult(
        success=True,
        data=fallback_from_page(raw_text, meta_title, url, pr_type),
        message=FALLBACK_MESSAGE,
        used_fallback=True,
    )


def analyze_link(
    url: str,
    client: Optional[OpenAI] = None,
    *,
    session: Optional[requests.Session] = None,
    pr_type: PrType | str | None = None,
) -> AnalysisResult:
    if not url:
        return AnalysisResult(success=False, message="URL is required")
    page = fetch_page(url, session=session)
    if page is None:
        return AnalysisResult(success=False, message=PAGE_UNAVAILABLE_MESSAGE)
    return analyze_page(page.text, page.title, url, client, pr_type=pr_type)
