"""Literal press-release templates, one per angle.

Templates are ``str.format`` strings built one line per argument so blank
lines that carry indentation and trailing spaces survive editing; both are
part of the published layout. Fields:

- ``brand_name``, ``product_name``, ``definition``, ``usage_context``,
  ``launch_date``, ``discount_promo``, ``channels``, ``comment_intent``
- ``features`` (3 slots) and ``core_messages`` (2 slots), padded with ``""``
- ``growth`` (GROWTH_KEYWORDS) and ``growth_joined``
- per-angle computed slots documented next to each template
"""

GROWTH_KEYWORDS = ("가능성", "성장", "도전", "몰입", "워크 앤 라이프스타일", "일잘러", "주체적인 삶")
BRAND_VOICE = "전문적이지만 권위적이지 않고, 사용자의 성장을 응원하는 톤"

FEATURE_SLOTS = 3
CORE_MESSAGE_SLOTS = 2


def _lines(*lines: str) -> str:
    return "\n".join(lines)


# Slots: stories[0..2] (spec story or feature fallback), promo_sentence.
NEW_PRODUCT = _lines(
    "[신제품 출시]",
    "    ",
    "{brand_name}, {usage_context}에 최적화된 '{product_name}' 출시... \"{definition}\"",
    "",
    "- {core_messages[0]}",
    "- {core_messages[1]}",
    "",
    "(서울=00월 00일) {brand_name}가 {usage_context}를 위한 신제품 '{product_name}'을(를) {launch_date} 정식 출시한다고 밝혔다. "
    "이번 신제품은 \"{definition}\"을 핵심 가치로 내세우며, 단순한 가구를 넘어 사용자의 성장을 돕는 파트너로서 기획되었다.",
    "",
    "최근 '하이브리드 워크'가 보편화되면서 공간의 역할이 중요해지는 가운데, {brand_name}는 사용자의 실제 행동 데이터를 심층 분석하여 "
    "몰입을 방해하는 요소를 제거하고 집중력을 높여주는 솔루션을 개발했다.",
    "",
    "신제품 '{product_name}'의 차별화된 특징은 다음과 같다.",
    "",
    "첫째, {stories[0]}",
    "둘째, {stories[1]}",
    "셋째, {stories[2]}",
    "",
    "{brand_name} CXM팀 관계자는 \"{comment_intent}\"라며 \"앞으로도 {brand_name}는 '가능성'을 응원하는 워크 앤 라이프스타일 브랜드로서 "
    "고객의 삶에 긍정적인 변화를 주는 제품을 지속적으로 선보일 것\"이라고 전했다.",
    "",
    "{promo_sentence} 제품에 대한 자세한 정보는 {channels}에서 확인할 수 있다.",
    "",
    "# # #",
    "",
    "[브랜드 소개: {brand_name}]",
    "퍼시스그룹의 {brand_name}는 도전하고 성장하는 사람들을 위한 워크 앤 라이프스타일 브랜드입니다. "
    "단순히 가구를 만드는 것을 넘어, 사용자가 자신의 가능성을 발견하고 몰입할 수 있는 최적의 환경을 제안합니다.",
)

# Used when there are fewer spec stories than feature slots.
NEW_PRODUCT_FEATURE_FALLBACKS = (
    "{feature} 기능을 탑재하여 사용성을 강화했다.",
    "{feature}을(를) 통해 차별화된 경험을 제공한다.",
    "{feature} 적용으로 디테일한 부분까지 완성도를 높였다.",
)

NEW_PRODUCT_PROMO = "한편, 이번 출시를 기념하여 {discount_promo} 혜택을 제공한다."

# Slot: campaign_offer (discount_promo or CAMPAIGN_DEFAULT_OFFER).
CAMPAIGN = _lines(
    "[브랜드 캠페인]",
    "",
    "{brand_name}, \"{definition}\" 테마로 신규 캠페인 전개... {core_messages[0]}",
    "",
    "- {product_name} 캠페인 통해 '{growth[1]}'과 '{growth[3]}' 메시지 전달",
    "- {usage_context} 속 '나다운 성장'을 응원하는 브랜드 철학 담아",
    "",
    "(서울=00월 00일) 워크 앤 라이프스타일 브랜드 {brand_name}가 새로운 브랜드 캠페인 '{product_name}'을 공개하며 고객 소통 강화에 나선다. "
    "이번 캠페인은 \"{definition}\"이라는 슬로건 아래, 주체적인 삶을 살아가는 모든 이들의 '{growth[0]}'을 응원하기 위해 기획되었다.",
    "",
    "캠페인의 핵심 메시지는 두 가지다. 첫째, {core_messages[0]}이다. 이는 단순한 응원을 넘어 실질적인 변화를 이끌어내겠다는 의지를 담고 있다. "
    "둘째, {core_messages[1]}을(를) 통해 {brand_name}만의 진정성 있는 브랜드 가치를 전달한다.",
    "",
    "특히 이번 캠페인에서는 {features[0]} 등 소비자가 직접 참여할 수 있는 다양한 프로그램을 마련하여 "
    "'소통'과 '경험'을 중시하는 MZ세대 '일잘러'들의 높은 호응이 기대된다.",
    "",
    "{brand_name} 브랜드 관계자는 \"{comment_intent}\"라며 \"가구가 놓인 공간이 단순한 물리적 장소가 아니라, "
    "꿈을 키우고 성장을 도모하는 인큐베이팅 공간이 되기를 바란다\"고 밝혔다.",
    "",
    "한편, {brand_name}는 이번 캠페인 런칭을 기념해 {campaign_offer}를 진행한다. 자세한 내용은 {channels}에서 확인할 수 있다.",
    "",
    "# # #",
    "",
    "[브랜드 소개: {brand_name}]",
    "(보일러플레이트 자동 삽입)",
)

CAMPAIGN_DEFAULT_OFFER = "다양한 온/오프라인 이벤트"

TREND = _lines(
    "[업계 트렌드]",
    "",
    "\"오피스의 변화, 가구가 주도한다\"... {brand_name}가 제안하는 {usage_context} 트렌드",
    "",
    "- {product_name} 키워드로 본 2024년 라이프스타일 전망",
    "- {core_messages[0]}",
    "",
    "(서울=00월 00일) 팬데믹 이후 업무와 휴식의 경계가 희미해지는 '블러(Blur)' 현상이 가속화되면서 가구 트렌드 또한 급변하고 있다. "
    "워크 앤 라이프스타일 브랜드 {brand_name}는 빅데이터 분석을 통해 올해의 핵심 키워드로 '{product_name}'을(를) 선정하고 새로운 공간 솔루션을 제안했다.",
    "",
    "{brand_name}가 주목한 트렌드는 '{definition}'이다. 과거에는 획일화된 사무 공간이 주를 이뤘다면, "
    "이제는 개개인의 업무 패턴과 취향을 반영한 '커스터마이징' 공간이 대세로 자리 잡았다.",
    "",
    "이에 발맞춰 {brand_name}는 ▲{features[0]} ▲{features[1]} ▲{features[2]} 등 변화하는 라이프스타일에 유연하게 대응할 수 있는 기능을 제품에 적극 반영하고 있다.",
    "",
    "특히 {core_messages[0]}에 대한 소비자 니즈가 증가함에 따라, 관련 제품군의 매출이 전년 대비 급성장하는 추세다. "
    "{usage_context}에서의 활용도를 높인 점이 주효했다는 분석이다.",
    "",
    "{brand_name} 관계자는 \"{comment_intent}\"라며 \"급변하는 트렌드 속에서도 변하지 않는 본질은 '사용자에 대한 이해'다. "
    "앞으로도 데이터를 기반으로 한 {core_messages[1]} 가치를 지속적으로 전달할 것\"이라고 전했다.",
    "",
    "자세한 트렌드 리포트 및 관련 제품 정보는 {channels}에서 확인할 수 있다.",
    "",
    "# # #",
)

# Slot: benefits_paragraph (PROMOTION_BENEFITS plus a blank line, or "").
PROMOTION = _lines(
    "[프로모션]",
    "    ",
    "{brand_name}, {product_name} 진행... \"최대 혜택으로 만나는 기회\"",
    "",
    "- {definition}",
    "- {discount_promo}",
    "",
    "(서울=00월 00일) {brand_name}가 고객 성원에 보답하기 위해 역대급 혜택을 담은 '{product_name}' 프로모션을 진행한다고 {launch_date} 밝혔다.",
    "",
    "이번 행사는 \"{definition}\"을 테마로 기획되었으며, {usage_context} 꾸미기를 준비하는 고객들에게 합리적인 쇼핑 기회를 제공한다.",
    "",
    "{benefits_paragraph}{brand_name} 관계자는 \"{comment_intent}\"라며 \"가격 혜택뿐만 아니라 {core_messages[0]} 등 "
    "브랜드 경험을 강화할 수 있는 풍성한 콘텐츠도 함께 준비했다\"고 전했다.",
    "",
    "행사에 대한 자세한 내용은 {channels}에서 확인할 수 있다.",
    "",
    "# # #",
)

PROMOTION_BENEFITS = (
    "주요 혜택으로 {discount_promo} 등이 마련되었다. 특히 베스트셀러 제품에 대해 ▲{features[0]} ▲{features[1]} "
    "등의 추가 혜택을 제공하여 실속을 챙기려는 소비자들의 이목을 끈다."
)

ISSUE = _lines(
    "[브랜드 이슈]",
    "",
    "{brand_name}, {product_name} 공개... \"{definition}\"",
    "",
    "- {core_messages[0]}",
    "- {usage_context}에서의 새로운 고객 경험 제안",
    "",
    "(서울=00월 00일) {brand_name}가 {product_name} 소식을 전하며 브랜드 외연 확장에 나섰다. ",
    "",
    "이번 {product_name}은 \"{definition}\"이라는 목표 아래 추진되었으며, {brand_name}가 지향하는 '{growth_joined}'의 가치를 "
    "고객들이 {usage_context}에서 직접 경험할 수 있도록 하는 데 중점을 두었다.",
    "",
    "주요 포인트는 세 가지다.",
    "첫째, {features[0]}이다.",
    "둘째, {features[1]}을 통해 차별화를 꾀했다.",
    "셋째, {features[2]}으로 진정성을 더했다.",
    "",
    "이를 통해 고객들에게 {core_messages[0]} 메시지를 전달하고, 궁극적으로는 {core_messages[1]} 효과를 창출할 것으로 기대된다.",
    "",
    "{brand_name} 관계자는 \"{comment_intent}\"라며 \"이번 이슈를 통해 더 많은 분들이 {brand_name}의 철학을 공감하고 공유할 수 있기를 바란다\"고 밝혔다.",
    "",
    "자세한 내용은 {channels}에서 확인 가능하다.",
    "",
    "# # #",
)
