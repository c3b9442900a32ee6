from datetime import date, datetime, timedelta, timezone

from presscraft.analysis import AnalysisResult
from presscraft.models import FactSheet, NewsItem, PrType, SpecItem
from presscraft.workflow import (
    build_news_timeline,
    draft_from_fact_sheet,
    draft_from_file,
    draft_from_source,
    process_report_upload,
)

KST = timezone(timedelta(hours=9))


def fake_analyzer(text, file_name, client, pr_type=None):
    sheet = FactSheet(
        brand_name="데스커",
        product_name="모션데스크",
        pr_type=PrType.coerce(pr_type),
        features=["듀얼 모터"],
    )
    return AnalysisResult(success=True, data=sheet)


def test_draft_from_source_with_injected_analyzer():
    result = draft_from_source(
        "본문" * 20,
        "source.txt",
        specs=[SpecItem(category="dimensions", value="W1400")],
        pr_type="new_product",
        analyzer_fn=fake_analyzer,
    )
    assert result.fact_sheet.brand_name == "데스커"
    assert "W1400의 넉넉한 사이즈로" in result.draft
    assert result.used_fallback is False


def test_draft_from_source_without_text_returns_no_draft():
    def failing(text, file_name, client, pr_type=None):
        return AnalysisResult(success=False, message="파일에서 충분한 텍스트를 추출하지 못했습니다.")

    result = draft_from_source("", "empty.txt", analyzer_fn=failing)
    assert result.draft is None
    assert result.fact_sheet is None
    assert result.message == "파일에서 충분한 텍스트를 추출하지 못했습니다."


def test_draft_from_fact_sheet_override_does_not_mutate_input():
    sheet = FactSheet(brand_name="데스커", product_name="모션데스크", pr_type="campaign")
    draft = draft_from_fact_sheet(sheet, pr_type="trend")
    assert draft.startswith("[업계 트렌드]")
    assert sheet.pr_type is PrType.CAMPAIGN


def test_draft_from_file_reads_source(tmp_path):
    path = tmp_path / "source.md"
    path.write_text("데스커 모션데스크 신제품 출시 안내 자료", encoding="utf-8")
    result = draft_from_file(path, pr_type="issue", analyzer_fn=fake_analyzer)
    assert result.draft.startswith("[브랜드 이슈]")


def test_process_report_upload_without_extractor_uses_filename():
    metadata = process_report_upload("20240316_제품출시.hwp", b"binary", today=date(2024, 5, 1))
    assert metadata.extracted_date == date(2024, 3, 15)
    assert metadata.extracted_title == "제품출시"
    assert metadata.article_count == 0


def test_build_news_timeline_groups_each_day():
    class FakeSearch:
        def __init__(self):
            self.calls = []

        def search_all(self, query, sort="date", max_pages=10):
            self.calls.append((query, sort, max_pages))
            return [
                NewsItem(title="데스커 신제품 출시", link="https://1", pub_date=datetime(2024, 3, 18, 9, tzinfo=KST)),
                NewsItem(title="데스커 신제품 출시", link="https://2", pub_date=datetime(2024, 3, 17, 9, tzinfo=KST)),
                NewsItem(title="[포토] 데스커 신제품 출시", link="https://3", pub_date=datetime(2024, 3, 18, 11, tzinfo=KST)),
            ]

    search = FakeSearch()
    timeline = build_news_timeline("데스커", search, max_pages=3, timezone="Asia/Seoul")

    assert search.calls == [("데스커", "date", 3)]
    assert [day.date for day in timeline] == [date(2024, 3, 18), date(2024, 3, 17)]
    assert timeline[0].groups[0].count == 2


def test_draft_from_source_uses_specs_found_by_analyzer():
    def analyzer_with_specs(text, file_name, client, pr_type=None):
        result = fake_analyzer(text, file_name, client, pr_type)
        result.specs = [SpecItem(category="material", value="원목")]
        return result

    result = draft_from_source("본문" * 20, "source.txt", analyzer_fn=analyzer_with_specs)

    assert [spec.value for spec in result.specs] == ["원목"]
    assert "원목" in result.draft

    explicit = draft_from_source(
        "본문" * 20,
        "source.txt",
        specs=[SpecItem(category="dimensions", value="W1400")],
        analyzer_fn=analyzer_with_specs,
    )
    assert [spec.value for spec in explicit.specs] == ["W1400"]
    assert "원목" not in explicit.draft
