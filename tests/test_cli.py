import json
from datetime import date
from pathlib import Path

from docx import Document
from typer.testing import CliRunner

from presscraft import analysis, feeds
from presscraft.cli import _to_plain, _write_output, app
from presscraft.event_store import JsonEventStore, add_event
from presscraft.models import FactSheet
from presscraft.workflow import DraftResult

runner = CliRunner()

FACT_SHEET = {
    "brandName": "데스커",
    "productName": "모션데스크",
    "prType": "promotion",
    "definition": "봄맞이 홈오피스 기획전",
    "features": ["사은품 증정", "무료 배송"],
    "usageContext": "홈오피스",
    "coreMessages": ["합리적인 가격"],
    "discountPromo": "최대 30% 할인",
}


def _write_json(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


def test_to_plain_serializes_models_paths_and_dataclasses(tmp_path):
    result = DraftResult(fact_sheet=FactSheet.model_validate(FACT_SHEET), draft="본문")
    payload = _to_plain({"result": result, "path": tmp_path / "x.docx", "day": date(2024, 3, 18)})

    assert payload["result"]["fact_sheet"]["brandName"] == "데스커"
    assert payload["path"] == str(tmp_path / "x.docx")
    assert payload["day"] == "2024-03-18"
    json.dumps(payload)


def test_write_output_json_and_text(tmp_path):
    _write_output(tmp_path / "out.json", "unused", {"draft": "본문"})
    _write_output(tmp_path / "out.txt", "본문", {})

    assert json.loads((tmp_path / "out.json").read_text(encoding="utf-8")) == {"draft": "본문"}
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "본문"


def test_draft_command_prints_release(tmp_path):
    sheet = _write_json(tmp_path / "sheet.json", FACT_SHEET)

    result = runner.invoke(app, ["draft", str(sheet)])

    assert result.exit_code == 0
    assert "[프로모션]" in result.output
    assert "주요 혜택으로 최대 30% 할인 등이 마련되었다." in result.output


def test_draft_command_writes_docx(tmp_path):
    sheet = _write_json(tmp_path / "sheet.json", FACT_SHEET)
    specs = _write_json(tmp_path / "specs.json", [{"category": "function", "value": "모터 높이 조절"}])
    out = tmp_path / "draft.docx"

    result = runner.invoke(
        app, ["draft", str(sheet), "--specs", str(specs), "--pr-type", "new_product", "--out", str(out)]
    )

    assert result.exit_code == 0
    texts = [p.text for p in Document(out).paragraphs]
    assert "신제품 출시" in texts
    assert any(text.startswith("첫째, 모터 높이 조절 기능을 통해") for text in texts)


def test_analyze_command_reports_insufficient_text(tmp_path):
    source = tmp_path / "empty.txt"
    source.write_text("짧음", encoding="utf-8")

    result = runner.invoke(app, ["analyze", str(source)])

    assert result.exit_code == 1
    assert "충분한 텍스트" in result.output


def test_analyze_command_uses_fallback(tmp_path, monkeypatch):
    monkeypatch.setattr(analysis, "client_from_settings", lambda: None)
    source = tmp_path / "source.txt"
    source.write_text("데스커 모션데스크 신제품 보도자료\n듀얼 모터 높이 조절 지원", encoding="utf-8")

    result = runner.invoke(app, ["analyze", str(source), "--pr-type", "trend"])

    assert result.exit_code == 0
    assert "[업계 트렌드]" in result.output


def test_report_metadata_command_renders_table(tmp_path):
    report = tmp_path / "2024.03.16_제품출시_기타.txt"
    report.write_text("번호\n1 2 3 4 5", encoding="utf-8")
    out = tmp_path / "meta.json"

    result = runner.invoke(app, ["report-metadata", str(report), "--out", str(out)])

    assert result.exit_code == 0
    rows = json.loads(out.read_text(encoding="utf-8"))
    assert rows == [
        {
            "file": report.name,
            "extractedDate": "2024-03-15",
            "extractedTitle": "제품출시",
            "articleCount": 5,
        }
    ]


def test_group_news_command(tmp_path):
    news = _write_json(
        tmp_path / "news.json",
        {
            "items": [
                {"title": "데스커 모션데스크 출시", "link": "https://1", "pubDate": "2024-03-18T09:00:00+09:00"},
                {"title": "<b>데스커</b> 모션데스크 출시", "link": "https://2", "pubDate": "2024-03-18T12:00:00+09:00"},
            ]
        },
    )
    out = tmp_path / "groups.json"

    result = runner.invoke(app, ["group-news", str(news), "--no-by-day", "--out", str(out)])

    assert result.exit_code == 0
    groups = json.loads(out.read_text(encoding="utf-8"))
    assert len(groups) == 1
    assert len(groups[0]["all"]) == 2


def test_summary_command(tmp_path):
    store = JsonEventStore(tmp_path / "events.json")
    add_event(store, "출시", date(2024, 3, 18))

    result = runner.invoke(app, ["summary", "--store", str(store.path)])

    assert result.exit_code == 0
    assert "1 events, 0 articles" in result.output


def test_monitor_feeds_command(tmp_path, monkeypatch):
    def fake_parse(url, agent=None):
        return {"entries": [{"title": "데스커 신제품", "link": url + "#1", "published": "Mon, 18 Mar 2024 09:00:00 +0900"}]}

    monkeypatch.setattr(feeds.feedparser, "parse", fake_parse)
    out = tmp_path / "feeds.json"

    result = runner.invoke(
        app,
        ["monitor-feeds", "--no-defaults", "--feed", "데스크뉴스=https://desk.example.com/rss", "--out", str(out)],
    )

    assert result.exit_code == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert [item["source"] for item in payload["items"]] == ["데스크뉴스"]
    assert payload["days"][0]["date"] == "2024-03-18"


def test_monitor_feeds_requires_a_feed():
    result = runner.invoke(app, ["monitor-feeds", "--no-defaults"])
    assert result.exit_code != 0
