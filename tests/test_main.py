import json

from typer.testing import CliRunner

from main import EXIT_PARSE_ERROR, app, process_document

runner = CliRunner()

CSV = "Date,Debit,Credit,Desc\n01-03-2024,100,0,Coffee\n02-03-2024,0,400,Salary\n"


def test_bundle_for_csv(tmp_path):
    src = tmp_path / "export.csv"
    src.write_text(CSV, encoding="utf-8")
    out = tmp_path / "bundle.json"

    result = runner.invoke(app, [str(src), "--output", str(out)])
    assert result.exit_code == 0, result.output

    bundle = json.loads(out.read_text(encoding="utf-8"))
    assert bundle["errors"] == []
    stmt = bundle["statements"][0]
    assert stmt["file_name"] == "export.csv"
    assert stmt["bank"]["id"] == "csv"
    assert [t["type"] for t in stmt["import"]] == ["expense", "income"]


def test_failed_file_is_reported(tmp_path):
    good = tmp_path / "good.csv"
    good.write_text(CSV, encoding="utf-8")
    empty = tmp_path / "empty.csv"
    empty.write_text("Date,Debit,Credit,Desc\n", encoding="utf-8")
    out = tmp_path / "bundle.json"

    result = runner.invoke(app, [str(good), str(empty), "--output", str(out)])
    assert result.exit_code == EXIT_PARSE_ERROR

    bundle = json.loads(out.read_text(encoding="utf-8"))
    assert len(bundle["statements"]) == 1
    assert bundle["errors"][0]["file_name"] == "empty.csv"
    assert bundle["errors"][0]["error"] == "NoTransactionsFoundError"


def test_audit_artifacts(tmp_path):
    src = tmp_path / "export.csv"
    src.write_text(CSV, encoding="utf-8")
    audit = tmp_path / "audit"

    out = process_document(src, audit_dir=audit)
    assert out["summary"]["transaction_count"] == 2
    assert (audit / "export_structured.json").exists()
    assert (audit / "export_transactions.csv").read_text(encoding="utf-8").startswith("original_date,date")
