# main.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from classes import DEFAULT_SETTINGS
from errors import StatementParseError
from extract.pdf_text import pdf_to_glyph_runs
from extract.unified_lines import pages_to_text
from statement import convert_to_import_format, parse_csv_file, parse_statement
from validator import transactions_frame

APP_NAME = "statement-ingest"

# Exit codes
EXIT_SUCCESS = 0
EXIT_PARSE_ERROR = 2

logger = logging.getLogger(__name__)
app = typer.Typer(name=APP_NAME, help="Bank statement ingestion (PDF / CSV)", add_completion=False)


def process_document(
    path: Path,
    password: Optional[str] = None,
    audit_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Single statement: extract -> detect -> parse -> validate, plus optional debug artifacts."""
    if path.suffix.lower() == ".csv":
        result = parse_csv_file(path)
    else:
        pages = pdf_to_glyph_runs(path, password=password)
        text = pages_to_text(pages, DEFAULT_SETTINGS.row_tolerance)
        if audit_dir is not None:
            audit_dir.mkdir(parents=True, exist_ok=True)
            # plain text dump of reconstructed lines
            (audit_dir / (path.stem + "_text_dump.txt")).write_text(text, encoding="utf-8")
        result = parse_statement(text)

    out = result.to_dict()
    out["file_name"] = path.name
    out["import"] = [t.to_dict() for t in convert_to_import_format(result.transactions)]

    if audit_dir is not None:
        audit_dir.mkdir(parents=True, exist_ok=True)
        with open(audit_dir / (path.stem + "_structured.json"), "w", encoding="utf-8") as f:
            json.dump(out, f, ensure_ascii=False, indent=2)
        transactions_frame(result.transactions).to_csv(audit_dir / (path.stem + "_transactions.csv"), index=False)

    return out


@app.command()
def main(
    paths: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Statement files (.pdf or .csv)"),
    output: Path = typer.Option(Path("results") / "bundle.json", "--output", "-o", help="Bundle JSON path"),
    password: Optional[str] = typer.Option(None, "--password", help="Password for encrypted PDFs"),
    audit: bool = typer.Option(False, "--audit", help="Write text dumps and per-file results to results_audit/"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    audit_dir = Path("results_audit") if audit else None
    bundle: Dict[str, Any] = {"schema_version": "statement-ingest.v1", "statements": [], "errors": []}

    for path in paths:
        try:
            stmt = process_document(path, password=password, audit_dir=audit_dir)
        except StatementParseError as exc:
            logger.error("%s: %s", path.name, exc.detail)
            bundle["errors"].append({"file_name": path.name, "error": type(exc).__name__, "detail": exc.detail})
            continue
        summary = stmt["summary"]
        typer.echo(
            f"🏦 {stmt['bank']['name']} - {path.name}: {summary['transaction_count']} transactions, "
            f"in {summary['total_income']:.2f} / out {summary['total_expenses']:.2f}"
        )
        bundle["statements"].append(stmt)

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(bundle, f, ensure_ascii=False, indent=2)
    typer.echo(f"✅ Bundle saved to {output}")

    if bundle["errors"]:
        raise typer.Exit(EXIT_PARSE_ERROR)


if __name__ == "__main__":
    app()
