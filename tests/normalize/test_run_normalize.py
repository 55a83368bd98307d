from __future__ import annotations

import pytest

from src.ingest.loader import build_dataset
from src.normalize import run_normalize
from src.normalize.qa_checks import qa_duplicates, run_qa


def test_qa_passes_on_pipeline_output(short_csv, official_csv):
    for text in (short_csv, official_csv):
        assert run_qa(build_dataset(text).records) == []


def test_duplicates_are_warnings():
    ds = build_dataset(
        "date,symbol,long,short\n"
        "2024-01-05,GOLD,1,1\n"
        "2024-01-05,GOLD,2,1\n"
    )
    assert run_qa(ds.records) == []
    warns = qa_duplicates(ds.records)
    assert len(warns) == 1
    assert "GOLD@2024-01-05" in warns[0]


def test_cli_ok(tmp_path, short_csv):
    src = tmp_path / "cot.csv"
    src.write_text(short_csv, encoding="utf-8")
    assert run_normalize.main(["--root", str(tmp_path), "--source", str(src)]) == 0


def test_cli_schema_failure(tmp_path):
    src = tmp_path / "cot.csv"
    src.write_text("a,b\n1,2\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        run_normalize.main(["--root", str(tmp_path), "--source", str(src)])
