import csv
import io
import json
import os

from passaudit.batch import analyze_batch
from passaudit.storage import CSV_HEADER, export_csv, export_json, report_to_csv

def test_csv_rows():
    report = analyze_batch(["Tr0ub4dor&3", None])
    rows = list(csv.reader(io.StringIO(report_to_csv(report))))
    assert rows[0] == CSV_HEADER
    assert rows[1][:4] == ["0", "Tr0u***", "85", "Very Strong"]
    assert rows[1][6] == "too_short"
    assert rows[2][0] == "1"
    assert "NoneType" in rows[2][6]

def test_csv_never_contains_full_password():
    report = analyze_batch(["SuperSecret#2024"])
    assert "SuperSecret" not in report_to_csv(report)

def test_export_files(tmp_path):
    report = analyze_batch(["password", "Tr0ub4dor&3"])
    csv_path = export_csv(report, str(tmp_path / "out" / "report.csv"))
    json_path = export_json(report, str(tmp_path / "report.json"))
    assert os.path.exists(csv_path)
    assert not os.path.exists(csv_path + ".tmp")
    with open(json_path, encoding="utf-8") as f:
        data = json.load(f)
    assert data["summary"]["total"] == 2
    assert data["results"][1]["score"] == 85
