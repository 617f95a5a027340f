import csv
import io
import os
import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .batch import BatchReport

CSV_HEADER = ["Index", "Password", "Score", "Strength", "Entropy", "Crack Time", "Issues"]


def ensure_dir_exists(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Atomically write bytes to 'path' by writing to a temp file and renaming.
    """
    ensure_dir_exists(path)
    tmp = path + ".tmp"
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)


def dump_json_bytes(obj: dict) -> bytes:
    return json.dumps(obj, ensure_ascii=False, indent=2).encode("utf-8")


def report_to_csv(report: "BatchReport") -> str:
    """CSV text with masked passwords; failed items keep their error in the Issues column."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in report.items:
        r = item.result
        if r is None:
            writer.writerow([item.index, item.masked, "", "", "", "", item.error])
            continue
        writer.writerow([
            item.index,
            item.masked,
            r.score,
            r.strength.label,
            f"{r.entropy_bits:.1f}",
            r.crack_time,
            "; ".join(i.value for i in r.issues),
        ])
    return buf.getvalue()


def export_csv(report: "BatchReport", path: str) -> str:
    atomic_write_bytes(path, report_to_csv(report).encode("utf-8"))
    return path


def export_json(report: "BatchReport", path: str) -> str:
    atomic_write_bytes(path, dump_json_bytes(report.to_dict()))
    return path
