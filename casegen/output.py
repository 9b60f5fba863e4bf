"""Formats generated cases and parses case files back."""
import csv
import io
import json
from typing import Any, Dict, List, Optional, Sequence, TextIO


def render_value(value: Any) -> str:
    return "" if value is None else str(value)


def format_table(headers: List[str], rows: Sequence[Sequence[Any]]) -> str:
    if not headers:
        return ""

    cells = [[render_value(v) for v in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for col_idx, val in enumerate(row):
            widths[col_idx] = max(widths[col_idx], len(val))

    header_str = "  ".join(h.ljust(w) for h, w in zip(headers, widths))
    lines = [header_str]
    for row in cells:
        lines.append("  ".join(v.ljust(w) for v, w in zip(row, widths)))

    return "\n".join(lines)


def format_csv(headers: List[str], rows: Sequence[Sequence[Any]]) -> str:
    f = io.StringIO()
    writer = csv.writer(f)
    writer.writerow(headers)
    writer.writerows([render_value(v) for v in row] for row in rows)
    return f.getvalue()


def format_json(headers: List[str], rows: Sequence[Sequence[Any]],
                metadata: Optional[Dict[str, Any]] = None) -> str:
    result = []
    for row in rows:
        obj = {headers[i]: _jsonable(v) for i, v in enumerate(row)}
        result.append(obj)
    if metadata is not None:
        return json.dumps({"metadata": metadata, "test_cases": result}, indent=2)
    return json.dumps(result, indent=2)


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def parse_csv_cases(f: TextIO, canonical_headers: List[str]) -> List[List[str]]:
    """
    Reads a CSV case file into rows ordered by canonical_headers.
    Blank rows and extra columns are ignored; missing columns raise ValueError.
    """
    try:
        reader = csv.reader(f)
        headers = next(reader, None)
        if not headers:
            raise ValueError("Cases file is empty")
        headers = [h.strip() for h in headers]

        missing = [h for h in canonical_headers if h not in headers]
        if missing:
            raise ValueError(f"missing required columns: {', '.join(missing)}")

        header_idx = {h: i for i, h in enumerate(headers)}
        rows = []
        for line in reader:
            if not any(cell.strip() for cell in line):
                continue
            row = []
            for h in canonical_headers:
                idx = header_idx[h]
                row.append(line[idx].strip() if idx < len(line) else "")
            rows.append(row)
        return rows
    except csv.Error as e:
        raise ValueError(f"Cases CSV is invalid: {e}")


def parse_json_cases(f: TextIO, canonical_headers: List[str]) -> List[List[str]]:
    """Reads either a bare list of case objects or {"test_cases": [...]}."""
    try:
        data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Cases JSON is invalid: {e}")

    if isinstance(data, dict) and "test_cases" in data:
        cases = data["test_cases"]
    else:
        cases = data

    if not isinstance(cases, list):
        raise ValueError("Cases JSON must be an array or contain a 'test_cases' array.")

    rows = []
    for test_case in cases:
        if not isinstance(test_case, dict):
            raise ValueError("Each JSON case must be an object.")
        rows.append([render_value(test_case.get(h)) for h in canonical_headers])
    return rows
