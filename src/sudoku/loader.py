import json
import os
from typing import Any, Dict, List, Optional

import pandas as pd

from src.utils.io import load_json

PUZZLE_KEYS = ("puzzle", "grid", "quizzes", "quiz", "board")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .json, .jsonl, .csv and .parquet formats.
    Returns a list of puzzle records, each with at least "id" and "puzzle".
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = os.path.splitext(os.path.basename(file_path))[0]

    def _is_missing(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, float) and pd.isna(value):
            return True
        return isinstance(value, str) and value.strip() == ""

    def _extract_grid(record: Dict[str, Any]) -> Optional[Any]:
        for key in PUZZLE_KEYS:
            value = record.get(key)
            if not _is_missing(value):
                return value
        return None

    def _normalize_record(record: Dict[str, Any], position: int) -> Dict[str, Any]:
        record = {k: v for k, v in record.items() if not _is_missing(v)}
        grid = _extract_grid(record)
        if grid is not None:
            if isinstance(grid, str):
                grid = grid.strip()
                # CSV/parquet cells sometimes hold a JSON-encoded matrix.
                if grid.startswith("["):
                    try:
                        grid = json.loads(grid)
                    except json.JSONDecodeError:
                        # Left as text; parsing reports it per puzzle.
                        pass
            record["puzzle"] = grid
        if "id" not in record:
            record["id"] = f"{stem}-{position}"
        else:
            record["id"] = str(record["id"])
        return record

    def _records_from_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
        records = df.to_dict(orient="records")
        return [_normalize_record(r, i) for i, r in enumerate(records)]

    def _read_jsonl(path: str) -> List[Dict[str, Any]]:
        data = []
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    obj = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if isinstance(obj, dict):
                    data.append(_normalize_record(obj, len(data)))
        return data

    if file_path.endswith(".parquet"):
        return _records_from_frame(pd.read_parquet(file_path))

    if file_path.endswith(".csv"):
        # Keep grids as text so leading zeros survive.
        return _records_from_frame(pd.read_csv(file_path, dtype=str))

    if file_path.endswith(".json"):
        try:
            payload = load_json(file_path)
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL.
            return _read_jsonl(file_path)
        if isinstance(payload, list):
            if payload and all(isinstance(row, list) for row in payload):
                # A bare digit matrix.
                return [_normalize_record({"puzzle": payload}, 0)]
            return [_normalize_record(p, i) for i, p in enumerate(payload) if isinstance(p, dict)]
        if isinstance(payload, dict):
            return [_normalize_record(payload, 0)]
        return []

    return _read_jsonl(file_path)
