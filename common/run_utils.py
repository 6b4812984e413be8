# common/run_utils.py
from __future__ import annotations
import os, json

def count(n: int, width: int = 16) -> str:
    """Right-aligned count with thousands separators."""
    return f"{int(n):>{width},}"

def write_json(path: str, obj) -> None:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)
