from __future__ import annotations

from typing import Any, Dict, List


def _blank_line(buf: List[str]):
    if buf and buf[-1] != "":
        buf.append("")


def _fmt(text: str, data: Dict[str, Any]) -> str:
    try:
        return str(text).format(**data)
    except (KeyError, IndexError, ValueError, AttributeError):
        return str(text)


def monotable(rows: List[List[str]]) -> List[str]:
    col_widths: List[int] = []
    for row in rows:
        for i, cell in enumerate(row):
            if i >= len(col_widths):
                col_widths.append(len(cell))
            else:
                col_widths[i] = max(col_widths[i], len(cell))
    lines = []
    for row in rows:
        padded = [cell.ljust(col_widths[i]) for i, cell in enumerate(row)]
        lines.append("  ".join(padded).rstrip())
    return lines


def _lookup(value: Any, data: Dict[str, Any]) -> Any:
    # "rows": "command_rows" or "{command_rows}" reads the list from data
    if isinstance(value, str):
        key = value.strip()
        if key.startswith("{") and key.endswith("}"):
            key = key[1:-1]
        return data.get(key, value)
    return value


def _normalize(block: Dict[str, Any]) -> Dict[str, Any]:
    if len(block.keys()) == 1 and next(iter(block.keys())) not in ("type", "include"):
        k = next(iter(block.keys()))
        v = block[k]
        if isinstance(v, dict):
            b = {"type": k}
            b.update(v)
            return b
        if isinstance(v, list):
            if k == "bullets":
                return {"type": "bullets", "items": v}
            if k == "table":
                return {"type": "table", "rows": v}
            return {"type": k, "text": "\n".join(str(x) for x in v)}
        # a bare name reads the rows or items from render data
        if k == "bullets":
            return {"type": "bullets", "items": v}
        if k == "table":
            return {"type": "table", "rows": v}
        return {"type": k, "text": str(v)}
    return block


def render_blocks(blocks: List[Dict[str, Any]], *, data: Dict[str, Any] | None = None) -> List[str]:
    """
    Render UI blocks into console lines.
    Atoms supported: header, paragraph, bullets, table, divider, spacer.
    """
    data = data or {}
    out: List[str] = []

    for block in blocks or []:
        if not isinstance(block, dict):
            continue
        block = _normalize(block)
        btype = str(block.get("type") or "").lower()

        if btype == "header":
            text = _fmt(block.get("text", ""), data)
            if text:
                out.append(text)
                out.append("-" * len(text))
            continue

        if btype == "paragraph":
            text = _fmt(block.get("text", ""), data)
            if text:
                out.extend(text.splitlines())
            continue

        if btype == "table":
            rows = _lookup(block.get("rows"), data)
            if isinstance(rows, list) and rows:
                _blank_line(out)
                out.extend(monotable([[str(c) for c in r] for r in rows]))
                _blank_line(out)
            continue

        if btype == "bullets":
            items = _lookup(block.get("items") or [], data)
            if isinstance(items, str):
                items = [items]
            for it in items:
                out.append(f"• {_fmt(str(it), data)}")
            continue

        if btype == "divider":
            _blank_line(out)
            continue

        if btype == "spacer":
            n = int(block.get("lines", 1))
            for _ in range(max(1, n)):
                out.append("")
            continue

        # Unknown: ignore

    # Compress consecutive blanks and trim both ends
    cleaned: List[str] = []
    prev_blank = False
    for part in out:
        is_blank = (part.strip() == "")
        if is_blank and prev_blank:
            continue
        cleaned.append(part)
        prev_blank = is_blank
    while cleaned and cleaned[0] == "":
        cleaned.pop(0)
    while cleaned and cleaned[-1] == "":
        cleaned.pop()
    return cleaned
