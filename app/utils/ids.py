from typing import Iterable


def next_sequential_id(prefix: str, existing: Iterable[str], width: int = 5) -> str:
    """
    prefix "2026", existing ["2026-00001", "2026-00007"] -> "2026-00008"
    Ids that do not parse as "<prefix>-<number>" are ignored.
    """
    highest = 0
    for value in existing:
        head, _, tail = (value or "").partition("-")
        if head != prefix or not tail.isdigit():
            continue
        highest = max(highest, int(tail))
    return f"{prefix}-{highest + 1:0{width}d}"
