from app.utils.ids import next_sequential_id


def test_first_id_starts_at_one() -> None:
    assert next_sequential_id("2008", []) == "2008-00001"


def test_continues_after_highest_not_last() -> None:
    assert next_sequential_id("2026", ["2026-00007", "2026-00002"]) == "2026-00008"


def test_other_prefixes_and_junk_are_ignored() -> None:
    existing = ["2025-00040", "T1", "2026-abc", "", None, "2026-00003"]
    assert next_sequential_id("2026", existing) == "2026-00004"


def test_width_is_a_minimum_not_a_cap() -> None:
    assert next_sequential_id("2008", ["2008-99999"]) == "2008-100000"
    assert next_sequential_id("2008", [], width=3) == "2008-001"
