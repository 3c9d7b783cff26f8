from __future__ import annotations

from pokesync._redact import redact_for_log


def test_redact_truncates_long_strings_and_lists() -> None:
    out = redact_for_log({"image": "x" * 300, "ids": list(range(25))}, max_string=10)

    assert out["image"].startswith("x" * 10)
    assert out["image"].endswith("<truncated>")
    assert out["ids"][:20] == list(range(20))
    assert out["ids"][-1] == "<+5 more>"


def test_redact_keeps_primitives() -> None:
    assert redact_for_log([1, 2.5, True, None, "ok"]) == [1, 2.5, True, None, "ok"]
