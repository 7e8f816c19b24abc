"""Tests for free-text helpers."""

from issue_reporter.services.text import detect_end_marker, extract_hashtags, normalize


def test_normalize_collapses_whitespace_and_newlines() -> None:
    assert normalize("  broken\n\n light \t in  hall  ") == "broken light in hall"


def test_detect_end_marker_drops_marker_and_suffix() -> None:
    assert detect_end_marker("report the pothole#done extra", "#done") == (
        True,
        "report the pothole",
    )


def test_detect_end_marker_is_substring_search() -> None:
    assert detect_end_marker("all #donezo now", "#done") == (True, "all ")


def test_detect_end_marker_without_marker_returns_text() -> None:
    assert detect_end_marker("still typing", "#done") == (False, "still typing")


def test_detect_end_marker_uses_first_occurrence() -> None:
    assert detect_end_marker("a #done b #done", "#done") == (True, "a ")


def test_extract_hashtags_handles_fullwidth_prefix_and_duplicates() -> None:
    text = "leak #water near\n＃toilet and #water again"
    assert extract_hashtags(text) == ["water", "toilet", "water"]


def test_extract_hashtags_ignores_inner_hash() -> None:
    assert extract_hashtags("room a#1 is #cold") == ["cold"]


def test_extract_hashtags_is_stable_on_reconstructed_tags() -> None:
    tags = extract_hashtags("the #light in ＃ห้องน้ำ is out #light #ไฟ")
    rebuilt = " ".join(f"#{tag}" for tag in tags)
    rebuilt_fullwidth = " ".join(f"＃{tag}" for tag in tags)

    assert extract_hashtags(rebuilt) == tags
    assert extract_hashtags(rebuilt_fullwidth) == tags
