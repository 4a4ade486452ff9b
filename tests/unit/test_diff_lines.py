# tests/unit/test_diff_lines.py
import pytest
from assistant_relay.models.response import FileChange
from assistant_relay.relay.diff_lines import (
    DiffLineAnalyzer,
    changed_line_numbers,
    parse_unified_line_numbers,
    positional_line_numbers,
    to_unified_diff,
)


SAMPLE_DIFF = """--- a/src/main.py
+++ b/src/main.py
@@ -10,4 +10,4 @@
 a
+b
 c
-d
 e
"""


@pytest.mark.unit
def test_unified_diff_uses_hunk_offsets():
    result = changed_line_numbers(SAMPLE_DIFF)

    assert result.added_lines == [11]
    assert result.removed_lines == [12]


@pytest.mark.unit
def test_bare_hunk_gets_synthetic_header():
    result = changed_line_numbers("@@ -1,4 +1,4 @@\n a\n+b\n c\n-d\n e")

    assert result.added_lines == [2]
    assert result.removed_lines == [3]


@pytest.mark.unit
def test_multiple_hunks_are_numbered_independently():
    diff = "@@ -1,2 +1,3 @@\n a\n+b\n c\n@@ -10,2 +11,1 @@\n x\n-y"
    result = changed_line_numbers(diff)

    assert result.added_lines == [2]
    assert result.removed_lines == [11]


@pytest.mark.unit
def test_prose_before_hunk_is_ignored():
    diff = "Here is the change:\n@@ -1,1 +1,2 @@\n a\n+b"
    result = changed_line_numbers(diff)

    assert result.added_lines == [2]
    assert result.removed_lines == []


@pytest.mark.unit
def test_hunk_longer_than_header_falls_back_to_positions():
    # The header declares 3 source lines but the body carries 4.
    diff = "@@ -1,3 +1,4 @@\n a\n+b\n c\n-d\n e"

    with pytest.raises(Exception):
        parse_unified_line_numbers(to_unified_diff(diff.split("\n")))

    result = changed_line_numbers(diff)
    assert result.added_lines == [2]
    assert result.removed_lines == [4]


@pytest.mark.unit
def test_prefix_only_lines_use_fallback():
    result = changed_line_numbers("+x\n+y\n-z")

    assert result.added_lines == [1, 2]
    assert result.removed_lines == [3]


@pytest.mark.unit
def test_no_hunks_is_a_parse_failure():
    with pytest.raises(ValueError):
        parse_unified_line_numbers("+x\n+y\n-z")


@pytest.mark.unit
def test_fallback_consecutive_removals_share_a_number():
    result = positional_line_numbers(" a\n-b\n-c\n d")

    assert result.added_lines == []
    assert result.removed_lines == [2, 2]


@pytest.mark.unit
def test_fallback_ignores_blank_lines():
    result = positional_line_numbers("+x\n\n   \n+y")

    assert result.added_lines == [1, 2]


@pytest.mark.unit
def test_changed_line_numbers_never_raises_on_garbage():
    result = changed_line_numbers("@@ nonsense @@\n\x00\n+++\n---")

    assert isinstance(result.added_lines, list)
    assert isinstance(result.removed_lines, list)


@pytest.mark.unit
def test_to_unified_diff_leaves_headed_diff_alone():
    lines = SAMPLE_DIFF.splitlines()

    assert to_unified_diff(lines, "other.py") == "\n".join(lines)


@pytest.mark.unit
def test_to_unified_diff_inserts_header_before_first_hunk():
    lines = ["intro", "@@ -1 +1 @@", "-a", "+b"]

    assert to_unified_diff(lines, "x.py").split("\n") == [
        "intro", "--- a/x.py", "+++ b/x.py", "@@ -1 +1 @@", "-a", "+b",
    ]


@pytest.mark.unit
def test_to_unified_diff_without_hunks_is_plain_join():
    assert to_unified_diff(["+a", "-b"], "x.py") == "+a\n-b"


@pytest.mark.unit
def test_analyzer_on_cli_style_change():
    change = FileChange(
        file_path="src/a.ts",
        additions=2,
        deletions=1,
        diff_lines=["+line1", "+line2", "-line3"],
    )
    result = DiffLineAnalyzer().analyze(change)

    assert result.added_lines == [1, 2]
    assert result.removed_lines == [3]
    assert result.first_added_line == 1
