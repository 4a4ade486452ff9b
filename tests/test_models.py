# tests/test_models.py
import pytest
from pydantic import TypeAdapter, ValidationError
from assistant_relay.models import (
    ClassifiedLine,
    FileChange,
    LineChangeSet,
    MarkerLine,
    ParsedResponse,
    PlainLine,
    WorkspaceConfig,
)


def test_workspace_config_defaults():
    config = WorkspaceConfig()
    assert config.cli_args == ["-p"]
    assert ".git" in config.exclude
    assert config.fallback_answer


def test_file_change_defaults_to_unknown_path():
    change = FileChange()
    assert change.file_path == "unknown"
    assert change.additions == 0
    assert change.diff_lines == []


def test_file_change_rejects_negative_counts():
    with pytest.raises(ValidationError):
        FileChange(file_path="a.py", additions=-1)


def test_file_change_is_immutable():
    change = FileChange(file_path="a.py")
    with pytest.raises(ValidationError):
        change.file_path = "b.py"


def test_file_change_diff_text():
    change = FileChange(file_path="a.py", diff_lines=["+a", "-b"])
    assert change.diff_text == "+a\n-b"


def test_parsed_response_totals():
    response = ParsedResponse(
        answer_text="Done",
        file_changes=[
            FileChange(file_path="a.py", additions=2, deletions=1),
            FileChange(file_path="b.py", additions=3, deletions=0),
        ],
    )
    assert response.total_additions == 5
    assert response.total_deletions == 1


def test_line_change_set_first_added_line():
    assert LineChangeSet(added_lines=[7, 3, 9]).first_added_line == 3
    assert LineChangeSet(removed_lines=[1]).first_added_line is None


def test_classified_line_discriminator():
    adapter = TypeAdapter(ClassifiedLine)

    marker = adapter.validate_python({"kind": "marker", "file_path": "a.py", "additions": 1})
    plain = adapter.validate_python({"kind": "plain", "text": "hello"})

    assert isinstance(marker, MarkerLine)
    assert marker.deletions == 0
    assert isinstance(plain, PlainLine)
