import os
import sys

import pytest

from limebuild.exceptions import MissingDependencyError
from limebuild.staleness import (
    call_if_out_of_date,
    call_if_self_rebuild_necessary,
    is_out_of_date,
)


class Recorder:
    """Counts how many times a rebuild action ran."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


def _touch(path, seconds):
    path.write_text(path.name)
    os.utime(path, (seconds, seconds))
    return path


@pytest.fixture
def rule(tmp_path):
    """A target at t=100 with one older and two newer sources."""
    return {
        "target": _touch(tmp_path / "app.o", 100),
        "old": _touch(tmp_path / "old.c", 50),
        "new1": _touch(tmp_path / "new1.c", 200),
        "new2": _touch(tmp_path / "new2.c", 300),
        "missing_target": tmp_path / "not_built_yet.o",
    }


def test_empty_dependency_list_never_triggers(rule):
    action = Recorder()
    assert call_if_out_of_date(rule["target"], [], action) is False
    assert call_if_out_of_date(rule["missing_target"], [], action) is False
    assert action.calls == 0


def test_up_to_date_target_is_left_alone(rule):
    action = Recorder()
    assert call_if_out_of_date(rule["target"], [rule["old"]], action) is False
    assert action.calls == 0


def test_equal_times_are_not_stale(rule, tmp_path):
    same = _touch(tmp_path / "same.c", 100)
    assert is_out_of_date(rule["target"], [same]) is False


def test_newer_dependencies_trigger_exactly_once(rule):
    action = Recorder()
    deps = [rule["old"], rule["new1"], rule["new2"]]
    assert call_if_out_of_date(rule["target"], deps, action) is True
    assert action.calls == 1


def test_missing_target_is_infinitely_stale(rule):
    action = Recorder()
    assert call_if_out_of_date(rule["missing_target"], [rule["old"]], action) is True
    assert action.calls == 1


def test_missing_target_triggers_even_with_missing_dependency(rule, tmp_path):
    action = Recorder()
    generated = tmp_path / "gen.h"
    assert call_if_out_of_date(rule["missing_target"], [generated], action) is True
    assert action.calls == 1


def test_single_dependency_may_be_passed_directly(rule):
    assert is_out_of_date(rule["target"], rule["new1"]) is True
    assert is_out_of_date(str(rule["target"]), str(rule["old"])) is False


def test_missing_dependency_is_reported(rule, tmp_path):
    action = Recorder()
    with pytest.raises(MissingDependencyError):
        call_if_out_of_date(rule["target"], [tmp_path / "gone.c"], action)
    assert action.calls == 0


def test_action_runs_before_call_returns(rule):
    seen = []

    def action():
        seen.append("built")

    call_if_out_of_date(rule["target"], [rule["new1"]], action)
    assert seen == ["built"]


def test_call_if_out_of_date_reports_progress(rule, caplog):
    caplog.set_level("INFO", logger="limebuild")
    call_if_out_of_date(rule["target"], [rule["new1"]], Recorder())
    messages = [record.getMessage() for record in caplog.records]
    assert any("is out-of-date" in message for message in messages)


# -----------------------------------------------------------------------------
# Self rebuild
# -----------------------------------------------------------------------------

def test_self_rebuild_when_source_is_newer(tmp_path):
    image = _touch(tmp_path / "build", 100)
    source = _touch(tmp_path / "build.py", 200)
    action = Recorder()

    assert call_if_self_rebuild_necessary(source, action, executable=image) is True
    assert action.calls == 1


def test_no_self_rebuild_when_image_is_current(tmp_path):
    image = _touch(tmp_path / "build", 300)
    source = _touch(tmp_path / "build.py", 200)
    action = Recorder()

    assert call_if_self_rebuild_necessary(source, action, executable=image) is False
    assert action.calls == 0


def test_self_rebuild_defaults_to_running_script(tmp_path, monkeypatch):
    script = _touch(tmp_path / "build.py", 200)
    helper = _touch(tmp_path / "rules.py", 300)
    monkeypatch.delattr(sys, "frozen", raising=False)
    monkeypatch.setattr(sys, "argv", [str(script)])
    action = Recorder()

    assert call_if_self_rebuild_necessary(script, action) is False
    assert call_if_self_rebuild_necessary(helper, action) is True
    assert action.calls == 1


def test_frozen_self_rebuild_compares_against_executable(tmp_path, monkeypatch):
    image = _touch(tmp_path / "build", 100)
    source = _touch(tmp_path / "build.py", 200)
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "executable", str(image))
    action = Recorder()

    assert call_if_self_rebuild_necessary(source, action) is True
    assert action.calls == 1


def test_self_rebuild_requires_existing_source(tmp_path):
    image = _touch(tmp_path / "build", 100)
    with pytest.raises(MissingDependencyError):
        call_if_self_rebuild_necessary(tmp_path / "build.py", Recorder(), executable=image)
