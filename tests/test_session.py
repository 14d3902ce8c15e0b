"""
tests/test_session
~~~~~~~~~~~~~~~~~~
"""

import threading

import pytest

import upsetviz.core.session as session_module
from upsetviz import FileStatus, FormatError, UploadSession


@pytest.fixture
def session():
    """
    Returns an upload session and shuts its reader down afterwards.

    Yields:
        UploadSession: Fresh session.
    """
    sess = UploadSession()
    yield sess
    sess.close()


@pytest.mark.api
def test_initial_state(session):
    """
    Ensures a new session is pending with default render settings.

    Args:
        session (UploadSession): Fresh session.
    """
    assert session.parsed_file.status == FileStatus.PENDING
    assert session.renderable_matrix().is_empty
    assert (session.width, session.height, session.font_size) == (500, 500, 16)


@pytest.mark.api
def test_load_valid_file(session, tmp_path, scenario_text):
    """
    Ensures a valid upload replaces the parsed file.

    Args:
        session (UploadSession): Fresh session.
        tmp_path (Path): Temporary directory.
        scenario_text (str): Example file contents.
    """
    path = tmp_path / "a.tsv"
    path.write_text(scenario_text, encoding="utf-8")
    parsed = session.load(path)
    assert parsed is session.parsed_file
    assert parsed.is_valid
    assert parsed.file_name == "a.tsv"
    assert session.renderable_matrix().n_intersections == 3
    assert session.last_error is None


@pytest.mark.api
def test_load_error_keeps_previous_data(session, tmp_path, scenario_text):
    """
    Ensures a failed upload flags ERROR and keeps the last valid data renderable.

    Args:
        session (UploadSession): Fresh session.
        tmp_path (Path): Temporary directory.
        scenario_text (str): Example file contents.
    """
    good = tmp_path / "good.tsv"
    good.write_text(scenario_text, encoding="utf-8")
    bad = tmp_path / "bad.tsv"
    bad.write_text("SetA\n", encoding="utf-8")

    session.load(good)
    parsed = session.load(bad)
    assert parsed.status == FileStatus.ERROR
    assert isinstance(session.last_error, FormatError)
    assert session.renderable_matrix().n_intersections == 3

    session.load(tmp_path / "missing.tsv")
    assert session.parsed_file.status == FileStatus.ERROR
    assert session.renderable_matrix().n_intersections == 3


@pytest.mark.api
def test_submit_reads_in_background(session, tmp_path, scenario_text):
    """
    Ensures an asynchronous upload resolves to a valid parsed file.

    Args:
        session (UploadSession): Fresh session.
        tmp_path (Path): Temporary directory.
        scenario_text (str): Example file contents.
    """
    path = tmp_path / "a.tsv"
    path.write_text(scenario_text, encoding="utf-8")
    future = session.submit(path)
    parsed = future.result(timeout=10)
    assert parsed.is_valid
    assert session.parsed_file is parsed


@pytest.mark.api
def test_superseded_upload_is_discarded(session, tmp_path, scenario_text, monkeypatch):
    """
    Ensures a read that finishes after a newer upload was submitted does not apply.

    Args:
        session (UploadSession): Fresh session.
        tmp_path (Path): Temporary directory.
        scenario_text (str): Example file contents.
        monkeypatch (MonkeyPatch): Pytest monkeypatch fixture.
    """
    slow = tmp_path / "slow.tsv"
    slow.write_text(scenario_text, encoding="utf-8")
    fast = tmp_path / "fast.tsv"
    fast.write_text("X\t1\n", encoding="utf-8")

    release = threading.Event()
    original = session_module.read_upset_matrix

    def gated(path, **kwargs):
        if str(path) == str(slow):
            release.wait(timeout=10)
        return original(path, **kwargs)

    monkeypatch.setattr(session_module, "read_upset_matrix", gated)
    first = session.submit(slow)
    assert session.parsed_file.status == FileStatus.PENDING
    second = session.submit(fast)
    release.set()

    assert first.result(timeout=10).is_valid
    assert second.result(timeout=10).is_valid
    assert session.parsed_file.file_name == "fast.tsv"
    assert session.renderable_matrix().sets == ("X",)
    assert session.generation == 2
