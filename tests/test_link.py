from __future__ import annotations

import os
import threading

import pytest

from mage.link import (
    LinkResult,
    LinkStatus,
    PathSetupError,
    SymlinkError,
    UnlinkStatus,
    is_installed,
    link_all,
    link_one,
    unlink_all,
    unlink_one,
)
from mage.manifest import LinkDescriptor
from mage.progress import NullProgress


def _never_called(cmd: str) -> bool:
    raise AssertionError(f"install check should not run: {cmd}")


def _descriptor(tmp_path, name: str = "example.config", cmd: str | None = None):
    origin = tmp_path / "dotfiles" / name
    origin.parent.mkdir(parents=True, exist_ok=True)
    origin.write_text("content", encoding="utf-8")
    return LinkDescriptor(origin, tmp_path / "target" / "deep" / name, cmd)


def test_link_one_creates_symlink_and_parents(tmp_path) -> None:
    d = _descriptor(tmp_path)
    result = link_one(d, _never_called)
    assert result == LinkResult("example.config", LinkStatus.LINKED, True)
    assert d.target_path.is_symlink()
    assert os.readlink(d.target_path) == str(d.origin_path)


def test_link_one_is_idempotent(tmp_path) -> None:
    d = _descriptor(tmp_path)
    assert link_one(d, _never_called).status is LinkStatus.LINKED
    assert link_one(d, _never_called).status is LinkStatus.ALREADY_LINKED
    assert os.readlink(d.target_path) == str(d.origin_path)


def test_link_one_leaves_existing_file_alone(tmp_path) -> None:
    d = _descriptor(tmp_path)
    d.target_path.parent.mkdir(parents=True)
    d.target_path.write_text("mine", encoding="utf-8")
    assert link_one(d, _never_called).status is LinkStatus.ALREADY_LINKED
    assert not d.target_path.is_symlink()
    assert d.target_path.read_text(encoding="utf-8") == "mine"


def test_link_one_treats_dangling_symlink_as_linked(tmp_path) -> None:
    d = _descriptor(tmp_path)
    d.target_path.parent.mkdir(parents=True)
    os.symlink(tmp_path / "gone", d.target_path)
    assert link_one(d, _never_called).status is LinkStatus.ALREADY_LINKED


def test_link_one_runs_install_check(tmp_path) -> None:
    seen = []

    def _check(cmd: str) -> bool:
        seen.append(cmd)
        return False

    d = _descriptor(tmp_path, cmd="which example")
    result = link_one(d, _check)
    assert result == LinkResult("example.config", LinkStatus.LINKED, False)
    assert seen == ["which example"]


def test_link_one_parent_setup_failure(tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    d = LinkDescriptor(tmp_path / "origin", blocker / "sub" / "target")
    with pytest.raises(PathSetupError):
        link_one(d, _never_called)


def test_link_one_symlink_failure_names_paths(tmp_path, monkeypatch) -> None:
    d = _descriptor(tmp_path)

    def _deny(src, dst):  # type: ignore[no-untyped-def]
        raise PermissionError("denied")

    monkeypatch.setattr(os, "symlink", _deny)
    with pytest.raises(SymlinkError) as excinfo:
        link_one(d, _never_called)
    assert str(d.origin_path) in str(excinfo.value)
    assert str(d.target_path) in str(excinfo.value)


def test_is_installed_uses_exit_status() -> None:
    assert is_installed("true")
    assert not is_installed("false")
    assert not is_installed("exit 3")


def test_link_all_preserves_order_and_isolates_failures(tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    good_a = _descriptor(tmp_path, "a")
    bad = LinkDescriptor(tmp_path / "origin", blocker / "sub" / "target")
    good_b = _descriptor(tmp_path, "b")

    outcomes = link_all([good_a, bad, good_b], jobs=4, installed_check=_never_called)

    assert [o.descriptor for o in outcomes] == [good_a, bad, good_b]
    assert [o.ok for o in outcomes] == [True, False, True]
    assert isinstance(outcomes[1].error, PathSetupError)
    assert good_a.target_path.is_symlink()
    assert good_b.target_path.is_symlink()


def test_link_all_runs_on_worker_threads(tmp_path) -> None:
    threads = set()

    def _check(cmd: str) -> bool:
        threads.add(threading.get_ident())
        return True

    descriptors = [_descriptor(tmp_path, f"f{i}", cmd="true") for i in range(6)]
    sink = NullProgress()
    outcomes = link_all(descriptors, jobs=3, installed_check=_check, progress=sink)

    assert all(o.ok for o in outcomes)
    assert threading.get_ident() not in threads
    assert sorted(bar.name for bar in sink.bars) == sorted(d.name for d in descriptors)
    assert all(bar.finished for bar in sink.bars)


def test_link_all_serial_with_one_job(tmp_path) -> None:
    descriptors = [_descriptor(tmp_path, "x"), _descriptor(tmp_path, "y")]
    outcomes = link_all(descriptors, jobs=1, installed_check=_never_called)
    assert [o.value.status for o in outcomes] == [LinkStatus.LINKED, LinkStatus.LINKED]


def test_unlink_one_removes_symlink_only(tmp_path) -> None:
    d = _descriptor(tmp_path)
    link_one(d, _never_called)
    assert unlink_one(d) is UnlinkStatus.REMOVED
    assert not os.path.lexists(d.target_path)
    # the dotfiles copy is untouched
    assert d.origin_path.read_text(encoding="utf-8") == "content"


def test_unlink_one_removes_directory_link_without_following(tmp_path) -> None:
    origin = tmp_path / "dotfiles" / "nvim"
    origin.mkdir(parents=True)
    (origin / "init.lua").write_text("x", encoding="utf-8")
    d = LinkDescriptor(origin, tmp_path / "target" / "nvim")
    link_one(d, _never_called)
    assert unlink_one(d) is UnlinkStatus.REMOVED
    assert (origin / "init.lua").exists()


def test_unlink_one_skips_regular_file(tmp_path) -> None:
    d = _descriptor(tmp_path)
    d.target_path.parent.mkdir(parents=True)
    d.target_path.write_text("real", encoding="utf-8")
    assert unlink_one(d) is UnlinkStatus.SKIPPED_NOT_A_SYMLINK
    assert d.target_path.read_text(encoding="utf-8") == "real"


def test_unlink_one_missing_target(tmp_path) -> None:
    d = _descriptor(tmp_path)
    assert unlink_one(d) is UnlinkStatus.NOTHING_TO_REMOVE


def test_unlink_one_removes_dangling_symlink(tmp_path) -> None:
    d = _descriptor(tmp_path)
    d.target_path.parent.mkdir(parents=True)
    os.symlink(tmp_path / "gone", d.target_path)
    assert unlink_one(d) is UnlinkStatus.REMOVED
    assert not os.path.lexists(d.target_path)


def test_unlink_all_collects_failures(tmp_path, monkeypatch) -> None:
    a = _descriptor(tmp_path, "a")
    b = _descriptor(tmp_path, "b")
    link_one(a, _never_called)
    link_one(b, _never_called)

    real_unlink = os.unlink

    def _flaky_unlink(path, *args, **kwargs):  # type: ignore[no-untyped-def]
        if str(path) == str(a.target_path):
            raise PermissionError("denied")
        return real_unlink(path, *args, **kwargs)

    monkeypatch.setattr(os, "unlink", _flaky_unlink)
    outcomes = unlink_all([a, b], jobs=2)

    assert [o.ok for o in outcomes] == [False, True]
    assert "Failed to remove symlink" in outcomes[0].message
    assert outcomes[1].value is UnlinkStatus.REMOVED
