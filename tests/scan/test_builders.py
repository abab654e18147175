from __future__ import annotations

from typing import override

import pytest
from result import Err, Ok

from duru.models.enums import ErrorPolicy
from duru.models.scan import ScanErrorCode
from duru.scan import SerialBuilder, ThreadedBuilder, create_builder, resolve_root
from duru.scan._base import TreeBuilderBase
from duru.services.flatten import file_list
from duru.services.fs import StatResult
from tests.fs_mock import MemoryFileSystem


def _tree() -> MemoryFileSystem:
    fs = MemoryFileSystem()
    fs.add_dir("/root")
    fs.add_file("/root/a.txt", size=10)
    fs.add_file("/root/sub/b.txt", size=20)
    fs.add_file("/root/sub/inner/c.txt", size=30)
    fs.add_file("/root/other/d.txt", size=40)
    fs.add_file("/root/other/e.txt", size=50)
    fs.add_dir("/root/empty")
    return fs


def _builders(fs: MemoryFileSystem, policy: ErrorPolicy = ErrorPolicy.ABORT) -> list[TreeBuilderBase]:
    return [SerialBuilder(policy=policy, fs=fs), ThreadedBuilder(workers=4, policy=policy, fs=fs)]


class TestResolveRoot:
    def test_stat_oserror_returns_root_stat_failed(self) -> None:
        class _FailStatFS(MemoryFileSystem):
            @override
            def stat(self, path: str) -> StatResult:
                raise OSError("Permission denied")

        fs = _FailStatFS()
        fs.add_dir("/root")
        result = resolve_root("/root", fs)
        assert not isinstance(result, str)
        assert result.code is ScanErrorCode.ROOT_STAT_FAILED

    def test_missing_returns_not_found(self) -> None:
        result = resolve_root("/nope", MemoryFileSystem())
        assert not isinstance(result, str)
        assert result.code is ScanErrorCode.NOT_FOUND

    def test_file_path_returns_not_directory(self) -> None:
        fs = MemoryFileSystem()
        fs.add_file("/root/file.txt", size=10)
        result = resolve_root("/root/file.txt", fs)
        assert not isinstance(result, str)
        assert result.code is ScanErrorCode.NOT_DIRECTORY

    def test_valid_dir_returns_path(self) -> None:
        fs = MemoryFileSystem()
        fs.add_dir("/root")
        assert resolve_root("/root", fs) == "/root"

    def test_expands_user(self) -> None:
        fs = MemoryFileSystem()
        fs.add_dir("/home/user/data")
        assert resolve_root("~/data", fs) == "/home/user/data"


class TestBuild:
    @pytest.mark.parametrize("kind", ["serial", "threaded"])
    def test_build_expands_everything(self, kind: str) -> None:
        fs = _tree()
        builder = SerialBuilder(fs=fs) if kind == "serial" else ThreadedBuilder(workers=3, fs=fs)
        snapshot = builder.build("/root").unwrap()
        assert snapshot.root.path == "/root"
        assert snapshot.stats.files == 5
        assert snapshot.stats.directories == 5
        assert snapshot.stats.access_errors == 0
        assert len(file_list(snapshot.root).unwrap()) == 5

    def test_threaded_matches_serial_order(self) -> None:
        serial, threaded = _builders(_tree())
        a = file_list(serial.build("/root").unwrap().root).unwrap()
        b = file_list(threaded.build("/root").unwrap().root).unwrap()
        assert list(a) == list(b)

    def test_missing_root(self) -> None:
        for builder in _builders(_tree()):
            result = builder.build("/missing")
            assert isinstance(result, Err)
            assert result.err_value.code is ScanErrorCode.NOT_FOUND

    def test_abort_on_unreadable(self) -> None:
        fs = _tree()
        fs.fail_on.add("/root/sub/inner")
        for builder in _builders(fs):
            result = builder.build("/root")
            assert isinstance(result, Err)
            assert result.err_value.code is ScanErrorCode.DIRECTORY_UNREADABLE
            assert result.err_value.path == "/root/sub/inner"

    def test_unreadable_root(self) -> None:
        fs = _tree()
        fs.fail_on.add("/root")
        for builder in _builders(fs):
            result = builder.build("/root")
            assert isinstance(result, Err)
            assert result.err_value.code is ScanErrorCode.DIRECTORY_UNREADABLE

    def test_skip_on_unreadable(self) -> None:
        fs = _tree()
        fs.fail_on.add("/root/sub")
        for builder in _builders(fs, ErrorPolicy.SKIP):
            result = builder.build("/root")
            assert isinstance(result, Ok)
            snapshot = result.ok_value
            assert snapshot.stats.access_errors == 1
            names = sorted(f.name for f in file_list(snapshot.root).unwrap())
            assert names == ["a.txt", "d.txt", "e.txt"]

    def test_threaded_crash_is_reraised(self) -> None:
        class _Boom(MemoryFileSystem):
            @override
            def list_entries(self, path: str):  # type: ignore[override]
                if path == "/root/other":
                    raise RuntimeError("boom")
                return super().list_entries(path)

        fs = _Boom()
        fs.add_file("/root/other/x", size=1)
        with pytest.raises(RuntimeError, match="boom"):
            ThreadedBuilder(workers=2, fs=fs).build("/root")


class TestCreateBuilder:
    def test_single_worker_is_serial(self) -> None:
        assert isinstance(create_builder(1), SerialBuilder)

    def test_many_workers_is_threaded(self) -> None:
        fs = _tree()
        fs.fail_on.add("/root/other")
        builder = create_builder(4, ErrorPolicy.SKIP, fs)
        assert isinstance(builder, ThreadedBuilder)
        assert builder.build("/root").unwrap().stats.access_errors == 1

    def test_invalid_worker_count(self) -> None:
        with pytest.raises(ValueError, match="Invalid worker count"):
            create_builder(0)
