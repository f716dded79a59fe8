"""Unit tests for the sequential and parallel traversal engine.

Tests cover:
- Documented tree scenarios for both strategies
- Access-denied listings (swallowed, folder still counted)
- Non-access listing errors and vanished files (traversal aborted)
- Error aggregation from concurrent tasks
- Counter reuse across runs
- Deep and wide trees
"""

from __future__ import annotations

import errno
from pathlib import Path

import pytest

from disk_usage.core.counters import CounterState
from disk_usage.core.traversal import DiskUsageWalker, TraversalError
from disk_usage.types.models import DirectoryListing, TraversalMode, UsageSnapshot
from tests.fixtures.filesystem_fixtures import (
    NESTED_TREE,
    SAMPLE_TREE,
    DenyingFileSystem,
    InMemoryFileSystem,
    Tree,
    build_tree,
    expected_totals,
)

WALK_MODES = [TraversalMode.SEQUENTIAL, TraversalMode.PARALLEL]


def walk_tree(tree: Tree, mode: TraversalMode, **options: object) -> UsageSnapshot:
    """Walk an in-memory tree with a fresh counter state."""
    counters = CounterState()
    filesystem = InMemoryFileSystem(tree, **options)  # pyright: ignore[reportArgumentType]
    DiskUsageWalker(counters, filesystem).walk(filesystem.root, mode)
    return counters.snapshot()


@pytest.mark.unit
@pytest.mark.parametrize("mode", WALK_MODES)
class TestTraversalScenarios:
    """Test documented scenarios on a real directory tree."""

    def test_empty_directory(self, tmp_path: Path, walker: DiskUsageWalker, mode: TraversalMode) -> None:
        """An empty directory counts only itself."""
        walker.walk(tmp_path, mode)

        assert walker.counters.snapshot() == UsageSnapshot(folders=1, files=0, bytes=0)

    def test_flat_directory_with_two_files(
        self, tmp_path: Path, walker: DiskUsageWalker, mode: TraversalMode
    ) -> None:
        """Two files of 100 and 250 bytes."""
        build_tree(tmp_path, {"a.bin": 100, "b.bin": 250})

        walker.walk(tmp_path, mode)

        assert walker.counters.snapshot() == UsageSnapshot(1, 2, 350)

    def test_nested_chain(self, tmp_path: Path, walker: DiskUsageWalker, mode: TraversalMode) -> None:
        """root -> A (10 bytes) -> B (5 bytes)."""
        build_tree(tmp_path, NESTED_TREE)

        walker.walk(tmp_path, mode)

        assert walker.counters.snapshot() == UsageSnapshot(3, 2, 15)

    def test_sample_tree_totals(self, sample_tree: Path, walker: DiskUsageWalker, mode: TraversalMode) -> None:
        """Folder count includes the root; byte count is the exact sum."""
        walker.walk(sample_tree, mode)

        assert walker.counters.snapshot() == expected_totals(SAMPLE_TREE)

    def test_accepts_str_paths(self, tmp_path: Path, walker: DiskUsageWalker, mode: TraversalMode) -> None:
        """Both str and Path roots are accepted."""
        build_tree(tmp_path, {"a.bin": 1})

        walker.walk(str(tmp_path), mode)

        assert walker.counters.snapshot() == UsageSnapshot(1, 1, 1)

    def test_access_denied_subdirectory(self, tmp_path: Path, mode: TraversalMode) -> None:
        """An unreadable subdirectory is counted but contributes nothing."""
        build_tree(tmp_path, {"top.bin": 4, "locked": {"secret.bin": 1000, "inner": {}}, "open": {"o.bin": 6}})
        counters = CounterState()
        walker = DiskUsageWalker(counters, DenyingFileSystem([tmp_path / "locked"]))

        walker.walk(tmp_path, mode)

        assert counters.snapshot() == UsageSnapshot(folders=3, files=2, bytes=10)

    def test_access_denied_root(self, tmp_path: Path, mode: TraversalMode) -> None:
        """An unreadable root still counts as one folder."""
        build_tree(tmp_path, {"a.bin": 10})
        counters = CounterState()
        walker = DiskUsageWalker(counters, DenyingFileSystem([tmp_path]))

        walker.walk(tmp_path, mode)

        assert counters.snapshot() == UsageSnapshot(1, 0, 0)

    def test_strategies_agree(self, sample_tree: Path, mode: TraversalMode) -> None:
        """Each strategy matches the other on the same tree."""
        other = TraversalMode.PARALLEL if mode is TraversalMode.SEQUENTIAL else TraversalMode.SEQUENTIAL
        first, second = CounterState(), CounterState()

        DiskUsageWalker(first).walk(sample_tree, mode)
        DiskUsageWalker(second).walk(sample_tree, other)

        assert first.snapshot() == second.snapshot()


@pytest.mark.unit
@pytest.mark.parametrize("mode", WALK_MODES)
class TestTraversalInMemory:
    """Test traversal policies against an in-memory filesystem."""

    def test_denied_nested_directory(self, mode: TraversalMode) -> None:
        """Access-denied deep in the tree does not abort the traversal."""
        tree: Tree = {"a": {"b": {"c.bin": 50}, "d.bin": 1}, "e.bin": 2}

        snapshot = walk_tree(tree, mode, denied={"root/a/b"})

        assert snapshot == UsageSnapshot(folders=3, files=2, bytes=3)

    def test_deep_tree(self, mode: TraversalMode) -> None:
        """Depth beyond the interpreter recursion limit is walked."""
        tree: Tree = {"leaf.bin": 1}
        for level in range(1_500):
            tree = {f"d{level}": tree}

        snapshot = walk_tree(tree, mode)

        assert snapshot == UsageSnapshot(folders=1_501, files=1, bytes=1)

    def test_wide_tree(self, mode: TraversalMode) -> None:
        """Hundreds of sibling directories are each counted once."""
        tree: Tree = {f"dir{i}": {f"f{i}.bin": i, "sub": {}} for i in range(300)}

        snapshot = walk_tree(tree, mode)

        assert snapshot == UsageSnapshot(folders=1 + 600, files=300, bytes=sum(range(300)))

    def test_reset_then_walk_matches_fresh_state(self, mode: TraversalMode) -> None:
        """A reset state produces the same totals as a new one."""
        filesystem = InMemoryFileSystem(SAMPLE_TREE)
        counters = CounterState()
        walker = DiskUsageWalker(counters, filesystem)

        walker.walk(filesystem.root, mode)
        first = counters.snapshot()
        counters.reset()
        walker.walk(filesystem.root, mode)

        assert counters.snapshot() == first == expected_totals(SAMPLE_TREE)

    def test_without_reset_counters_accumulate(self, mode: TraversalMode) -> None:
        """Counters are never reset implicitly between walks."""
        filesystem = InMemoryFileSystem(NESTED_TREE)
        counters = CounterState()
        walker = DiskUsageWalker(counters, filesystem)

        walker.walk(filesystem.root, mode)
        walker.walk(filesystem.root, mode)

        assert counters.snapshot() == UsageSnapshot(6, 4, 30)


@pytest.mark.unit
class TestSequentialErrors:
    """Test error propagation in the sequential walk."""

    def test_listing_error_propagates(self) -> None:
        """Non-access listing errors abort the walk with the original error."""
        filesystem = InMemoryFileSystem({"a": {"x.bin": 1}, "b": {}}, failing={"root/a"})
        walker = DiskUsageWalker(CounterState(), filesystem)

        with pytest.raises(OSError) as exc_info:
            walker.walk_sequential("root")

        assert exc_info.value.errno == errno.EIO
        assert not isinstance(exc_info.value, PermissionError)

    def test_vanished_file_propagates(self) -> None:
        """A file disappearing before its size query aborts the walk."""
        filesystem = InMemoryFileSystem({"gone.bin": 5}, vanished={"root/gone.bin"})
        walker = DiskUsageWalker(CounterState(), filesystem)

        with pytest.raises(FileNotFoundError):
            walker.walk_sequential("root")

    def test_missing_root_propagates(self, tmp_path: Path, walker: DiskUsageWalker) -> None:
        """The engine does not re-validate the root; the listing error surfaces."""
        with pytest.raises(FileNotFoundError):
            walker.walk_sequential(tmp_path / "missing")

        assert walker.counters.folder_count == 1

    def test_visits_subtrees_depth_first_in_listing_order(self) -> None:
        """Each subtree is finished before its next sibling starts."""
        visited: list[str] = []

        class RecordingFileSystem(InMemoryFileSystem):
            def list_directory(self, path: str) -> DirectoryListing:
                visited.append(path)
                return super().list_directory(path)

        filesystem = RecordingFileSystem({"a": {"a1": {}, "a2": {}}, "b": {"b1": {}}})
        DiskUsageWalker(CounterState(), filesystem).walk_sequential("root")

        assert visited == ["root", "root/a", "root/a/a1", "root/a/a2", "root/b", "root/b/b1"]


@pytest.mark.unit
class TestParallelErrors:
    """Test error aggregation in the parallel walk."""

    def test_listing_error_surfaces_as_traversal_error(self) -> None:
        """A failing task is not dropped; the caller receives it."""
        filesystem = InMemoryFileSystem({"a": {"b": {"x.bin": 1}}, "c": {}}, failing={"root/a/b"})
        walker = DiskUsageWalker(CounterState(), filesystem)

        with pytest.raises(TraversalError) as exc_info:
            walker.walk_parallel("root")

        error = exc_info.value
        assert error.root == "root"
        assert len(error.errors) >= 1
        assert all(isinstance(e, OSError) for e in error.errors)
        assert any(getattr(e, "errno", None) == errno.EIO for e in error.errors)
        assert isinstance(error.__cause__, BaseExceptionGroup)

    def test_vanished_file_surfaces_as_traversal_error(self) -> None:
        """A size query failure inside a task aborts the whole walk."""
        filesystem = InMemoryFileSystem({"a": {"gone.bin": 3}}, vanished={"root/a/gone.bin"})
        walker = DiskUsageWalker(CounterState(), filesystem)

        with pytest.raises(TraversalError) as exc_info:
            walker.walk_parallel("root")

        assert any(isinstance(e, FileNotFoundError) for e in exc_info.value.errors)

    def test_root_failure_surfaces_as_traversal_error(self) -> None:
        """An error on the root directory itself is wrapped as well."""
        filesystem = InMemoryFileSystem({}, failing={"root"})
        walker = DiskUsageWalker(CounterState(), filesystem)

        with pytest.raises(TraversalError) as exc_info:
            walker.walk_parallel("root")

        assert len(exc_info.value.errors) == 1
        assert exc_info.value.__cause__ is exc_info.value.errors[0]

    def test_error_message_names_each_failure(self) -> None:
        """The message lists the error types and the root."""
        filesystem = InMemoryFileSystem({"a": {}}, failing={"root/a"})

        with pytest.raises(TraversalError, match=r"Traversal of root failed with 1 error\(s\): OSError"):
            DiskUsageWalker(CounterState(), filesystem).walk_parallel("root")

    def test_access_denied_is_not_an_error(self) -> None:
        """Access-denied never reaches the caller."""
        snapshot = walk_tree({"a": {"x.bin": 9}}, TraversalMode.PARALLEL, denied={"root/a"})

        assert snapshot == UsageSnapshot(2, 0, 0)


@pytest.mark.unit
class TestWalkerDispatch:
    """Test mode dispatch and the awaitable parallel form."""

    def test_default_filesystem_is_local(self, counters: CounterState) -> None:
        """Without an explicit filesystem the local disk is used."""
        from disk_usage.core.filesystem import LocalFileSystem

        assert isinstance(DiskUsageWalker(counters).filesystem, LocalFileSystem)

    def test_both_mode_is_rejected(self, tmp_path: Path, walker: DiskUsageWalker) -> None:
        """BOTH is a runner composition, not a walk strategy."""
        with pytest.raises(ValueError, match="composite mode"):
            walker.walk(tmp_path, TraversalMode.BOTH)

        assert walker.counters.folder_count == 0

    @pytest.mark.asyncio
    async def test_walk_parallel_async(self) -> None:
        """The awaitable form runs inside an existing event loop."""
        filesystem = InMemoryFileSystem(SAMPLE_TREE)
        counters = CounterState()

        await DiskUsageWalker(counters, filesystem).walk_parallel_async("root")

        assert counters.snapshot() == expected_totals(SAMPLE_TREE)

    @pytest.mark.asyncio
    async def test_walk_parallel_async_raises_traversal_error(self) -> None:
        """Errors from the awaitable form are aggregated the same way."""
        filesystem = InMemoryFileSystem({"a": {}}, failing={"root/a"})

        with pytest.raises(TraversalError):
            await DiskUsageWalker(CounterState(), filesystem).walk_parallel_async("root")
