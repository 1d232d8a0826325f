"""Unit tests for the exclusion registry."""

from pawprint.filesystem.exclusions import ExclusionRegistry


class TestExclusionRegistry:
    """Tests for ExclusionRegistry."""

    def test_empty_registry(self) -> None:
        registry = ExclusionRegistry()

        assert len(registry) == 0
        assert not registry.is_excluded("/tmp/anything")

    def test_literal_path(self) -> None:
        registry = ExclusionRegistry()
        registry.register("/tmp/keep")

        assert registry.is_excluded("/tmp/keep")
        assert not registry.is_excluded("/tmp/other")

    def test_glob_pattern(self) -> None:
        registry = ExclusionRegistry(["/tmp/cache/*.lock"])

        assert registry.is_excluded("/tmp/cache/db.lock")
        assert not registry.is_excluded("/tmp/cache/db.log")

    def test_directory_pattern_does_not_cover_children(self) -> None:
        """Patterns match whole paths; children need a wildcard."""
        registry = ExclusionRegistry(["/tmp/keep"])

        assert not registry.is_excluded("/tmp/keep/file")

        registry.register("/tmp/keep/*")
        assert registry.is_excluded("/tmp/keep/file")

    def test_registration_order_preserved(self) -> None:
        registry = ExclusionRegistry(["/a"])
        registry.register("/b")
        registry.register("/a")

        assert registry.patterns == ("/a", "/b", "/a")
        assert list(registry) == ["/a", "/b", "/a"]
        assert len(registry) == 3

    def test_initial_list_copied(self) -> None:
        """The registry does not alias the list it was built from."""
        initial = ["/a"]
        registry = ExclusionRegistry(initial)
        registry.register("/b")

        assert initial == ["/a"]

    def test_repeated_registration_is_idempotent(self) -> None:
        once = ExclusionRegistry(["/tmp/*.pid"])
        twice = ExclusionRegistry(["/tmp/*.pid", "/tmp/*.pid"])

        for path in ("/tmp/a.pid", "/tmp/a.log"):
            assert once.is_excluded(path) == twice.is_excluded(path)
