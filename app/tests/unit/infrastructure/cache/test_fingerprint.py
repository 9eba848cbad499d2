"""Unit tests for infrastructure.cache.key_builder."""

import pytest

from infrastructure.cache import FingerprintBuilder


@pytest.mark.unit
class TestFingerprintBuilder:
    """Test suite for FingerprintBuilder."""

    def test_prefixed_with_namespace(self):
        """Fingerprints start with the namespace."""
        fingerprint = FingerprintBuilder("extract").build(path="a.ts", contents="x")

        assert fingerprint.startswith("extract:")
        assert len(fingerprint) == len("extract:") + 64

    def test_deterministic(self):
        """Equal components give equal fingerprints."""
        builder = FingerprintBuilder("extract")

        assert builder.build(path="a.ts", contents="x") == builder.build(path="a.ts", contents="x")

    def test_component_order_is_irrelevant(self):
        """Keyword order does not change the fingerprint."""
        builder = FingerprintBuilder("extract")

        assert builder.build(path="a.ts", contents="x") == builder.build(contents="x", path="a.ts")

    @pytest.mark.parametrize(
        "changes",
        [{"path": "b.ts"}, {"contents": "y"}, {"pattern": "src/**/*.ts"}],
    )
    def test_any_component_change_changes_fingerprint(self, changes):
        """Each component takes part in the fingerprint."""
        builder = FingerprintBuilder("extract")
        base = {"path": "a.ts", "contents": "x", "pattern": "**/*.ts"}

        assert builder.build(**base) != builder.build(**{**base, **changes})

    def test_namespace_change_changes_fingerprint(self):
        """A new namespace invalidates every fingerprint."""
        assert FingerprintBuilder("v1").build(path="a") != FingerprintBuilder("v2").build(path="a")
