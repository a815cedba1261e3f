"""Tests for the generic version ordering."""

import itertools

import pytest

from depchange.errors import VersionValidationError
from depchange.version import GenericVersion
from depchange.version_docker import DockerVersion


class TestGenericVersionParsing:
    """Test parsing and validation of generic versions."""

    def test_segments_split_numbers_and_letters(self):
        """Numeric runs become ints and letter runs strings."""
        assert GenericVersion("1.2.3").segments == [1, 2, 3]
        assert GenericVersion("1.2.3-rc1").segments == [1, 2, 3, "pre", "rc", 1]

    def test_segments_keep_trailing_zeros(self):
        """Padding is only dropped for comparison, never from segments."""
        version = GenericVersion("1.0.0")
        assert version.segments == [1, 0, 0]
        assert version == GenericVersion("1")
        assert not hasattr(version, "canonical_segments")

    def test_string_form_is_preserved(self):
        """str() returns the text the version was built from."""
        assert str(GenericVersion("1.2.3-rc1")) == "1.2.3-rc1"
        assert GenericVersion("1.2.3-rc1").to_semver() == "1.2.3-rc1"
        assert repr(GenericVersion("1.0")) == "GenericVersion('1.0')"

    def test_malformed_versions_raise(self):
        """Malformed strings raise a validation error."""
        for raw in ["not-a-version!!", "1..2", "v1.0", "1.0_1", None]:
            with pytest.raises(VersionValidationError):
                GenericVersion(raw)

    def test_validation_error_is_a_value_error(self):
        """Callers can catch ValueError."""
        with pytest.raises(ValueError, match="Malformed version"):
            GenericVersion("nope!")

    def test_correct(self):
        """correct() mirrors what the constructor accepts."""
        assert GenericVersion.correct("1.0.0")
        assert GenericVersion.correct("1.0.0-alpha.1")
        assert GenericVersion.correct("1.0.0+build.5")
        assert not GenericVersion.correct("not-a-version!!")
        assert not GenericVersion.correct(None)

    def test_empty_string_is_zero(self):
        """An empty version means 0."""
        assert GenericVersion("") == GenericVersion("0")

    def test_integers_are_accepted(self):
        assert GenericVersion(3) == GenericVersion("3")

    def test_prerelease(self):
        assert GenericVersion("1.0.0-beta").prerelease
        assert GenericVersion("1.0.a").prerelease
        assert not GenericVersion("1.0.0").prerelease


class TestGenericVersionOrdering:
    """Test ordering of generic versions."""

    def test_shorter_sorts_first(self):
        """1.0 < 1.0.1."""
        assert GenericVersion("1.0") < GenericVersion("1.0.1")

    def test_numeric_segments_compare_numerically(self):
        assert GenericVersion("1.10") > GenericVersion("1.9")

    def test_trailing_zeros_are_ignored(self):
        """1.0 and 1.0.0 are the same version and hash alike."""
        assert GenericVersion("1.0") == GenericVersion("1.0.0")
        assert hash(GenericVersion("1.0")) == hash(GenericVersion("1.0.0"))
        assert len({GenericVersion("1.0"), GenericVersion("1.0.0"), GenericVersion("1")}) == 1

    def test_prerelease_sorts_before_release(self):
        assert GenericVersion("1.0.0-alpha") < GenericVersion("1.0.0")
        assert GenericVersion("1.0.0.alpha") < GenericVersion("1.0.0.beta")
        assert GenericVersion("1.0.0-rc1") < GenericVersion("1.0.0-rc2")

    def test_build_metadata_is_ignored(self):
        assert GenericVersion("1.0.0+abc") == GenericVersion("1.0.0")

    def test_compare_returns_sign(self):
        assert GenericVersion("1.0").compare(GenericVersion("2.0")) == -1
        assert GenericVersion("2.0").compare(GenericVersion("2.0.0")) == 0
        assert GenericVersion("2.1").compare(GenericVersion("2.0")) == 1

    def test_total_order_laws(self):
        """Comparison is reflexive, antisymmetric and transitive."""
        versions = [
            GenericVersion(raw)
            for raw in ["0.9", "1.0.0-alpha", "1.0.0-beta", "1.0", "1.0.1", "1.2", "1.10", "2.0.0.rc1", "2"]
        ]
        for a in versions:
            assert a.compare(a) == 0
        for a, b in itertools.product(versions, repeat=2):
            assert a.compare(b) == -b.compare(a)
        for a, b, c in itertools.product(versions, repeat=3):
            if a <= b and b <= c:
                assert a <= c

    def test_sorting(self):
        raw = ["1.10", "1.2", "1.0.0-beta", "1.0", "1.0.0-alpha"]
        assert [str(v) for v in sorted(GenericVersion(r) for r in raw)] == [
            "1.0.0-alpha", "1.0.0-beta", "1.0", "1.2", "1.10",
        ]

    def test_different_version_classes_do_not_compare(self):
        """Versions of different ecosystems are never equal and cannot be ordered."""
        generic, docker = GenericVersion("1.0"), DockerVersion("1.0")
        assert generic != docker
        with pytest.raises(TypeError):
            generic < docker  # noqa: B015
        with pytest.raises(TypeError):
            generic.compare(docker)
