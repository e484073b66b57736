"""Tests for ArtifactNamer class."""

import itertools

import pytest

from pixgallery.artifact_namer import ArtifactNamer, Candidate, Skip


class TestClassify:
    """Tests for path classification."""

    @pytest.fixture
    def namer(self):
        return ArtifactNamer()

    @pytest.mark.parametrize('path', ['photo.jpg', 'photo.JPEG', 'dir/photo.Png'])
    def test_recognized_extensions(self, namer, path):
        """Test that known extensions match case-insensitively."""
        assert isinstance(namer.classify(path), Candidate)

    def test_candidate_fields(self, namer):
        """Test base name and extension are split off the filename."""
        candidate = namer.classify('trips/2024/foo.JPG')

        assert candidate.base_name == 'foo'
        assert candidate.extension == '.JPG'
        assert candidate.filename == 'foo.JPG'
        assert candidate.path == 'trips/2024/foo.JPG'

    def test_derivative_names(self, namer):
        """Test suffix insertion before the extension."""
        candidate = namer.classify('foo.jpg')

        assert candidate.derivative_name(ArtifactNamer.small_spec(800, 800)) == 'foo_small.jpg'
        assert candidate.derivative_name(ArtifactNamer.thumbnail_spec(256, 256)) == 'foo_thm.jpg'

    def test_wrong_extension(self, namer):
        """Test unsupported extensions are skipped."""
        result = namer.classify('notes.txt')

        assert result == Skip('notes.txt', 'wrong extension')

    def test_no_extension(self, namer):
        """Test files without extension are skipped."""
        assert namer.classify('README').reason == 'no extension'
        assert namer.classify('.jpg').reason == 'no extension'

    @pytest.mark.parametrize('path', ['foo_small.jpg', 'out/foo_thm.png', 'foo_thm.JPEG'])
    def test_derivatives_are_skipped(self, namer, path):
        """Test already-derived files are never sources."""
        result = namer.classify(path)

        assert isinstance(result, Skip)
        assert result.reason == 'derivative'

    def test_marker_must_precede_a_dot(self, namer):
        """Test names merely containing the suffix text are still sources."""
        assert isinstance(namer.classify('small_things.jpg'), Candidate)
        assert isinstance(namer.classify('foo_smallish.jpg'), Candidate)


class TestInjectivity:
    """Tests for derived name uniqueness."""

    def test_distinct_bases_give_distinct_names(self):
        """Test small and thumbnail names are pairwise distinct."""
        namer = ArtifactNamer()
        small = ArtifactNamer.small_spec(800, 800)
        thumb = ArtifactNamer.thumbnail_spec(256, 256)
        paths = ['a.jpg', 'b.jpg', 'a_b.png', 'ab.jpeg', 'a.b.jpg', 'A1.jpg']

        names = []
        for path in paths:
            candidate = namer.classify(path)
            names.extend([
                candidate.filename,
                candidate.derivative_name(small),
                candidate.derivative_name(thumb),
            ])

        assert len(names) == len(set(names))

    def test_derived_names_are_not_sources(self):
        """Test every derived name classifies as a derivative."""
        namer = ArtifactNamer()
        specs = [ArtifactNamer.small_spec(1, 1), ArtifactNamer.thumbnail_spec(1, 1)]

        for path, spec in itertools.product(['x.jpg', 'y.png', 'z.JPEG'], specs):
            name = namer.classify(path).derivative_name(spec)
            assert namer.classify(name).reason == 'derivative'
