"""
Tests for Sample Generation.

Tests labeled (target, context, label) sample generation from walks.
"""

import io

import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from node_embedding.exceptions import ConstructionError, SamplingPreconditionError
from node_embedding.graph import GraphBuilder, GraphType, VertexIndexMapping
from node_embedding.walks import (
    NEGATIVE_LABEL,
    POSITIVE_LABEL,
    PositiveNegativeSampleGenerator,
    Sample,
    SymmetricSlidingWindow,
    format_samples,
    write_samples,
)


@pytest.fixture
def mapping():
    """Mapping over a 50-node directed chain (vertex i has index i)."""
    builder = GraphBuilder(GraphType.DIRECTED)
    for i in range(49):
        builder.add_connection(i, i + 1)
    return VertexIndexMapping(builder.build())


@pytest.fixture
def small_mapping():
    """Mapping over a 3-node graph."""
    builder = GraphBuilder(GraphType.BIDIRECTIONAL)
    builder.add_connection(0, 1)
    builder.add_connection(1, 2)
    return VertexIndexMapping(builder.build())


class TestConstruction:
    """Tests for constructor preconditions."""

    def test_empty_walks(self, mapping):
        with pytest.raises(SamplingPreconditionError):
            PositiveNegativeSampleGenerator(mapping, [], window_size=2)

    def test_none_walks(self, mapping):
        with pytest.raises(SamplingPreconditionError):
            PositiveNegativeSampleGenerator(mapping, None, window_size=2)

    @pytest.mark.parametrize("window_size", [0, -1])
    def test_non_positive_window(self, mapping, window_size):
        with pytest.raises(SamplingPreconditionError):
            PositiveNegativeSampleGenerator(mapping, [[0, 1]], window_size=window_size)

    def test_precondition_is_construction_error(self, mapping):
        """Test that sampling precondition failures are construction errors."""
        with pytest.raises(ConstructionError):
            PositiveNegativeSampleGenerator(mapping, [], window_size=2)

    def test_none_mapping(self):
        with pytest.raises(ConstructionError):
            PositiveNegativeSampleGenerator(None, [[0, 1]], window_size=2)

    def test_walks_copied(self, mapping):
        """Test that later changes to the caller's walks are not seen."""
        walks = [[0, 1, 2]]
        generator = PositiveNegativeSampleGenerator(mapping, walks, window_size=1)

        walks[0].append(3)
        walks.append([4, 5])

        assert generator.walks == [[0, 1, 2]]


class TestSampleGeneration:
    """Tests for generated samples."""

    @pytest.fixture
    def walk(self):
        return [3, 4, 5, 6, 7]

    def test_labels(self, mapping, walk):
        """Test that every label is exactly '1' or '0'."""
        samples = PositiveNegativeSampleGenerator(mapping, [walk], window_size=2, seed=1).generate()

        assert samples
        assert {s.label for s in samples} == {POSITIVE_LABEL, NEGATIVE_LABEL}

    def test_counts_with_duplicates(self, mapping, walk):
        """Test positive and negative counts for one full walk."""
        generator = PositiveNegativeSampleGenerator(
            mapping, [walk], window_size=2, allow_duplicates=True, seed=1
        )
        samples = generator.generate()

        positives = [s for s in samples if s.label == POSITIVE_LABEL]
        negatives = [s for s in samples if s.label == NEGATIVE_LABEL]

        assert len(positives) == 14
        # window_size negatives per walk position
        assert len(negatives) == 5 * 2

    def test_positives_within_window(self, mapping, walk):
        """Test that every positive pair lies within the window of the walk."""
        window_size = 1
        samples = PositiveNegativeSampleGenerator(
            mapping, [walk], window_size=window_size, seed=2
        ).generate()

        allowed = set(SymmetricSlidingWindow().generate_positive_pairs(walk, window_size))

        for sample in samples:
            if sample.label == POSITIVE_LABEL:
                assert (sample.target, sample.context) in allowed

    def test_negatives_avoid_forbidden(self, mapping, walk):
        """Test that no negative hits its target's forbidden set."""
        window = SymmetricSlidingWindow()
        samples = PositiveNegativeSampleGenerator(
            mapping, [walk], window_size=2, allow_duplicates=True, seed=3
        ).generate()

        for sample in samples:
            if sample.label == NEGATIVE_LABEL:
                forbidden = window.forbidden_negatives(sample.target, walk, 2)
                assert sample.context not in forbidden
                assert 0 <= sample.context < mapping.vertex_count()

    def test_no_duplicates(self, small_mapping):
        """Test deduplication of repeated triples."""
        walks = [[0, 1, 2, 1, 0, 1, 2], [1, 0, 1, 0]] * 3

        samples = PositiveNegativeSampleGenerator(
            small_mapping, walks, window_size=1, allow_duplicates=False, seed=4
        ).generate()

        assert len(samples) == len(set(samples))

    def test_duplicates_kept(self, small_mapping):
        """Test that duplicates survive when allowed."""
        walks = [[0, 1, 2]] * 3

        samples = PositiveNegativeSampleGenerator(
            small_mapping, walks, window_size=1, allow_duplicates=True, seed=4
        ).generate()

        assert len(samples) > len(set(samples))

    def test_short_walks_discarded(self, mapping):
        """Test that single-node walks contribute nothing."""
        generator = PositiveNegativeSampleGenerator(mapping, [[0], [9]], window_size=2, seed=1)
        samples = generator.generate()

        assert samples == []
        assert generator.get_statistics(samples)['usable_walks'] == 0

    def test_bounded_when_everything_forbidden(self, small_mapping):
        """Test termination when every node is inside the window."""
        samples = PositiveNegativeSampleGenerator(
            small_mapping, [[0, 1, 2]], window_size=2, seed=1
        ).generate()

        assert samples
        assert all(s.label == POSITIVE_LABEL for s in samples)

    def test_deterministic(self, mapping):
        """Test that the same seed reproduces the same shuffled samples."""
        walks = [[0, 1, 2, 3, 4, 5], [10, 11, 12], [20, 21, 22, 23]]

        a = PositiveNegativeSampleGenerator(mapping, walks, window_size=2, seed=12345).generate()
        b = PositiveNegativeSampleGenerator(mapping, walks, window_size=2, seed=12345).generate()

        assert a == b

    def test_seed_changes_order(self, mapping):
        walks = [[0, 1, 2, 3, 4, 5], [10, 11, 12], [20, 21, 22, 23]]

        a = PositiveNegativeSampleGenerator(mapping, walks, window_size=2, seed=1).generate()
        b = PositiveNegativeSampleGenerator(mapping, walks, window_size=2, seed=2).generate()

        assert a != b

    def test_statistics(self, mapping, walk):
        generator = PositiveNegativeSampleGenerator(
            mapping, [walk], window_size=2, allow_duplicates=True, seed=1
        )
        samples = generator.generate()
        stats = generator.get_statistics(samples)

        assert stats['num_samples'] == 24
        assert stats['positive_samples'] == 14
        assert stats['negative_samples'] == 10


class TestSampleOutput:
    """Tests for sample rendering."""

    def test_str(self):
        assert str(Sample(3, 7, POSITIVE_LABEL)) == "3 7 1"

    def test_write_samples(self):
        samples = [Sample(0, 1, "1"), Sample(1, 4, "0")]
        stream = io.StringIO()

        count = write_samples(samples, stream)

        assert count == 2
        assert stream.getvalue() == "0 1 1\n1 4 0\n"
        assert list(format_samples(samples)) == ["0 1 1", "1 4 0"]


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
