"""
End-to-End Integration Tests.

Tests the complete pipeline from edge list to trained embeddings.
"""

import json

import pytest
import torch
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import apply_overrides, load_config
from node_embedding.graph import (
    AdjacencyList,
    GraphBuilder,
    GraphType,
    VertexIndexMapping,
    read_edge_list,
)
from node_embedding.training import train_node_embeddings
from node_embedding.utils.metrics import check_embedding_health, evaluate_embeddings
from node_embedding.walks import (
    DeepWalkGenerator,
    NEGATIVE_LABEL,
    POSITIVE_LABEL,
    PositiveNegativeSampleGenerator,
)

EDGE_LIST = """source destination weight
1 2 1.0
2 3 1.0
3 1 1.0
3 4 0.5
4 5 1.0
5 6 1.0
6 4 1.0
2 5 2.0
"""


class TestEndToEndPipeline:
    """Tests for the complete pipeline."""

    @pytest.fixture
    def edge_file(self, tmp_path):
        path = tmp_path / 'graph.txt'
        path.write_text(EDGE_LIST)
        return path

    @pytest.fixture
    def graph(self, edge_file):
        return read_edge_list(edge_file, graph_type=GraphType.BIDIRECTIONAL).if_not_empty().build()

    @pytest.fixture
    def config(self, tmp_path):
        """Default configuration with reduced sizes for faster testing."""
        return apply_overrides(load_config(), {
            'walks.hops': 20,
            'walks.per_node': 2,
            'training.epochs': 2,
            'paths.logs': str(tmp_path / 'logs'),
        })

    def test_walks_to_samples(self, graph):
        """Test walks and samples over a loaded graph."""
        mapping = VertexIndexMapping(graph)
        adjacency = AdjacencyList(graph, mapping)

        walks = DeepWalkGenerator(graph, mapping, seed=12345).generate_walks(hops=10)

        assert len(walks) == graph.vertex_count()
        for walk in walks:
            assert len(walk) == 11  # No dead ends in a bidirectional graph
            for current, next_node in zip(walk, walk[1:]):
                assert adjacency.has_edge(current, next_node)

        samples = PositiveNegativeSampleGenerator(mapping, walks, window_size=2, seed=1).generate()

        assert samples
        assert {s.label for s in samples} <= {POSITIVE_LABEL, NEGATIVE_LABEL}
        assert len(samples) == len(set(samples))

    def test_full_pipeline(self, graph, config, tmp_path):
        """Test training from a config end to end."""
        trainer, mapping, samples = train_node_embeddings(graph, config)

        matrix = trainer.embedding_matrix()
        assert matrix.shape == (graph.vertex_count(), 16)
        assert len(trainer.history) == 2
        assert mapping.vertex_count() == 6

        healthy, issues = check_embedding_health(matrix)
        assert healthy, issues

        results = evaluate_embeddings(matrix, AdjacencyList(graph, mapping).edge_index(), seed=1)
        assert 0.0 <= results['link_prediction']['auc_roc'] <= 1.0

        with open(tmp_path / 'logs' / 'training_summary.json') as f:
            summary = json.load(f)
        assert summary['total_epochs'] == 2
        assert summary['num_samples'] == len(samples)

    def test_pipeline_deterministic(self, graph, config):
        """Test that equal seeds give identical embeddings."""
        first, _, samples_a = train_node_embeddings(graph, config)
        second, _, samples_b = train_node_embeddings(graph, config)

        assert samples_a == samples_b
        assert torch.equal(first.embedding_matrix(), second.embedding_matrix())

    def test_seed_changes_result(self, graph, config):
        other = apply_overrides(config, {'training.seed': 7})

        first, _, _ = train_node_embeddings(graph, config)
        second, _, _ = train_node_embeddings(graph, other)

        assert not torch.equal(first.embedding_matrix(), second.embedding_matrix())

    def test_string_vertices(self, tmp_path):
        """Test a graph keyed by string vertices."""
        builder = GraphBuilder(GraphType.DIRECTED)
        for s, d in [("a", "b"), ("b", "c"), ("c", "a")]:
            builder.add_connection(s, d)
        graph = builder.build()

        config = apply_overrides(load_config(), {
            'walks.hops': 5,
            'training.epochs': 1,
            'paths.logs': str(tmp_path / 'logs'),
        })
        trainer, mapping, _ = train_node_embeddings(graph, config)

        assert set(trainer.embeddings_by_vertex(mapping)) == {"a", "b", "c"}


class TestScripts:
    """Tests for the command line entry points."""

    @pytest.fixture
    def edge_file(self, tmp_path):
        path = tmp_path / 'graph.txt'
        path.write_text(EDGE_LIST)
        return path

    def test_train_script(self, edge_file, tmp_path, capsys):
        from scripts.train import main

        log_dir = tmp_path / 'logs'
        code = main([
            '--edge-list', str(edge_file),
            '--hops', '10',
            '--epochs', '1',
            '--log-dir', str(log_dir),
            '--quiet',
        ])

        assert code == 0
        out = capsys.readouterr().out
        assert "Number of nodes: 6, Number of edges: 8" in out
        assert (log_dir / 'epoch_metrics.json').exists()

    def test_generate_samples_to_file(self, edge_file, tmp_path):
        from scripts.generate_samples import main

        output = tmp_path / 'samples.txt'
        code = main([
            '--edge-list', str(edge_file),
            '--hops', '10',
            '--output', str(output),
        ])

        assert code == 0
        lines = output.read_text().splitlines()
        assert lines
        for line in lines:
            target, context, label = line.split()
            assert 0 <= int(target) < 6
            assert 0 <= int(context) < 6
            assert label in ('0', '1')

    def test_generate_samples_to_stdout(self, edge_file, capsys):
        from scripts.generate_samples import main

        main(['--edge-list', str(edge_file), '--hops', '5', '--graph-type', 'bidirectional'])

        captured = capsys.readouterr()
        assert "Number of nodes: 6, Number of edges: 16" in captured.err
        assert all(len(line.split()) == 3 for line in captured.out.splitlines())


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
