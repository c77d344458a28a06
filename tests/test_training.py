"""
Tests for Training Module.

Tests the skip-gram trainer and the training logger.
"""

import json
import math

import pytest
import torch
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from node_embedding.exceptions import ConstructionError
from node_embedding.graph import GraphBuilder, GraphType, VertexIndexMapping
from node_embedding.training import SkipGramTrainer, TrainingLogger
from node_embedding.walks import Sample


def make_trainer(samples, num_nodes=2, **kwargs):
    params = {
        'embedding_dim': 8,
        'epochs': 1,
        'learning_rate': 0.025,
        'seed': 12345,
        'verbose': False,
    }
    params.update(kwargs)
    return SkipGramTrainer(num_nodes=num_nodes, samples=samples, **params)


class TestTrainerConstruction:
    """Tests for constructor validation."""

    @pytest.mark.parametrize("kwargs", [
        {'embedding_dim': 0},
        {'epochs': 0},
        {'learning_rate': 0.0},
        {'learning_rate': -0.1},
        {'learning_rate': float('nan')},
        {'learning_rate': float('inf')},
        {'seed': 0},
    ])
    def test_invalid_hyperparameters(self, kwargs):
        with pytest.raises(ConstructionError):
            make_trainer([Sample(0, 1, "1")], **kwargs)

    def test_none_samples(self):
        with pytest.raises(ConstructionError):
            make_trainer(None)

    def test_no_nodes(self):
        with pytest.raises(ConstructionError):
            make_trainer([], num_nodes=0)

    def test_sample_out_of_range(self):
        with pytest.raises(ConstructionError):
            make_trainer([Sample(0, 2, "1")], num_nodes=2)

    def test_bad_label(self):
        with pytest.raises(ConstructionError):
            make_trainer([Sample(0, 1, "positive")])

    def test_plain_tuples_accepted(self):
        trainer = make_trainer([(0, 1, "1"), (1, 0, "0")])
        assert trainer.samples == [Sample(0, 1, "1"), Sample(1, 0, "0")]


class TestInitialization:
    """Tests for embedding table initialization."""

    def test_shape_and_range(self):
        trainer = make_trainer([], num_nodes=5, embedding_dim=16)
        embeddings = trainer.get_embeddings()

        assert sorted(embeddings) == [0, 1, 2, 3, 4]
        for vector in embeddings.values():
            assert vector.shape == (16,)
            assert vector.dtype == torch.float64
            assert (vector >= 0).all()
            assert (vector < 0.01).all()

    def test_reproducible(self):
        a = make_trainer([], num_nodes=4).embedding_matrix()
        b = make_trainer([], num_nodes=4).embedding_matrix()
        c = make_trainer([], num_nodes=4, seed=99).embedding_matrix()

        assert torch.equal(a, b)
        assert not torch.equal(a, c)


class TestTraining:
    """Tests for SGD updates and the training loop."""

    def test_positive_sample_increases_similarity(self):
        """Test that a positive sample pulls the pair together."""
        trainer = make_trainer([Sample(0, 1, "1")])
        before = trainer.similarity(0, 1)

        trainer.train()

        assert trainer.similarity(0, 1) > before

    def test_negative_sample_decreases_similarity(self):
        """Test that a negative sample pushes the pair apart."""
        trainer = make_trainer([Sample(0, 1, "0")])
        before = trainer.similarity(0, 1)

        trainer.train()

        assert trainer.similarity(0, 1) < before

    def test_single_update_values(self):
        """Test one update against the closed-form rule."""
        trainer = make_trainer([Sample(0, 1, "1")])
        t = trainer.get_embeddings()[0].clone()
        c = trainer.get_embeddings()[1].clone()

        trainer.train_epoch()

        error = 1.0 - torch.sigmoid(torch.dot(t, c))
        assert torch.allclose(trainer.get_embeddings()[0], t + 0.025 * error * c)
        assert torch.allclose(trainer.get_embeddings()[1], c + 0.025 * error * t)

    def test_self_pair(self):
        """Test that a self-pair sees its own first update."""
        trainer = make_trainer([Sample(0, 0, "1")], num_nodes=1)
        v = trainer.get_embeddings()[0].clone()

        trainer.train_epoch()

        error = 1.0 - torch.sigmoid(torch.dot(v, v))
        once = v + 0.025 * error * v
        expected = once + 0.025 * error * v
        assert torch.allclose(trainer.get_embeddings()[0], expected)

    def test_untouched_nodes_unchanged(self):
        trainer = make_trainer([Sample(0, 1, "1")], num_nodes=3)
        before = trainer.get_embeddings()[2].clone()

        trainer.train()

        assert torch.equal(trainer.get_embeddings()[2], before)

    def test_empty_samples(self):
        """Test that training on no samples leaves the table unchanged."""
        trainer = make_trainer([], num_nodes=3, epochs=3)
        before = trainer.embedding_matrix()

        history = trainer.train()

        assert len(history) == 3
        assert torch.equal(trainer.embedding_matrix(), before)

    def test_deterministic(self):
        samples = [Sample(0, 1, "1"), Sample(1, 2, "1"), Sample(0, 2, "0"), Sample(2, 1, "1")]

        a = make_trainer(samples, num_nodes=3, epochs=4)
        b = make_trainer(samples, num_nodes=3, epochs=4)
        a.train()
        b.train()

        assert torch.equal(a.embedding_matrix(), b.embedding_matrix())

    def test_history_and_metrics(self):
        samples = [Sample(0, 1, "1"), Sample(1, 0, "0")]
        trainer = make_trainer(samples, epochs=3)

        history = trainer.train_model()

        assert len(history) == 3
        assert trainer.history == history
        for metrics in history:
            assert set(metrics) == {'loss', 'pos_prob', 'neg_prob'}
            assert metrics['loss'] > 0
            assert 0.0 < metrics['pos_prob'] < 1.0
            assert not math.isnan(metrics['neg_prob'])

    def test_live_table(self):
        """Test that get_embeddings exposes the table updated by training."""
        trainer = make_trainer([Sample(0, 1, "1")])
        table = trainer.get_embeddings()
        before = table[0].clone()

        trainer.train()

        assert not torch.equal(table[0], before)

    def test_embeddings_by_vertex(self):
        builder = GraphBuilder(GraphType.DIRECTED)
        builder.add_connection("a", "b")
        mapping = VertexIndexMapping(builder.build())

        trainer = make_trainer([Sample(0, 1, "1")])
        by_vertex = trainer.embeddings_by_vertex(mapping)

        assert set(by_vertex) == {"a", "b"}
        assert torch.equal(by_vertex["a"], trainer.get_embeddings()[mapping.index_for_vertex("a")])

    def test_embedding_matrix_rows(self):
        trainer = make_trainer([], num_nodes=3, embedding_dim=4)
        matrix = trainer.embedding_matrix()

        assert matrix.shape == (3, 4)
        assert torch.equal(matrix[2], trainer.get_embeddings()[2])


class TestTrainingLogger:
    """Tests for the training logger."""

    def test_records_metrics(self):
        logger = TrainingLogger(verbose=False)

        logger.start_epoch(0)
        logger.end_epoch()
        logger.log_epoch(0, {'loss': 0.7})
        logger.log_epoch(1, {'loss': 0.5})

        assert logger.get_metric_history('train_loss') == [0.7, 0.5]
        assert len(logger.epoch_times) == 1

    def test_saves_json(self, tmp_path):
        logger = TrainingLogger(log_dir=str(tmp_path / 'logs'), verbose=False)
        logger.log_epoch(0, {'loss': 0.9})
        logger.log_epoch(1, {'loss': 0.4})

        summary = logger.save_final({'num_nodes': 2})

        assert summary['total_epochs'] == 2
        assert summary['best_loss'] == 0.4
        assert summary['num_nodes'] == 2

        with open(tmp_path / 'logs' / 'epoch_metrics.json') as f:
            assert len(json.load(f)) == 2
        assert (tmp_path / 'logs' / 'training_summary.json').exists()

    def test_console_only(self, capsys):
        logger = TrainingLogger(log_every=2, verbose=True)
        logger.log_epoch(0, {'loss': 0.5})
        logger.log_epoch(1, {'loss': 0.4})

        out = capsys.readouterr().out
        assert "Epoch    0 completed" in out
        assert "Epoch    1" not in out

    def test_trainer_uses_logger(self):
        logger = TrainingLogger(verbose=False)
        trainer = make_trainer([Sample(0, 1, "1")], epochs=2, logger=logger)

        trainer.train()

        assert len(logger.get_metric_history('train_loss')) == 2


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
