"""
Test Suite for Node Embedding.

This package contains tests for all modules:
- test_graph.py: Graph builder, snapshot, index mapping, adjacency, loader
- test_walks.py: Random walk generation, pair extraction, negative sampling
- test_samples.py: Positive/negative sample generation
- test_training.py: Skip-gram trainer and training logger
- test_utils.py: Graph statistics, embedding metrics, configuration
- test_integration.py: End-to-end pipeline and scripts
"""
