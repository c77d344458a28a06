"""
Evaluation Metrics Module.

This module provides metrics for evaluating the quality of learned embeddings:
- Neighbor similarity: Do connected nodes have similar embeddings?
- Link prediction: Can we predict edges from embeddings?
- Embedding statistics: Distribution and quality checks

Skip-gram vectors are not normalized, so similarities are raw dot
products unless stated otherwise.
"""

import random
from typing import Dict, List, Optional, Tuple

import numpy as np
import torch
import torch.nn.functional as F
from sklearn.metrics import average_precision_score, roc_auc_score


def _generator(seed: Optional[int]) -> torch.Generator:
    generator = torch.Generator()
    if seed is None:
        generator.seed()
    else:
        generator.manual_seed(seed)
    return generator


def compute_neighbor_similarity(
    embeddings: torch.Tensor,
    edge_index: torch.Tensor,
    sample_size: Optional[int] = 1000,
    seed: Optional[int] = None
) -> Dict:
    """
    Compute similarity statistics between connected nodes.

    Connected nodes should have higher similarity than random pairs
    if the embeddings capture graph structure.

    Args:
        embeddings: Node embeddings [num_nodes, dim]
        edge_index: Edge indices [2, num_edges]
        sample_size: Number of edges to sample (None = all)
        seed: Seed for edge and random-pair sampling

    Returns:
        Dictionary with similarity statistics
    """
    if edge_index.numel() == 0:
        return {
            'neighbor_sim_mean': 0.0,
            'neighbor_sim_std': 0.0,
            'random_sim_mean': 0.0,
            'random_sim_std': 0.0,
            'sim_gap': 0.0
        }

    generator = _generator(seed)
    num_nodes = embeddings.shape[0]
    num_edges = edge_index.shape[1]

    # Sample edges if too many
    if sample_size is not None and num_edges > sample_size:
        idx = torch.randperm(num_edges, generator=generator)[:sample_size]
        src = edge_index[0, idx]
        dst = edge_index[1, idx]
    else:
        src = edge_index[0]
        dst = edge_index[1]

    neighbor_sims = (embeddings[src] * embeddings[dst]).sum(dim=1)

    # Random pair similarities for comparison
    random_src = torch.randint(0, num_nodes, (len(src),), generator=generator)
    random_dst = torch.randint(0, num_nodes, (len(dst),), generator=generator)
    random_sims = (embeddings[random_src] * embeddings[random_dst]).sum(dim=1)

    return {
        'neighbor_sim_mean': neighbor_sims.mean().item(),
        'neighbor_sim_std': neighbor_sims.std().item() if len(neighbor_sims) > 1 else 0.0,
        'random_sim_mean': random_sims.mean().item(),
        'random_sim_std': random_sims.std().item() if len(random_sims) > 1 else 0.0,
        'sim_gap': (neighbor_sims.mean() - random_sims.mean()).item()
    }


def evaluate_link_prediction(
    embeddings: torch.Tensor,
    edge_index: torch.Tensor,
    num_negative_samples: int = 1000,
    seed: Optional[int] = None
) -> Dict:
    """
    Evaluate embeddings on link prediction task.

    Uses dot product similarity as edge score and computes
    AUC-ROC and Average Precision.

    Args:
        embeddings: Node embeddings [num_nodes, dim]
        edge_index: Edge indices [2, num_edges]
        num_negative_samples: Number of negative edges to sample
        seed: Seed for positive subsampling and negative edges

    Returns:
        Dictionary with link prediction metrics
    """
    if edge_index.numel() == 0:
        return {'auc_roc': 0.5, 'avg_precision': 0.5}

    generator = _generator(seed)
    rng = random.Random(seed)

    num_nodes = embeddings.shape[0]
    num_edges = edge_index.shape[1]

    # Use all edges as positives (or sample if too many)
    max_positives = min(num_edges, num_negative_samples)
    if num_edges > max_positives:
        idx = torch.randperm(num_edges, generator=generator)[:max_positives]
        pos_edge_index = edge_index[:, idx]
    else:
        pos_edge_index = edge_index

    edge_set = set(zip(edge_index[0].tolist(), edge_index[1].tolist()))

    # Sample negative edges
    neg_edges = []
    attempts = 0
    max_attempts = num_negative_samples * 10

    while len(neg_edges) < num_negative_samples and attempts < max_attempts:
        s = rng.randrange(num_nodes)
        d = rng.randrange(num_nodes)
        if s != d and (s, d) not in edge_set:
            neg_edges.append([s, d])
        attempts += 1

    if len(neg_edges) == 0:
        return {'auc_roc': 0.5, 'avg_precision': 0.5}

    neg_edge_index = torch.tensor(neg_edges, dtype=torch.long).t()

    pos_scores = (embeddings[pos_edge_index[0]] * embeddings[pos_edge_index[1]]).sum(dim=1)
    neg_scores = (embeddings[neg_edge_index[0]] * embeddings[neg_edge_index[1]]).sum(dim=1)

    scores = torch.cat([pos_scores, neg_scores]).cpu().numpy()
    labels = np.concatenate([
        np.ones(len(pos_scores)),
        np.zeros(len(neg_scores))
    ])

    return {
        'auc_roc': float(roc_auc_score(labels, scores)),
        'avg_precision': float(average_precision_score(labels, scores)),
        'num_pos': len(pos_scores),
        'num_neg': len(neg_scores)
    }


def compute_embedding_statistics(embeddings: torch.Tensor, seed: Optional[int] = None) -> Dict:
    """
    Compute statistics about embedding quality.

    Checks for common issues like:
    - All embeddings identical (collapse)
    - Very low variance (near-collapse)

    Args:
        embeddings: Node embeddings [num_nodes, dim]
        seed: Seed for the pairwise-similarity sample

    Returns:
        Dictionary with embedding statistics
    """
    num_nodes, dim = embeddings.shape

    norms = embeddings.norm(dim=1)

    if num_nodes < 2:
        mean_similarity = max_similarity = 1.0
    else:
        # Pairwise cosine similarities on a sample
        sample_size = min(100, num_nodes)
        sample_idx = torch.randperm(num_nodes, generator=_generator(seed))[:sample_size]
        sample = F.normalize(embeddings[sample_idx], dim=1)
        sim_matrix = sample @ sample.t()
        mask = ~torch.eye(sample_size, dtype=torch.bool)
        off_diagonal_sims = sim_matrix[mask]

        mean_similarity = off_diagonal_sims.mean().item()
        max_similarity = off_diagonal_sims.max().item()

    return {
        'num_nodes': num_nodes,
        'embedding_dim': dim,
        'mean_norm': norms.mean().item(),
        'std_norm': norms.std().item() if num_nodes > 1 else 0.0,
        'mean_per_dim': embeddings.mean(dim=0).mean().item(),
        'std_per_dim': embeddings.std(dim=0).mean().item() if num_nodes > 1 else 0.0,
        'mean_pairwise_similarity': mean_similarity,
        'max_pairwise_similarity': max_similarity,
        'is_collapsed': mean_similarity > 0.99  # Almost all pairs very similar
    }


def evaluate_embeddings(
    embeddings: torch.Tensor,
    edge_index: torch.Tensor,
    seed: Optional[int] = None
) -> Dict:
    """
    Comprehensive embedding evaluation.

    Combines all metrics into a single evaluation.

    Args:
        embeddings: Node embeddings
        edge_index: Edge indices
        seed: Seed shared by all sampled metrics

    Returns:
        Dictionary with all metrics
    """
    emb_stats = compute_embedding_statistics(embeddings, seed=seed)
    neighbor_sim = compute_neighbor_similarity(embeddings, edge_index, seed=seed)
    link_pred = evaluate_link_prediction(embeddings, edge_index, seed=seed)

    return {
        'embedding_stats': emb_stats,
        'neighbor_similarity': neighbor_sim,
        'link_prediction': link_pred,
        'summary': {
            'is_collapsed': emb_stats['is_collapsed'],
            'sim_gap': neighbor_sim['sim_gap'],
            'auc_roc': link_pred['auc_roc']
        }
    }


def check_embedding_health(embeddings: torch.Tensor) -> Tuple[bool, List[str]]:
    """
    Quick health check for embeddings.

    Returns:
        Tuple of (is_healthy, list_of_issues)
    """
    issues = []

    if torch.isnan(embeddings).any():
        issues.append("Contains NaN values")

    if torch.isinf(embeddings).any():
        issues.append("Contains infinite values")

    if not issues:
        stats = compute_embedding_statistics(embeddings, seed=0)
        if stats['is_collapsed']:
            issues.append("Embeddings have collapsed (all similar)")

    return len(issues) == 0, issues
