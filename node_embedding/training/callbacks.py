"""
Training Callbacks Module.

This module implements the training monitor:
- TrainingLogger: Log metrics and training progress
"""

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional


class TrainingLogger:
    """
    Log training metrics and progress.

    Provides:
    - Console logging
    - JSON metrics file (when log_dir is given)
    - Training time tracking

    Example:
        >>> logger = TrainingLogger(log_dir='logs', log_every=1)
        >>>
        >>> for epoch in range(5):
        ...     logger.start_epoch(epoch)
        ...     metrics = trainer.train_epoch()
        ...     logger.end_epoch()
        ...     logger.log_epoch(epoch, metrics)
        >>>
        >>> logger.save_final()
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        log_every: int = 1,
        verbose: bool = True
    ):
        """
        Initialize logger.

        Args:
            log_dir: Directory for log files (None = console only)
            log_every: Print to console every N epochs
            verbose: Whether to print to console
        """
        self.log_dir = Path(log_dir) if log_dir is not None else None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_every = max(1, log_every)
        self.verbose = verbose

        # Tracking
        self.epoch_metrics: List[Dict[str, Any]] = []
        self.start_time = time.time()
        self.epoch_times: List[float] = []

        # Current epoch tracking
        self.current_epoch = 0
        self.epoch_start_time = None

    def start_epoch(self, epoch: int):
        """Mark start of an epoch."""
        self.current_epoch = epoch
        self.epoch_start_time = time.time()

    def end_epoch(self):
        """Mark end of an epoch."""
        if self.epoch_start_time is not None:
            elapsed = time.time() - self.epoch_start_time
            self.epoch_times.append(elapsed)
            self.epoch_start_time = None

    def log_epoch(self, epoch: int, metrics: Dict[str, float]):
        """
        Log metrics for an epoch.

        Args:
            epoch: Epoch number
            metrics: Training metrics
        """
        record = {
            'epoch': epoch,
            'timestamp': time.time() - self.start_time,
            **{f'train_{k}': v for k, v in metrics.items()}
        }
        self.epoch_metrics.append(record)

        if self.verbose and epoch % self.log_every == 0:
            self._print_epoch(epoch, metrics)

    def _print_epoch(self, epoch: int, metrics: Dict[str, float]):
        """Print epoch summary to console."""
        parts = [f"Epoch {epoch:4d} completed"]

        for key, value in metrics.items():
            if isinstance(value, float):
                parts.append(f"{key}: {value:.4f}")
            else:
                parts.append(f"{key}: {value}")

        if self.epoch_times:
            avg_time = sum(self.epoch_times[-10:]) / len(self.epoch_times[-10:])
            parts.append(f"({avg_time:.2f}s/epoch)")

        print(" | ".join(parts))

    def save_final(self, extra_info: Optional[Dict] = None) -> Dict[str, Any]:
        """
        Build the final training summary and save it when log_dir is set.

        Args:
            extra_info: Additional info to include

        Returns:
            Summary dictionary
        """
        total_time = time.time() - self.start_time

        summary = {
            'total_epochs': len(self.epoch_metrics),
            'total_time_seconds': total_time,
            'avg_epoch_time': sum(self.epoch_times) / len(self.epoch_times)
                             if self.epoch_times else 0,
            'final_metrics': self.epoch_metrics[-1] if self.epoch_metrics else {},
            'best_loss': min(m.get('train_loss', float('inf'))
                           for m in self.epoch_metrics) if self.epoch_metrics else None,
        }

        if extra_info:
            summary.update(extra_info)

        if self.log_dir is not None:
            with open(self.log_dir / 'epoch_metrics.json', 'w') as f:
                json.dump(self.epoch_metrics, f, indent=2)

            with open(self.log_dir / 'training_summary.json', 'w') as f:
                json.dump(summary, f, indent=2)

        if self.verbose:
            print(f"\nTraining complete in {total_time:.1f} seconds")
            if self.log_dir is not None:
                print(f"Logs saved to {self.log_dir}")

        return summary

    def get_metric_history(self, metric_name: str) -> List[float]:
        """Get history of a specific metric."""
        return [m.get(metric_name) for m in self.epoch_metrics
                if metric_name in m]
