"""Accuracy scoring and k-fold cross-validation."""

from hmmtagger.evaluation.accuracy import TaggingStats, evaluate_accuracy, write_stats
from hmmtagger.evaluation.crossval import (
    CrossValidationResult,
    cross_validate,
    make_folds,
)

__all__ = [
    'TaggingStats',
    'evaluate_accuracy',
    'write_stats',
    'CrossValidationResult',
    'cross_validate',
    'make_folds',
]
