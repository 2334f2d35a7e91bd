"""
k-fold cross-validation for hmmtagger.

Each fold is used once as the test set while a fresh model is trained on the
remaining folds. Models are never reused between folds.
"""

from typing import List, Sequence

import numpy as np

from hmmtagger.core.hmm import START_LABEL, train
from hmmtagger.core.viterbi import DEFAULT_UNSEEN_PENALTY
from hmmtagger.evaluation.accuracy import TaggingStats, evaluate_accuracy

DEFAULT_FOLDS = 5
DEFAULT_SEED = 33


def make_folds(n_examples: int, k: int = DEFAULT_FOLDS,
               seed: int = DEFAULT_SEED) -> List[List[int]]:
    """
    Partition example indices into k folds.

    Indices are shuffled with a seeded RandomState (so genres or sources that
    are contiguous in the corpus get spread out), then dealt round-robin:
    shuffled position i goes to fold i % k.
    """
    if k < 2:
        raise ValueError(f"Need at least 2 folds, got {k}")
    if k > n_examples:
        raise ValueError(f"Cannot split {n_examples} examples into {k} folds")

    order = np.random.RandomState(seed).permutation(n_examples)
    folds: List[List[int]] = [[] for _ in range(k)]
    for i, idx in enumerate(order):
        folds[i % k].append(int(idx))
    return folds


class CrossValidationResult:
    """Per-fold accuracy statistics from cross_validate()."""

    def __init__(self, fold_stats: List[TaggingStats], folds: List[List[int]]):
        self.fold_stats = fold_stats
        self.folds = folds

    @property
    def k(self) -> int:
        return len(self.fold_stats)

    @property
    def fold_accuracies(self) -> List[float]:
        return [stats.accuracy for stats in self.fold_stats]

    @property
    def mean_accuracy(self) -> float:
        """Unweighted mean of the fold accuracies (percent)."""
        return float(np.mean(self.fold_accuracies))

    @property
    def std_accuracy(self) -> float:
        return float(np.std(self.fold_accuracies))

    def pooled(self) -> TaggingStats:
        """All folds merged into one TaggingStats."""
        merged = TaggingStats()
        for stats in self.fold_stats:
            merged.total_tokens += stats.total_tokens
            merged.correct_tokens += stats.correct_tokens
            merged.total_sentences += stats.total_sentences
            merged.exact_sentences += stats.exact_sentences
            merged.failed_sentences += stats.failed_sentences
            merged.gold_counts.update(stats.gold_counts)
            merged.correct_counts.update(stats.correct_counts)
            merged.confusions.update(stats.confusions)
            merged.sentence_accuracies.extend(stats.sentence_accuracies)
        return merged


def cross_validate(sentences: Sequence[Sequence[str]],
                   tags: Sequence[Sequence[str]],
                   k: int = DEFAULT_FOLDS,
                   seed: int = DEFAULT_SEED,
                   unseen_penalty: float = DEFAULT_UNSEEN_PENALTY,
                   start_label: str = START_LABEL,
                   verbose: bool = False) -> CrossValidationResult:
    """
    Run k-fold cross-validation.

    Args:
        sentences: Tokenized sentences
        tags: Gold tag sequences, parallel to sentences
        k: Number of folds
        seed: Shuffle seed
        unseen_penalty: Decode setting passed to every fold
        start_label: Start label for every fold's model
        verbose: Print per-fold accuracy and show progress bars

    Returns:
        CrossValidationResult
    """
    if len(sentences) != len(tags):
        raise ValueError("Sentence and tag lists do not match in length")

    folds = make_folds(len(sentences), k, seed)
    fold_stats = []

    for fold, test_idx in enumerate(folds):
        if verbose:
            print(f"\nRunning Fold {fold + 1}/{k}")

        train_examples = [
            (sentences[i], tags[i])
            for other, idx in enumerate(folds) if other != fold
            for i in idx
        ]
        model = train(train_examples, start_label=start_label)

        stats = evaluate_accuracy(
            model,
            [sentences[i] for i in test_idx],
            [tags[i] for i in test_idx],
            unseen_penalty=unseen_penalty,
            verbose=verbose,
        )
        fold_stats.append(stats)

        if verbose:
            print(f"Fold {fold + 1} Accuracy: {stats.accuracy:.2f}%")

    result = CrossValidationResult(fold_stats, folds)
    if verbose:
        print(f"\nAverage Cross-Validation Accuracy: {result.mean_accuracy:.2f}%")
    return result
