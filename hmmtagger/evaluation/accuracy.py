"""hmmtagger accuracy scoring against gold tags."""

import os
from collections import Counter
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from hmmtagger.core.hmm import SequenceModel
from hmmtagger.core.viterbi import DEFAULT_UNSEEN_PENALTY, decode_corpus


class TaggingStats:
    """Collects token-level tagging accuracy from decoded sentences."""

    def __init__(self):
        self.total_tokens = 0
        self.correct_tokens = 0
        self.total_sentences = 0
        self.exact_sentences = 0
        self.failed_sentences = 0  # non-empty input decoded to []
        self.gold_counts = Counter()
        self.correct_counts = Counter()
        self.confusions = Counter()  # (gold, predicted) for wrong tokens
        self.sentence_accuracies = []

    def add_sentence(self, gold: Sequence[str], predicted: Sequence[str]):
        """
        Add one sentence.

        Positions with no prediction (a short or empty predicted sequence)
        are counted as incorrect.
        """
        self.total_sentences += 1
        if gold and not predicted:
            self.failed_sentences += 1

        correct = 0
        for j, gold_tag in enumerate(gold):
            predicted_tag = predicted[j] if j < len(predicted) else None
            self.gold_counts[gold_tag] += 1
            if predicted_tag == gold_tag:
                correct += 1
                self.correct_counts[gold_tag] += 1
            else:
                self.confusions[(gold_tag, predicted_tag)] += 1

        self.total_tokens += len(gold)
        self.correct_tokens += correct
        if gold and correct == len(gold) and len(predicted) == len(gold):
            self.exact_sentences += 1
        if gold:
            self.sentence_accuracies.append(correct / len(gold))

    @property
    def incorrect_tokens(self) -> int:
        return self.total_tokens - self.correct_tokens

    @property
    def accuracy(self) -> float:
        """Token accuracy in percent."""
        if self.total_tokens == 0:
            return 0.0
        return 100.0 * self.correct_tokens / self.total_tokens

    def get_summary(self) -> dict:
        """Generate summary statistics."""
        summary = {
            'total_sentences': self.total_sentences,
            'total_tokens': self.total_tokens,
            'correct_tokens': self.correct_tokens,
            'incorrect_tokens': self.incorrect_tokens,
            'accuracy': self.accuracy,
            'exact_sentences': self.exact_sentences,
            'pct_exact_sentences': 100 * self.exact_sentences / self.total_sentences if self.total_sentences > 0 else 0,
            'failed_sentences': self.failed_sentences,
        }

        if self.sentence_accuracies:
            summary['sentence_accuracy_mean'] = 100 * np.mean(self.sentence_accuracies)
            summary['sentence_accuracy_median'] = 100 * np.median(self.sentence_accuracies)

        return summary

    def per_tag_table(self) -> pd.DataFrame:
        """Accuracy per gold tag, most frequent tag first."""
        rows = [
            {'tag': tag, 'total': total, 'correct': self.correct_counts[tag],
             'accuracy': 100.0 * self.correct_counts[tag] / total}
            for tag, total in self.gold_counts.items()
        ]
        table = pd.DataFrame(rows, columns=['tag', 'total', 'correct', 'accuracy'])
        return table.sort_values(['total', 'tag'], ascending=[False, True]).reset_index(drop=True)

    def confusion_table(self, top: Optional[int] = None) -> pd.DataFrame:
        """Most common (gold, predicted) errors. A missing prediction shows as None."""
        rows = [
            {'gold': gold, 'predicted': predicted, 'count': count}
            for (gold, predicted), count in self.confusions.most_common(top)
        ]
        return pd.DataFrame(rows, columns=['gold', 'predicted', 'count'])

    def write_summary(self, filepath: str):
        """Write summary statistics to a text file."""
        summary = self.get_summary()

        with open(filepath, 'w') as f:
            f.write("hmmtagger Accuracy Statistics\n")
            f.write("=" * 50 + "\n\n")
            f.write(f"Sentences:                  {summary['total_sentences']:,}\n")
            f.write(f"Tokens:                     {summary['total_tokens']:,}\n")
            f.write(f"Correct tags:               {summary['correct_tokens']:,}\n")
            f.write(f"Incorrect tags:             {summary['incorrect_tokens']:,}\n")
            f.write(f"Accuracy:                   {summary['accuracy']:.2f}%\n")
            f.write(f"Exact sentences:            {summary['exact_sentences']:,} ({summary['pct_exact_sentences']:.1f}%)\n")
            f.write(f"Undecodable sentences:      {summary['failed_sentences']:,}\n")
            if 'sentence_accuracy_mean' in summary:
                f.write(f"Sentence accuracy (mean):   {summary['sentence_accuracy_mean']:.2f}%\n")
                f.write(f"Sentence accuracy (median): {summary['sentence_accuracy_median']:.2f}%\n")
            f.write("\n")

            f.write("Per-tag Accuracy\n")
            f.write("-" * 30 + "\n")
            f.write(self.per_tag_table().to_string(index=False, float_format='%.2f'))
            f.write("\n")

    def plot_per_tag(self, filepath: str, top: int = 30):
        """Bar chart of per-tag accuracy for the most frequent tags."""
        import matplotlib
        matplotlib.use('Agg')  # Non-interactive backend
        import matplotlib.pyplot as plt

        table = self.per_tag_table().head(top)

        fig, ax = plt.subplots(figsize=(max(6, 0.4 * len(table)), 4))
        ax.bar(table['tag'], table['accuracy'], color='steelblue')
        ax.axhline(self.accuracy, color='firebrick', linestyle='--',
                   label=f'Overall {self.accuracy:.1f}%')
        ax.set_ylim(0, 100)
        ax.set_ylabel('Accuracy (%)')
        ax.set_xlabel('Gold tag')
        ax.set_title('hmmtagger per-tag accuracy')
        ax.legend()
        plt.setp(ax.get_xticklabels(), rotation=90)
        fig.tight_layout()
        fig.savefig(filepath)
        plt.close(fig)


def evaluate_accuracy(model: SequenceModel,
                      sentences: Sequence[Sequence[str]],
                      tags: Sequence[Sequence[str]],
                      unseen_penalty: float = DEFAULT_UNSEEN_PENALTY,
                      verbose: bool = False) -> TaggingStats:
    """Decode every sentence and score it against its gold tags."""
    if len(sentences) != len(tags):
        raise ValueError(f"Got {len(sentences)} sentences but {len(tags)} tag sequences")

    predictions = decode_corpus(sentences, model, unseen_penalty,
                                verbose=verbose, desc="Scoring")
    stats = TaggingStats()
    for gold, predicted in zip(tags, predictions):
        stats.add_sentence(gold, predicted)
    return stats


def write_stats(stats: TaggingStats, output_dir: str, prefix: str = 'accuracy'):
    """Write summary text, per-tag/confusion TSVs, and a per-tag plot."""
    os.makedirs(output_dir, exist_ok=True)
    base = os.path.join(output_dir, prefix)

    stats.write_summary(f"{base}_summary.txt")
    stats.per_tag_table().to_csv(f"{base}_per_tag.tsv", sep='\t', index=False)
    stats.confusion_table().to_csv(f"{base}_confusions.tsv", sep='\t', index=False)
    stats.plot_per_tag(f"{base}_per_tag.png")

    return [f"{base}_summary.txt", f"{base}_per_tag.tsv",
            f"{base}_confusions.tsv", f"{base}_per_tag.png"]
