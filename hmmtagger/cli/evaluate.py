#!/usr/bin/env python3
"""
hmmtagger evaluate CLI entry point.
Scores tagging accuracy against gold tags, or runs k-fold cross-validation.
"""

import argparse
import os
import sys

from hmmtagger.core.corpus import load_corpus
from hmmtagger.evaluation.accuracy import TaggingStats, evaluate_accuracy, write_stats
from hmmtagger.evaluation.crossval import cross_validate
from hmmtagger.core.hmm import START_LABEL
from hmmtagger.core.viterbi import DEFAULT_UNSEEN_PENALTY
from hmmtagger.cli.common import (
    add_crossval_args, add_decode_args, add_model_source_args, add_output_args,
    add_start_label_args, add_stats_args, add_verbose_args, add_version_args,
    resolve_model,
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Evaluate an HMM part-of-speech tagger against gold tags',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Without --test, the model is scored on its own training files.

Examples:
  # Accuracy of a saved model on a held-out set
  hmmtagger-evaluate -m brown.json --test brown-test-sentences.txt brown-test-tags.txt

  # Train and score on the same files
  hmmtagger-evaluate --train simple-train-sentences.txt simple-train-tags.txt

  # 5-fold cross-validation with per-tag statistics
  hmmtagger-evaluate --train brown-test-sentences.txt brown-test-tags.txt --folds 5 --stats -o cv/
'''
    )

    add_version_args(parser)
    add_model_source_args(parser)
    parser.add_argument('--test', nargs=2, metavar=('SENTENCES', 'TAGS'),
                        help="Held-out sentence and tag files to score")
    add_crossval_args(parser)
    add_start_label_args(parser, training_only=True)
    add_decode_args(parser)
    add_stats_args(parser)
    add_output_args(parser, required=False,
                    help_text="Output directory for --stats files")
    add_verbose_args(parser)

    return parser.parse_args(argv)


def print_accuracy(stats: TaggingStats):
    print(f"Number of correct tags: {stats.correct_tokens:,}")
    print(f"Number of incorrect tags: {stats.incorrect_tokens:,}")
    print(f"Accuracy: {stats.accuracy:.2f}%")
    if stats.failed_sentences:
        print(f"Sentences with no viable path: {stats.failed_sentences:,}")


def _load_or_exit(sentence_file, tag_file):
    try:
        return load_corpus(sentence_file, tag_file)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def run_cross_validation(args) -> TaggingStats:
    if not args.train:
        print("Error: --folds requires --train SENTENCES TAGS", file=sys.stderr)
        sys.exit(1)

    sentences, tags = _load_or_exit(*args.train)
    penalty = args.unseen_penalty if args.unseen_penalty is not None else DEFAULT_UNSEEN_PENALTY
    start_label = args.start_label if args.start_label is not None else START_LABEL

    print(f"Cross-validating on {len(sentences):,} sentences "
          f"({args.folds} folds, seed {args.seed})")
    try:
        result = cross_validate(sentences, tags, k=args.folds, seed=args.seed,
                                unseen_penalty=penalty, start_label=start_label,
                                verbose=True)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Std. dev. across folds: {result.std_accuracy:.2f}")
    return result.pooled()


def run_accuracy(args) -> TaggingStats:
    model, penalty = resolve_model(args)

    if args.test:
        test_files = args.test
    elif args.train:
        test_files = args.train
    else:
        print("Error: --test is required with --model", file=sys.stderr)
        sys.exit(1)

    sentences, tags = _load_or_exit(*test_files)
    print(f"testing file: {test_files[0]}")
    stats = evaluate_accuracy(model, sentences, tags,
                              unseen_penalty=penalty, verbose=args.verbose)
    print_accuracy(stats)
    return stats


def main(argv=None):
    args = parse_args(argv)

    if args.stats and not args.output:
        print("Error: --stats requires -o/--output", file=sys.stderr)
        sys.exit(1)

    if args.folds is not None:
        stats = run_cross_validation(args)
        prefix = 'crossval'
    else:
        stats = run_accuracy(args)
        prefix = 'accuracy'

    if args.stats:
        print(f"\nWriting statistics to {args.output}")
        os.makedirs(args.output, exist_ok=True)
        for path in write_stats(stats, args.output, prefix=prefix):
            print(f"  Saved: {path}")


if __name__ == '__main__':
    main()
