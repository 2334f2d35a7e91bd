#!/usr/bin/env python3
"""
hmmtagger train CLI entry point.
Trains a part-of-speech HMM from a sentence file and its parallel tag file.
"""

import argparse
import os
import sys

from hmmtagger.core.corpus import load_corpus, pair_examples
from hmmtagger.core.hmm import train
from hmmtagger.core.model_io import save_model
from hmmtagger.core.viterbi import DEFAULT_UNSEEN_PENALTY
from hmmtagger.cli.common import (
    add_corpus_args, add_decode_args, add_output_args,
    add_start_label_args, add_verbose_args, add_version_args,
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Train an HMM part-of-speech tagger',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  hmmtagger-train -s brown-train-sentences.txt -t brown-train-tags.txt -o brown.json
  hmmtagger-train -s train.txt -t train-tags.txt -o model.json --show-probs
'''
    )

    add_version_args(parser)
    add_corpus_args(parser)
    add_output_args(parser, help_text="Output model file (.json)")
    add_start_label_args(parser)
    add_decode_args(parser, default_penalty=DEFAULT_UNSEEN_PENALTY)
    parser.add_argument('--show-probs', action='store_true',
                        help="Print the learned transition and emission tables")
    add_verbose_args(parser)

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    print("hmmtagger Model Training")
    print(f"  Sentences: {args.sentences}")
    print(f"  Tags: {args.tags}")
    print(f"  Start label: {args.start_label!r}")
    print(f"  Unseen penalty: {args.unseen_penalty}")

    try:
        sentences, tags = load_corpus(args.sentences, args.tags)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"\nTraining on {len(sentences):,} sentences "
          f"({sum(len(s) for s in sentences):,} tokens)...")
    model = train(pair_examples(sentences, tags), start_label=args.start_label)
    print(f"  Tags: {len(model.labels)}")
    print(f"  Vocabulary: {len(model.vocabulary):,} words")
    if args.verbose:
        print(f"  Tag set: {' '.join(model.labels)}")

    if args.show_probs:
        print()
        print(model)

    out_dir = os.path.dirname(args.output)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    written = save_model(model, args.output, unseen_penalty=args.unseen_penalty)
    print(f"\nSaved: {written}")
    print("Done!")


if __name__ == '__main__':
    main()
