#!/usr/bin/env python3
"""
hmmtagger tag CLI entry point.
Tags a sentence file, or sentences typed at the console, with a trained HMM.
"""

import argparse
import os
import sys
from typing import TextIO

from hmmtagger.core.corpus import load_sentence_file, tokenize, write_tag_file
from hmmtagger.core.hmm import SequenceModel
from hmmtagger.core.viterbi import decode, decode_corpus
from hmmtagger.cli.common import (
    add_decode_args, add_model_source_args, add_start_label_args,
    add_verbose_args, add_version_args, resolve_model,
)

STOP_WORD = 'stop'


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Tag sentences with a trained HMM part-of-speech tagger',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Without -i, sentences are read interactively from the console until
"stop" or an empty line is entered.

Examples:
  hmmtagger-tag -m brown.json -i brown-test-sentences.txt -o predicted-tags.txt
  hmmtagger-tag --train simple-train-sentences.txt simple-train-tags.txt
'''
    )

    add_version_args(parser)
    add_model_source_args(parser)
    parser.add_argument('-i', '--input',
                        help="Sentence file to tag (one sentence per line)")
    parser.add_argument('-o', '--output',
                        help="Output tag file (default: print to stdout)")
    add_start_label_args(parser, training_only=True)
    add_decode_args(parser)
    add_verbose_args(parser)

    return parser.parse_args(argv)


def run_console(model: SequenceModel, unseen_penalty: float,
                stream: TextIO = None, out: TextIO = None) -> int:
    """
    Tag sentences typed one per line until 'stop', an empty line, or EOF.

    Returns:
        Number of sentences tagged
    """
    stream = stream if stream is not None else sys.stdin
    out = out if out is not None else sys.stdout

    print("Please type your input sentence and press enter.\n"
          f"Type '{STOP_WORD}' when you want to finish the console test.", file=out)

    n_tagged = 0
    for line in stream:
        line = line.strip()
        if line.lower() == STOP_WORD:
            print("Stopping console test...", file=out)
            break
        if not line:
            break

        sentence = tokenize(line)
        predicted = decode(sentence, model, unseen_penalty)
        print(f"Sentence: {' '.join(sentence)}", file=out)
        print(f"Predicted Tags: {' '.join(predicted)}", file=out)
        n_tagged += 1

    return n_tagged


def main(argv=None):
    args = parse_args(argv)
    model, unseen_penalty = resolve_model(args)

    if not args.input:
        run_console(model, unseen_penalty)
        return

    if not os.path.exists(args.input):
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    sentences = load_sentence_file(args.input)
    predictions = decode_corpus(sentences, model, unseen_penalty, verbose=args.verbose)

    n_failed = sum(1 for s, p in zip(sentences, predictions) if s and not p)
    if n_failed:
        print(f"Warning: {n_failed} sentence(s) had no viable tag path", file=sys.stderr)

    if args.output:
        out_dir = os.path.dirname(args.output)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        write_tag_file(args.output, predictions)
        print(f"Tagged {len(sentences):,} sentences -> {args.output}")
    else:
        for tags in predictions:
            print(' '.join(tags))


if __name__ == '__main__':
    main()
