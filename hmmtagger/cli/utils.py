#!/usr/bin/env python3
"""
hmmtagger utilities: inspect.

Usage:
    hmmtagger-utils inspect model.json
    hmmtagger-utils inspect model.json --full
    hmmtagger-utils inspect model.json --tag NN --top 20
"""

import argparse
import math
import os
import sys

import numpy as np
import pandas as pd

from hmmtagger.core.model_io import load_model_with_metadata


# =============================================================================
# inspect subcommand
# =============================================================================

def transition_table(model) -> pd.DataFrame:
    """Transition probabilities as a source x successor table (NaN = unobserved)."""
    return pd.DataFrame(
        {src: dict(successors) for src, successors in model.transitions.items()}
    ).T.pipe(np.exp)


def top_emissions(model, label: str, top: int = 10) -> pd.DataFrame:
    """Most likely tokens for one label."""
    rows = sorted(model.emissions.get(label, {}).items(), key=lambda kv: kv[1], reverse=True)
    return pd.DataFrame(
        [{'token': token, 'log_prob': lp, 'prob': math.exp(lp)} for token, lp in rows[:top]],
        columns=['token', 'log_prob', 'prob'],
    )


def cmd_inspect(args):
    """Inspect a model file: print metadata, tag set, and probability tables."""
    filepath = args.model

    if not os.path.exists(filepath):
        print(f"Error: File not found: {filepath}", file=sys.stderr)
        sys.exit(1)

    try:
        model, unseen_penalty = load_model_with_metadata(filepath)
    except ValueError as e:
        print(f"Error loading model: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Model: {filepath}")
    print(f"  Start label: {model.start_label!r}")
    print(f"  Unseen penalty: {unseen_penalty}")
    print(f"  Tags: {len(model.labels)}")
    print(f"  Vocabulary: {len(model.vocabulary):,} words")
    print()

    if args.full:
        print(model)
        return

    print("Transition probabilities (rows: from, columns: to; blank = unobserved):")
    with pd.option_context('display.max_rows', None, 'display.max_columns', None,
                           'display.width', 200):
        print(transition_table(model).to_string(na_rep='', float_format='%.4f'))
    print()

    labels = [args.tag] if args.tag else model.labels
    for label in labels:
        table = top_emissions(model, label, args.top)
        n_words = len(model.emissions.get(label, {}))
        print(f"Top emissions for {label} ({n_words:,} words):")
        if table.empty:
            print("  (none)")
        else:
            print(table.to_string(index=False, float_format='%.4f'))
        print()


# =============================================================================
# main: argument parsing with subcommands
# =============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='hmmtagger-utils',
        description='hmmtagger utilities: model inspection',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Subcommands:
  inspect   Print model metadata and probability tables

Examples:
  hmmtagger-utils inspect model.json
  hmmtagger-utils inspect model.json --full
        """
    )
    subparsers = parser.add_subparsers(dest='command')

    p_inspect = subparsers.add_parser(
        'inspect',
        help='Inspect a model file',
        description='Print model metadata, the transition table, and top emissions per tag.'
    )
    p_inspect.add_argument('model', help='Model file to inspect (.json)')
    p_inspect.add_argument('--full', action='store_true',
                           help='Print every transition and emission log probability')
    p_inspect.add_argument('--tag', default=None,
                           help='Only show emissions for this tag')
    p_inspect.add_argument('--top', type=int, default=10,
                           help='Emissions to show per tag (default: 10)')

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == 'inspect':
        cmd_inspect(args)


if __name__ == '__main__':
    main()
