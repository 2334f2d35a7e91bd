"""Shared argparse argument factories for hmmtagger CLI tools.

Each function adds a group of related arguments to an ArgumentParser.
Default values can be overridden per-script where needed.
"""

import argparse
import sys

from hmmtagger.core.corpus import load_corpus
from hmmtagger.core.hmm import SequenceModel, START_LABEL
from hmmtagger.core.model_io import load_model_with_metadata
from hmmtagger.core.viterbi import DEFAULT_UNSEEN_PENALTY


def add_corpus_args(parser: argparse.ArgumentParser,
                    required: bool = True) -> None:
    """Add training corpus arguments (-s/--sentences, -t/--tags)."""
    parser.add_argument(
        '-s', '--sentences', required=required,
        help="Sentence file: one sentence per line, whitespace-separated tokens"
    )
    parser.add_argument(
        '-t', '--tags', required=required,
        help="Tag file parallel to --sentences"
    )


def add_model_source_args(parser: argparse.ArgumentParser) -> None:
    """Add a required choice between a saved model and a corpus to train on."""
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        '-m', '--model',
        help="Trained model file (.json)"
    )
    group.add_argument(
        '--train', nargs=2, metavar=('SENTENCES', 'TAGS'),
        help="Train a model from these files instead of loading one"
    )


def add_decode_args(parser: argparse.ArgumentParser,
                    default_penalty=None) -> None:
    """Add --unseen-penalty (None means: use the model's stored value)."""
    parser.add_argument(
        '--unseen-penalty', type=float, default=default_penalty,
        help="Log score for a word never seen with a tag "
             f"(default: {'from model, else -10' if default_penalty is None else default_penalty})"
    )


def add_start_label_args(parser: argparse.ArgumentParser,
                         default: str = START_LABEL,
                         training_only: bool = False) -> None:
    """
    Add --start-label argument.

    With training_only the default is None, so resolve_model() can tell an
    explicit label from an omitted one when a saved model is loaded.
    """
    if training_only:
        parser.add_argument(
            '--start-label', default=None,
            help="Synthetic label preceding every sentence; only used with "
                 f"--train, a saved model keeps its own (default: {default})"
        )
        return
    parser.add_argument(
        '--start-label', default=default,
        help=f"Synthetic label preceding every sentence (default: {default})"
    )


def add_crossval_args(parser: argparse.ArgumentParser,
                      default_folds=None,
                      default_seed: int = 33) -> None:
    """Add cross-validation arguments (--folds, --seed)."""
    parser.add_argument(
        '--folds', '-k', type=int, default=default_folds,
        help="Run k-fold cross-validation with this many folds"
    )
    parser.add_argument(
        '--seed', type=int, default=default_seed,
        help=f"Shuffle seed for cross-validation (default: {default_seed})"
    )


def add_output_args(parser: argparse.ArgumentParser,
                    required: bool = True,
                    help_text: str = "Output directory") -> None:
    """Add -o/--output argument."""
    parser.add_argument(
        '-o', '--output', required=required,
        help=help_text
    )


def add_stats_args(parser: argparse.ArgumentParser) -> None:
    """Add --stats flag."""
    parser.add_argument(
        '--stats', action='store_true',
        help="Write per-tag accuracy tables and plots"
    )


def add_verbose_args(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag."""
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help="Verbose output"
    )


def add_version_args(parser: argparse.ArgumentParser) -> None:
    """Add --version flag."""
    from hmmtagger import __version__
    parser.add_argument(
        '--version', action='version',
        version=f'%(prog)s {__version__}'
    )


def resolve_model(args):
    """
    Build the model named by add_model_source_args() and pick the penalty.

    Returns:
        (model, unseen_penalty). Exits with status 1 if files are missing.
    """
    stored_penalty = DEFAULT_UNSEEN_PENALTY
    start_label = getattr(args, 'start_label', None)
    try:
        if args.model:
            model, stored_penalty = load_model_with_metadata(args.model)
        else:
            sentences, tags = load_corpus(*args.train)
            if start_label is None:
                start_label = START_LABEL
            model = SequenceModel.fit(sentences, tags, start_label=start_label)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.model and start_label is not None and start_label != model.start_label:
        print(f"Error: --start-label {start_label!r} does not match the start label "
              f"{model.start_label!r} stored in {args.model}; it only applies to --train",
              file=sys.stderr)
        sys.exit(1)

    penalty = args.unseen_penalty if args.unseen_penalty is not None else stored_penalty
    return model, penalty
