"""
Viterbi decoding for hmmtagger.

The decoder is a set of plain functions: all working state (frontier scores
and backpointers) lives in local variables of a single call, so the same
model can be decoded from any number of callers at once.
"""

import warnings
from typing import Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from hmmtagger.core.hmm import SequenceModel, normalize_tokens

# Log score used when a label never emitted the observed token in training.
# Must stay finite: an unknown word lowers a path's score but never blocks it.
DEFAULT_UNSEEN_PENALTY = -10.0


def viterbi(tokens: Sequence[str], model: SequenceModel,
            unseen_penalty: float = DEFAULT_UNSEEN_PENALTY) -> Tuple[List[str], float]:
    """
    Viterbi algorithm for the most likely label sequence.

    Args:
        tokens: Whitespace-tokenized sentence (case is folded here)
        model: Trained SequenceModel
        unseen_penalty: Log score for label/token pairs absent from the
            emission table

    Returns:
        path: Best label sequence, same length as tokens; [] if no path
            survives to the last token
        log_prob: Log score of the path (-inf when path is empty)
    """
    words = normalize_tokens(tokens)
    if not words:
        return [], float('-inf')

    # One {label: predecessor} map per position
    backpointers: List[Dict[str, str]] = []
    curr_scores: Dict[str, float] = {model.start_label: 0.0}

    for word in words:
        next_scores: Dict[str, float] = {}
        curr_backpointer: Dict[str, str] = {}

        for curr_state, curr_score in curr_scores.items():
            for next_state, transition_score in model.successors(curr_state).items():
                obs_score = model.emission_log_prob(next_state, word)
                if obs_score is None:
                    obs_score = unseen_penalty

                next_score = curr_score + transition_score + obs_score

                # Strict > keeps the first predecessor seen on ties
                if next_state not in next_scores or next_score > next_scores[next_state]:
                    next_scores[next_state] = next_score
                    curr_backpointer[next_state] = curr_state

        backpointers.append(curr_backpointer)
        curr_scores = next_scores

    best_state: Optional[str] = None
    best_score = float('-inf')
    for state, score in curr_scores.items():
        if best_state is None or score > best_score:
            best_state = state
            best_score = score

    if best_state is None:
        warnings.warn(
            f"No viable path found for sentence of {len(words)} tokens: "
            f"{' '.join(words)!r}"
        )
        return [], float('-inf')

    path = [best_state]
    state = best_state
    for backpointer in reversed(backpointers[1:]):
        state = backpointer[state]
        path.append(state)
    path.reverse()

    return path, best_score


def decode(tokens: Sequence[str], model: SequenceModel,
           unseen_penalty: float = DEFAULT_UNSEEN_PENALTY) -> List[str]:
    """Predict the label sequence for one sentence ([] if undecodable)."""
    path, _ = viterbi(tokens, model, unseen_penalty)
    return path


def decode_corpus(sentences: Sequence[Sequence[str]], model: SequenceModel,
                  unseen_penalty: float = DEFAULT_UNSEEN_PENALTY,
                  verbose: bool = False, desc: str = "Tagging") -> List[List[str]]:
    """Decode many sentences, optionally with a progress bar."""
    return [
        decode(sentence, model, unseen_penalty)
        for sentence in tqdm(sentences, desc=desc, disable=not verbose, leave=False)
    ]
