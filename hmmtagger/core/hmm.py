"""
hmmtagger HMM module

Provides:
1. SequenceModel: first-order HMM tables (transitions and emissions) in log space
2. train(): maximum-likelihood estimation of those tables from labeled sentences

Tables are sparse: a transition or emission that was never observed during
training is simply absent, and lookups return None for it. The Viterbi
decoder (hmmtagger.core.viterbi) decides what an absent entry is worth.
"""

import warnings
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

START_LABEL = '#'

_EMPTY: Mapping[str, float] = MappingProxyType({})


def normalize_tokens(tokens: Sequence[str]) -> List[str]:
    """Case-fold tokens into a new list (the caller's sequence is left alone)."""
    return [token.lower() for token in tokens]


class SequenceModel:
    """
    Trained part-of-speech HMM.

    Holds two nested tables of natural-log probabilities:
        transitions[source][successor]  (source may be the start label)
        emissions[label][token]

    Each inner map sums to 1.0 in probability space over the keys observed
    for that source. The model is read-only once built; train() always
    returns a new instance.
    """

    def __init__(self,
                 transitions: Optional[Dict[str, Dict[str, float]]] = None,
                 emissions: Optional[Dict[str, Dict[str, float]]] = None,
                 start_label: str = START_LABEL):
        self.start_label = start_label
        self._transitions = _freeze(transitions or {})
        self._emissions = _freeze(emissions or {})

    @property
    def transitions(self) -> Mapping[str, Mapping[str, float]]:
        """Read-only transition table. Missing keys mean 'never observed'."""
        return self._transitions

    @property
    def emissions(self) -> Mapping[str, Mapping[str, float]]:
        """Read-only emission table. Missing keys mean 'never observed'."""
        return self._emissions

    @property
    def is_trained(self) -> bool:
        return bool(self._transitions)

    @property
    def labels(self) -> List[str]:
        """Emitting labels in first-seen order (start label excluded)."""
        seen = {}
        for successors in self._transitions.values():
            for label in successors:
                seen.setdefault(label, None)
        for label in self._emissions:
            seen.setdefault(label, None)
        seen.pop(self.start_label, None)
        return list(seen)

    @property
    def vocabulary(self) -> List[str]:
        """All tokens observed under any label."""
        seen = {}
        for tokens in self._emissions.values():
            for token in tokens:
                seen.setdefault(token, None)
        return list(seen)

    def successors(self, label: str) -> Mapping[str, float]:
        """Observed successors of `label` with their log probabilities."""
        return self._transitions.get(label, _EMPTY)

    def transition_log_prob(self, source: str, successor: str) -> Optional[float]:
        return self._transitions.get(source, _EMPTY).get(successor)

    def emission_log_prob(self, label: str, token: str) -> Optional[float]:
        return self._emissions.get(label, _EMPTY).get(token)

    @classmethod
    def fit(cls, sentences: Sequence[Sequence[str]],
            tag_sequences: Sequence[Sequence[str]],
            start_label: str = START_LABEL) -> 'SequenceModel':
        """Train from parallel lists of sentences and tag sequences."""
        if len(sentences) != len(tag_sequences):
            raise ValueError(
                f"Got {len(sentences)} sentences but {len(tag_sequences)} tag sequences"
            )
        return train(zip(sentences, tag_sequences), start_label=start_label)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize model to dictionary."""
        return {
            'start_label': self.start_label,
            'transitions': {k: dict(v) for k, v in self._transitions.items()},
            'emissions': {k: dict(v) for k, v in self._emissions.items()},
            'model_type': 'hmmtagger',
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'SequenceModel':
        """Deserialize model from dictionary."""
        return cls(
            transitions=d.get('transitions') or {},
            emissions=d.get('emissions') or {},
            start_label=d.get('start_label', START_LABEL),
        )

    def __str__(self) -> str:
        lines = ["Transition Probabilities:"]
        for state, successors in self._transitions.items():
            lines.append(f"{state} -> {dict(successors)}")
        lines.append("Observation Probabilities:")
        for tag, tokens in self._emissions.items():
            lines.append(f"{tag} -> {dict(tokens)}")
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (f"SequenceModel(labels={len(self.labels)}, "
                f"vocabulary={len(self.vocabulary)}, start_label={self.start_label!r})")


def _freeze(table: Dict[str, Dict[str, float]]) -> Mapping[str, Mapping[str, float]]:
    return MappingProxyType({
        key: MappingProxyType({sub: float(v) for sub, v in inner.items()})
        for key, inner in table.items()
    })


# =============================================================================
# Training
# =============================================================================

def _add_count(counts: Dict[str, Dict[str, int]], key: str, sub_key: str):
    """Increment counts[key][sub_key], e.g. _add_count(trans, 'NP', 'V')."""
    inner = counts.setdefault(key, {})
    inner[sub_key] = inner.get(sub_key, 0) + 1


def counts_to_log_probs(counts: Dict[str, Dict[str, int]]) -> Dict[str, Dict[str, float]]:
    """
    Convert a nested count map to a nested log-probability map.

    Every outer key is normalized on its own: each count is divided by the
    total under that key, then the natural log is taken.
    """
    log_probs = {}
    for key, inner in counts.items():
        values = np.fromiter(inner.values(), dtype=float, count=len(inner))
        logs = np.log(values / values.sum())
        log_probs[key] = {sub_key: float(lp) for sub_key, lp in zip(inner.keys(), logs)}
    return log_probs


def train(examples: Iterable[Tuple[Sequence[str], Sequence[str]]],
          start_label: str = START_LABEL) -> SequenceModel:
    """
    Estimate transition and emission log probabilities from labeled sentences.

    Args:
        examples: (tokens, labels) pairs of equal length. Tokens are
            lower-cased here; the caller's sequences are not modified.
        start_label: Synthetic label that precedes every sentence

    Returns:
        A new SequenceModel. Examples whose token and label counts differ,
        that are empty, or that use start_label as a tag are skipped with a
        warning.
    """
    transition_counts: Dict[str, Dict[str, int]] = {}
    emission_counts: Dict[str, Dict[str, int]] = {}

    for i, (tokens, labels) in enumerate(examples):
        if len(tokens) != len(labels):
            warnings.warn(
                f"Sentence and tag sequence lengths do not match for sentence {i} "
                f"({len(tokens)} tokens, {len(labels)} tags); skipping"
            )
            continue
        if not labels:
            warnings.warn(f"Sentence {i} is empty; skipping")
            continue
        if start_label in labels:
            warnings.warn(
                f"Sentence {i} uses the start label {start_label!r} as a tag; skipping"
            )
            continue

        tokens = normalize_tokens(tokens)

        _add_count(transition_counts, start_label, labels[0])
        _add_count(emission_counts, labels[0], tokens[0])

        for j in range(1, len(tokens)):
            _add_count(transition_counts, labels[j - 1], labels[j])
            _add_count(emission_counts, labels[j], tokens[j])

    return SequenceModel(
        transitions=counts_to_log_probs(transition_counts),
        emissions=counts_to_log_probs(emission_counts),
        start_label=start_label,
    )
