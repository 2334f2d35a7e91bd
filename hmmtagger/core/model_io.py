"""
hmmtagger model I/O module

Models are stored as JSON: human-readable and portable. The document holds
both probability tables, the start label, and the unseen-token penalty the
model was trained to be decoded with.
"""

import json
import os
import warnings
from typing import Tuple

from hmmtagger.core.hmm import SequenceModel
from hmmtagger.core.viterbi import DEFAULT_UNSEEN_PENALTY

FORMAT_VERSION = '1.0'


# =============================================================================
# Loading
# =============================================================================

def _read_json(filepath: str) -> dict:
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict) or data.get('model_type') != 'hmmtagger':
        raise ValueError(f"{filepath} is not an hmmtagger model file")
    return data


def load_model(filepath: str) -> SequenceModel:
    """
    Load a model from a JSON file.

    Args:
        filepath: Path to model file written by save_model()

    Returns:
        SequenceModel instance
    """
    return SequenceModel.from_dict(_read_json(filepath))


def load_model_with_metadata(filepath: str) -> Tuple[SequenceModel, float]:
    """
    Load model and extract metadata.

    Returns:
        (model, unseen_penalty)
    """
    data = _read_json(filepath)
    model = SequenceModel.from_dict(data)
    unseen_penalty = float(data.get('unseen_penalty', DEFAULT_UNSEEN_PENALTY))
    return model, unseen_penalty


# =============================================================================
# Saving
# =============================================================================

def save_model(model: SequenceModel, filepath: str,
               unseen_penalty: float = DEFAULT_UNSEEN_PENALTY) -> str:
    """
    Save model to file in JSON format.

    If the filepath does not end in .json, the extension is replaced with
    .json and a warning is issued.

    Args:
        model: Trained SequenceModel
        filepath: Output path (.json)
        unseen_penalty: Decode setting stored alongside the tables

    Returns:
        The path actually written
    """
    if not filepath.endswith('.json'):
        old_path = filepath
        base, _ = os.path.splitext(filepath)
        filepath = base + '.json'
        warnings.warn(
            f"Only JSON format is supported for saving. "
            f"Saving to '{filepath}' instead of '{old_path}'."
        )

    data = model.to_dict()
    data.update({
        'version': FORMAT_VERSION,
        'unseen_penalty': float(unseen_penalty),
    })
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)

    return filepath
