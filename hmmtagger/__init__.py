"""
hmmtagger - Hidden Markov Model part-of-speech tagger with Viterbi decoding.
"""

__version__ = "1.0.0"

from hmmtagger.core.hmm import SequenceModel, START_LABEL, train
from hmmtagger.core.viterbi import DEFAULT_UNSEEN_PENALTY, decode, viterbi
from hmmtagger.core.model_io import load_model, save_model, load_model_with_metadata
