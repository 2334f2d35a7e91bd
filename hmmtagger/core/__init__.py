"""Core HMM estimation, Viterbi decoding, and corpus/model I/O."""

from hmmtagger.core.hmm import SequenceModel, START_LABEL, train
from hmmtagger.core.viterbi import DEFAULT_UNSEEN_PENALTY, decode, decode_corpus, viterbi
from hmmtagger.core.corpus import load_corpus, pair_examples
from hmmtagger.core.model_io import load_model, save_model, load_model_with_metadata
