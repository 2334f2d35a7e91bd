"""
Tests for hmmtagger.core.model_io module.
"""
import json
import os
import warnings

import numpy as np
import pytest

from hmmtagger.core.hmm import SequenceModel, train
from hmmtagger.core.model_io import load_model, save_model, load_model_with_metadata
from hmmtagger.core.viterbi import decode


@pytest.fixture
def sample_model(mixed_examples):
    return train(mixed_examples, start_label='<s>')


class TestLoadSaveRoundTrip:
    def test_json_round_trip(self, sample_model, tmp_path):
        filepath = str(tmp_path / "model.json")
        save_model(sample_model, filepath)

        loaded = load_model(filepath)
        assert loaded.start_label == '<s>'
        assert loaded.labels == sample_model.labels
        for src, successors in sample_model.transitions.items():
            for dst, lp in successors.items():
                np.testing.assert_allclose(loaded.transition_log_prob(src, dst), lp)
        for label, tokens in sample_model.emissions.items():
            for token, lp in tokens.items():
                np.testing.assert_allclose(loaded.emission_log_prob(label, token), lp)

    def test_loaded_model_decodes_identically(self, sample_model, tmp_path):
        filepath = str(tmp_path / "model.json")
        save_model(sample_model, filepath)
        loaded = load_model(filepath)

        sentence = ["you", "see", "the", "zebra"]
        assert decode(sentence, loaded) == decode(sentence, sample_model)

    def test_metadata_preserved(self, sample_model, tmp_path):
        filepath = str(tmp_path / "model.json")
        save_model(sample_model, filepath, unseen_penalty=-7.5)

        model, penalty = load_model_with_metadata(filepath)
        assert penalty == -7.5
        assert model.start_label == '<s>'

    def test_json_contains_expected_keys(self, sample_model, tmp_path):
        filepath = str(tmp_path / "model.json")
        save_model(sample_model, filepath)

        with open(filepath) as f:
            data = json.load(f)

        assert data['model_type'] == 'hmmtagger'
        assert data['version'] == '1.0'
        assert data['start_label'] == '<s>'
        assert data['unseen_penalty'] == -10.0
        assert 'transitions' in data
        assert 'emissions' in data

    def test_untrained_model_round_trip(self, tmp_path):
        filepath = str(tmp_path / "empty.json")
        save_model(SequenceModel(), filepath)
        assert not load_model(filepath).is_trained


class TestSaveRedirect:
    def test_non_json_redirects_to_json(self, sample_model, tmp_path):
        pkl_path = str(tmp_path / "model.pickle")
        json_path = str(tmp_path / "model.json")

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            written = save_model(sample_model, pkl_path)
            assert len(w) == 1
            assert "JSON format" in str(w[0].message)

        assert written == json_path
        assert os.path.exists(json_path)
        assert not os.path.exists(pkl_path)
        assert load_model(json_path).labels == sample_model.labels


class TestInvalidFiles:
    def test_wrong_model_type(self, tmp_path):
        filepath = tmp_path / "other.json"
        filepath.write_text(json.dumps({'model_type': 'other', 'n_states': 2}))
        with pytest.raises(ValueError, match="not an hmmtagger model"):
            load_model(str(filepath))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_model(str(tmp_path / "missing.json"))
