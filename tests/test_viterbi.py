"""
Unit tests for hmmtagger Viterbi decoding.

Tests cover:
- Recovery of known tag sequences
- Length preservation and determinism
- Unseen-word penalty
- Tie-breaking and pruning of unreachable labels
- No-viable-path handling
"""
import math

import pytest

from hmmtagger.core.hmm import SequenceModel, START_LABEL, train
from hmmtagger.core.viterbi import (
    DEFAULT_UNSEEN_PENALTY,
    decode,
    decode_corpus,
    viterbi,
)


class TestKnownSequences:
    """Test that well-attested sentences decode to their training tags."""

    def test_known_sequence_recovery(self):
        examples = [(["the", "dog", "runs"], ["DET", "NOUN", "VERB"])] * 2
        model = train(examples)
        assert decode(["the", "dog", "runs"], model) == ["DET", "NOUN", "VERB"]

    def test_new_combination_of_seen_words(self, trained_model):
        assert decode(["a", "dog", "eats"], trained_model) == ["DET", "NOUN", "VERB"]

    def test_ambiguous_word_resolved_by_context(self, mixed_model):
        assert decode(["the", "fish", "swims"], mixed_model) == ["DET", "NOUN", "VERB"]
        assert decode(["i", "fish", "often"], mixed_model) == ["PRO", "VERB", "ADV"]

    def test_input_case_folded(self, trained_model):
        assert decode(["The", "DOG", "Runs"], trained_model) == ["DET", "NOUN", "VERB"]

    def test_caller_tokens_not_mutated(self, trained_model):
        tokens = ["The", "Dog", "Runs"]
        decode(tokens, trained_model)
        assert tokens == ["The", "Dog", "Runs"]


class TestDecodeProperties:
    """Test invariants that hold for any input."""

    @pytest.mark.parametrize("sentence", [
        ["the"],
        ["the", "cat"],
        ["you", "see", "the", "fish"],
        ["the", "dog", "sees", "a", "cat", "and", "a", "fish"],
    ])
    def test_length_preserved(self, mixed_model, sentence):
        assert len(decode(sentence, mixed_model)) == len(sentence)

    def test_deterministic(self, mixed_model):
        sentence = ["you", "fish", "the", "dog", "often"]
        first = decode(sentence, mixed_model)
        for _ in range(5):
            assert decode(sentence, mixed_model) == first

    def test_start_label_never_in_output(self, mixed_model):
        for sentence in (["the"], ["zzz", "qqq"], ["you", "see", "the", "fish"]):
            assert START_LABEL not in decode(sentence, mixed_model)

    def test_labels_come_from_model(self, mixed_model):
        result = decode(["the", "cat", "sees", "a", "dog"], mixed_model)
        assert set(result) <= set(mixed_model.labels)

    def test_log_prob_finite_and_negative(self, mixed_model):
        path, log_prob = viterbi(["the", "dog", "runs"], mixed_model)
        assert len(path) == 3
        assert math.isfinite(log_prob)
        assert log_prob < 0


class TestUnseenWords:
    """Test the unseen-word penalty."""

    def test_unseen_token_decodes(self, trained_model):
        result = decode(["the", "zebra", "runs"], trained_model)
        assert result == ["DET", "NOUN", "VERB"]

    def test_all_unseen_tokens(self, trained_model):
        result = decode(["xx", "yy", "zz"], trained_model)
        assert result == ["DET", "NOUN", "VERB"]

    def test_penalty_added_to_score(self, trained_model):
        """Replacing 'dog' with an unseen word swaps log(1/3) for the penalty."""
        _, seen = viterbi(["the", "dog", "runs"], trained_model)
        _, unseen = viterbi(["the", "zebra", "runs"], trained_model)
        assert unseen - seen == pytest.approx(DEFAULT_UNSEEN_PENALTY - math.log(1 / 3))

    def test_custom_penalty(self, trained_model):
        _, default = viterbi(["zebra"], trained_model)
        _, harsh = viterbi(["zebra"], trained_model, unseen_penalty=-50.0)
        assert default == pytest.approx(-10.0)
        assert harsh == pytest.approx(-50.0)

    def test_penalty_can_override_transition(self):
        """
        A known emission beats a common transition when the penalty is
        harsh, and loses to it when the penalty is mild.
        """
        model = SequenceModel(
            transitions={'#': {'A': math.log(0.9), 'B': math.log(0.1)}},
            emissions={'A': {'x': 0.0}, 'B': {'y': 0.0}},
        )
        assert decode(["y"], model, unseen_penalty=-10.0) == ['B']
        assert decode(["y"], model, unseen_penalty=-0.1) == ['A']


class TestTieBreakingAndPruning:
    """Test strict-greater updates and unreachable labels."""

    def test_first_successor_wins_final_tie(self):
        model = SequenceModel(
            transitions={'#': {'A': math.log(0.5), 'B': math.log(0.5)}},
            emissions={'A': {'w': 0.0}, 'B': {'w': 0.0}},
        )
        assert decode(["w"], model) == ['A']

        flipped = SequenceModel(
            transitions={'#': {'B': math.log(0.5), 'A': math.log(0.5)}},
            emissions={'A': {'w': 0.0}, 'B': {'w': 0.0}},
        )
        assert decode(["w"], flipped) == ['B']

    def test_first_predecessor_wins_tie(self):
        """Two equally good routes into C: the earlier source label is kept."""
        model = SequenceModel(
            transitions={
                '#': {'A': math.log(0.5), 'B': math.log(0.5)},
                'A': {'C': 0.0},
                'B': {'C': 0.0},
            },
            emissions={'A': {'w': 0.0}, 'B': {'w': 0.0}, 'C': {'v': 0.0}},
        )
        assert decode(["w", "v"], model) == ['A', 'C']

    def test_better_later_path_replaces_earlier(self):
        model = SequenceModel(
            transitions={
                '#': {'A': math.log(0.5), 'B': math.log(0.5)},
                'A': {'C': math.log(0.1), 'A': math.log(0.9)},
                'B': {'C': 0.0},
            },
            emissions={'A': {'w': 0.0}, 'B': {'w': 0.0}, 'C': {'v': 0.0}},
        )
        assert decode(["w", "v"], model) == ['B', 'C']

    def test_label_without_incoming_transition_pruned(self):
        """A label only reachable from a dead branch never appears."""
        model = SequenceModel(
            transitions={'#': {'A': 0.0}, 'A': {'A': 0.0}, 'Z': {'A': 0.0}},
            emissions={'A': {'w': 0.0}, 'Z': {'w': 0.0}},
        )
        assert decode(["w", "w", "w"], model) == ['A', 'A', 'A']

    def test_decode_from_state_without_successors(self):
        """A frontier label with no outgoing transitions just contributes nothing."""
        model = SequenceModel(
            transitions={'#': {'A': math.log(0.5), 'END': math.log(0.5)}, 'A': {'A': 0.0}},
            emissions={'A': {'w': 0.0}, 'END': {'w': 0.0}},
        )
        assert decode(["w", "w"], model) == ['A', 'A']


class TestNoViablePath:
    """Test the empty-result failure mode."""

    def test_untrained_model_returns_empty(self):
        with pytest.warns(UserWarning, match="No viable path"):
            path, log_prob = viterbi(["the", "dog"], SequenceModel())
        assert path == []
        assert log_prob == float('-inf')

    def test_dead_end_returns_empty(self):
        """Every path dies when the only label has no successors."""
        model = SequenceModel(transitions={'#': {'A': 0.0}}, emissions={'A': {'w': 0.0}})
        with pytest.warns(UserWarning, match="No viable path"):
            assert decode(["w", "w"], model) == []

    def test_empty_sentence(self, trained_model):
        assert decode([], trained_model) == []


class TestDecodeCorpus:
    def test_decode_corpus(self, mixed_model):
        sentences = [["the", "dog", "runs"], ["i", "fish", "often"]]
        result = decode_corpus(sentences, mixed_model)
        assert result == [["DET", "NOUN", "VERB"], ["PRO", "VERB", "ADV"]]

    def test_decoding_leaves_model_unchanged(self, mixed_model):
        before = mixed_model.to_dict()
        decode_corpus([["the", "zebra"], ["qq"]], mixed_model)
        assert mixed_model.to_dict() == before


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
