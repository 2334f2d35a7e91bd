"""
Shared pytest fixtures for hmmtagger tests.
"""
import pytest


@pytest.fixture
def simple_examples():
    """Three consistently tagged DET NOUN VERB sentences."""
    return [
        (["the", "dog", "runs"], ["DET", "NOUN", "VERB"]),
        (["a", "cat", "sleeps"], ["DET", "NOUN", "VERB"]),
        (["the", "man", "eats"], ["DET", "NOUN", "VERB"]),
    ]


@pytest.fixture
def mixed_examples():
    """
    Small corpus with an ambiguous word ("fish" as NOUN and VERB)
    and more than one sentence shape.
    """
    return [
        (["the", "dog", "runs"], ["DET", "NOUN", "VERB"]),
        (["dogs", "fish"], ["NOUN", "VERB"]),
        (["the", "fish", "swims"], ["DET", "NOUN", "VERB"]),
        (["i", "fish", "often"], ["PRO", "VERB", "ADV"]),
        (["you", "see", "the", "fish"], ["PRO", "VERB", "DET", "NOUN"]),
        (["the", "cat", "sees", "a", "dog"], ["DET", "NOUN", "VERB", "DET", "NOUN"]),
    ]


@pytest.fixture
def trained_model(simple_examples):
    """A SequenceModel trained on simple_examples."""
    from hmmtagger.core.hmm import train
    return train(simple_examples)


@pytest.fixture
def mixed_model(mixed_examples):
    from hmmtagger.core.hmm import train
    return train(mixed_examples)


@pytest.fixture
def corpus_files(tmp_path, mixed_examples):
    """Parallel sentence/tag files written from mixed_examples."""
    sentence_path = tmp_path / "sentences.txt"
    tag_path = tmp_path / "tags.txt"
    sentence_path.write_text(
        "\n".join(" ".join(tokens) for tokens, _ in mixed_examples) + "\n"
    )
    tag_path.write_text(
        "\n".join(" ".join(labels) for _, labels in mixed_examples) + "\n"
    )
    return str(sentence_path), str(tag_path)

