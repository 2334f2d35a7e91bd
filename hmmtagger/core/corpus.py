"""
Corpus file handling.

A corpus is two parallel text files: one sentence per line with
whitespace-delimited tokens, and one tag sequence per line with the same
number of entries. Tokens are returned as written; case folding is done by
the model at training and decode time.
"""

from typing import List, Sequence, Tuple


def tokenize(line: str) -> List[str]:
    """Split a line on whitespace. Blank lines give []."""
    return line.split()


def _load_lines(filepath: str) -> List[List[str]]:
    with open(filepath, 'r', encoding='utf-8') as f:
        return [tokenize(line) for line in f]


def load_sentence_file(filepath: str) -> List[List[str]]:
    """Load one tokenized sentence per line."""
    return _load_lines(filepath)


def load_tag_file(filepath: str) -> List[List[str]]:
    """Load one tag sequence per line."""
    return _load_lines(filepath)


def load_corpus(sentence_file: str, tag_file: str) -> Tuple[List[List[str]], List[List[str]]]:
    """
    Load a sentence file and its parallel tag file.

    Raises:
        ValueError: if the files hold a different number of lines
    """
    sentences = load_sentence_file(sentence_file)
    tags = load_tag_file(tag_file)
    if len(sentences) != len(tags):
        raise ValueError(
            f"Sentence and tag files do not match in length: "
            f"{sentence_file} has {len(sentences)} lines, {tag_file} has {len(tags)}"
        )
    return sentences, tags


def pair_examples(sentences: Sequence[Sequence[str]],
                  tags: Sequence[Sequence[str]]) -> List[Tuple[Sequence[str], Sequence[str]]]:
    """Zip parallel sentence and tag lists into (tokens, labels) examples."""
    if len(sentences) != len(tags):
        raise ValueError(f"Got {len(sentences)} sentences but {len(tags)} tag sequences")
    return list(zip(sentences, tags))


def write_tag_file(filepath: str, tag_sequences: Sequence[Sequence[str]]):
    """Write one space-joined tag sequence per line."""
    with open(filepath, 'w', encoding='utf-8') as f:
        for tags in tag_sequences:
            f.write(' '.join(tags) + '\n')
