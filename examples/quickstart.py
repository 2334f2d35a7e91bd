#!/usr/bin/env python3
"""
Train a tiny tagger from hard-coded sentences and tag a new one.
"""

from hmmtagger import decode, train

training = [
    ("the dog runs".split(), ["DET", "NOUN", "VERB"]),
    ("a cat sleeps".split(), ["DET", "NOUN", "VERB"]),
    ("the man eats".split(), ["DET", "NOUN", "VERB"]),
]

model = train(training)

sentence = "a dog eats"
print(f"Sentence: {sentence}")
print(f"Predicted Tags: {decode(sentence.split(), model)}")
print()
print(model)
