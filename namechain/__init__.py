#!/usr/bin/env python3
"""
namechain - Markov Chain Name Generator
=======================================

Learns a fixed-order Markov chain from example names and generates new
names by a weighted random walk over it.

Quick Start
-----------
    from namechain import NameGenerator

    gen = NameGenerator(order=3, atom_min=4, atom_max=9, rebranching=3)
    gen.add_samples(["Aelar", "Elowen", "Isolde", "Lirael"])

    # One name
    name = gen.generate()

    # Raw atoms instead of a string
    atoms = gen.generate(array_mode=True)

    # Several distinct names, none copied from the corpus
    names = gen.generate_batch(10, exclude_samples=True)

Modules
-------
    namechain.graph     - Reverse-indexed transition graph
    namechain.trainer   - Adds samples to the graph
    namechain.generator - Generation walk and rebranching
    namechain.tokenizer - Corpus and sample splitting
    namechain.output    - Joining and output sanitizers
    namechain.settings  - app.yaml settings loader

CLI Usage
---------
    python -m namechain generate -n 10 --corpus nordic --order 3
    python -m namechain stats --corpus roman
    python -m namechain corpora
"""

__version__ = "0.1.0"

from .errors import (
    NamechainError,
    ConfigurationError,
    GraphConsistencyError,
)
from .graph import TERMINATOR, Leaf, TransitionGraph
from .trainer import MarkovTrainer
from .tokenizer import Tokenizer, split_text, string_to_sample
from .rng import RandomSource
from .config import GeneratorConfig
from .output import SANITIZERS, format_atoms, join_atoms
from .corpus import TRAINING_CORPUS, get_corpus, list_corpora, load_corpus
from .generator import NameGenerator

__all__ = [
    '__version__',
    # Errors
    'NamechainError',
    'ConfigurationError',
    'GraphConsistencyError',
    # Graph
    'TERMINATOR',
    'Leaf',
    'TransitionGraph',
    'MarkovTrainer',
    # Tokenizing
    'Tokenizer',
    'split_text',
    'string_to_sample',
    # Generation
    'NameGenerator',
    'GeneratorConfig',
    'RandomSource',
    # Output
    'SANITIZERS',
    'format_atoms',
    'join_atoms',
    # Corpora
    'TRAINING_CORPUS',
    'get_corpus',
    'list_corpora',
    'load_corpus',
]
