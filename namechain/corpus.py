#!/usr/bin/env python3
"""
Training Corpora
================
Small built-in name lists for training, plus file loading.

A corpus file is plain UTF-8 text; with the default settings each line
is one sample.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Union

from namechain.errors import ConfigurationError


# =============================================================================
# BUILT-IN CORPORA
# =============================================================================

TRAINING_CORPUS: Dict[str, List[str]] = {
    # Invented high-fantasy given names
    'fantasy': [
        'Aelar', 'Aerin', 'Alaric', 'Arannis', 'Belwyn', 'Caelith',
        'Daeris', 'Elandor', 'Elowen', 'Faelar', 'Galinndan', 'Ilyana',
        'Isolde', 'Kethra', 'Lirael', 'Maelis', 'Mirien', 'Naivara',
        'Orrin', 'Quelenna', 'Rhiannon', 'Sariel', 'Sylvara', 'Taelen',
        'Thamior', 'Valanthe', 'Varis', 'Xanaphia', 'Ysolde', 'Zaltar',
    ],

    # Classical Latin praenomina and cognomina
    'roman': [
        'Aulus', 'Appius', 'Caius', 'Decimus', 'Gnaeus', 'Lucius',
        'Mamercus', 'Manius', 'Marcus', 'Numerius', 'Publius', 'Quintus',
        'Servius', 'Sextus', 'Spurius', 'Tiberius', 'Titus', 'Vibius',
        'Agrippa', 'Brutus', 'Cicero', 'Crassus', 'Flavius', 'Maximus',
        'Nerva', 'Octavius', 'Rufus', 'Scipio', 'Severus', 'Varro',
    ],

    # Old Norse personal names
    'nordic': [
        'Arnbjorn', 'Asgeir', 'Bjarni', 'Brynja', 'Dagny', 'Egil',
        'Eirik', 'Freydis', 'Gudrun', 'Gunnar', 'Halldor', 'Hallveig',
        'Ingrid', 'Ivar', 'Leif', 'Njal', 'Olaf', 'Ragnar', 'Ragnhild',
        'Runa', 'Sigrid', 'Sigurd', 'Snorri', 'Solveig', 'Steinar',
        'Svala', 'Thora', 'Thorvald', 'Ulf', 'Yrsa',
    ],

    # Short punchy brand names
    'brands': [
        'Acura', 'Alto', 'Apex', 'Arlo', 'Axon', 'Bolt', 'Cora',
        'Delta', 'Echo', 'Ember', 'Flux', 'Halo', 'Ionix', 'Kuro',
        'Lumo', 'Nexa', 'Nova', 'Onyx', 'Orbi', 'Pulse', 'Qira',
        'Sola', 'Tavo', 'Terra', 'Ultra', 'Vanta', 'Vela', 'Volta',
        'Zeno', 'Zola',
    ],
}


def list_corpora() -> Dict[str, int]:
    """Built-in corpus names with their sample counts."""
    return {name: len(names) for name, names in TRAINING_CORPUS.items()}


def get_corpus(name: str) -> List[str]:
    """
    Return a copy of a built-in corpus.

    Raises:
        ConfigurationError: If the corpus name is not known
    """
    names = TRAINING_CORPUS.get(name)
    if names is None:
        available = ', '.join(sorted(TRAINING_CORPUS))
        raise ConfigurationError(
            f"Unknown corpus '{name}'. Available corpora: {available}"
        )
    return list(names)


def load_corpus(path: Union[str, Path], encoding: str = 'utf-8') -> str:
    """Read a corpus file as raw text, to be split by the source splitter."""
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Corpus file not found: {path}")
    return path.read_text(encoding=encoding)
