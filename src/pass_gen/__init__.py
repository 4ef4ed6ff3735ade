__all__ = (
    "exc",
    "CharacterClass",
    "ClassRule",
    "PassphraseRequest",
    "PolicyRequest",
    "CharacterSet",
    "GenerationPolicy",
    "PassphrasePolicy",
    "Report",
    "SecureEntropySource",
    "SeededEntropySource",
    "generate",
    "generate_passphrases",
    "iter_passphrases",
    "iter_passwords",
    "validate",
    "validate_passphrase",
)
__version__ = "0.1.0"

from . import exc
from .charset import CharacterClass
from .dto import ClassRule, PassphraseRequest, PolicyRequest
from .entropy import SecureEntropySource, SeededEntropySource
from .generator import (
    generate,
    generate_passphrases,
    iter_passphrases,
    iter_passwords,
)
from .policy import CharacterSet, GenerationPolicy, PassphrasePolicy
from .report import Report
from .validator import validate, validate_passphrase
