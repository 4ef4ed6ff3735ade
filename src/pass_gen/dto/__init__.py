from .passphrase import PassphraseRequest
from .policy import ClassRule, PolicyRequest

__all__ = ["ClassRule", "PassphraseRequest", "PolicyRequest"]
