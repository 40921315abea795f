from dataclasses import dataclass

from number_theory import public_key, shared_secret


@dataclass(frozen=True)
class KeyExchange:
    """One party of the exchange: shared parameters plus its own private key."""
    n: int
    g: int
    private: int

    def public_component(self) -> int:
        return public_key(self.g, self.private, self.n)

    def derive_shared(self, other_public: int) -> int:
        return shared_secret(other_public, self.private, self.n)
