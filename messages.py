from dataclasses import dataclass, asdict, field
from typing import List, Optional
import json

# User-facing validation messages
MISSING_FIELDS = "Please fill in all fields."
NOT_PRIME = "n and g must be prime numbers."
NOT_PRIMITIVE_ROOT = "g must be a primitive root of n."
NOT_POSITIVE = "All values must be positive."
MISSING_BOTH_PUBLIC_KEYS = "Please fill in all fields and compute both public keys."


def missing_first_public_key(first_name: str) -> str:
    return f"Please fill in all fields and ensure {first_name} has sent their public key."


def public_key_step(name: str, label: str, g: int, private: int, n: int, value: int) -> str:
    return f"{name} computes {name}'s public key as g^{label} mod n = {g}^{private} mod {n} = {value}"


def shared_secret_step(name: str, other_name: str, label: str, other_public: int,
                       private: int, n: int, value: int) -> str:
    return (f"{name} computes the shared secret key as {other_name}'s public key^{label} mod n = "
            f"{other_public}^{private} mod {n} = {value}")


def sends_public_key(name: str, value: int) -> str:
    return f"{name} sends public key: {value}"


def residue_lines(g: int, n: int, steps: List[int]) -> List[str]:
    return [f"{g}^{i} mod {n} = {value}" for i, value in enumerate(steps, 1)]


@dataclass
class ExchangeSummary:
    """Serializable snapshot of a finished (or rejected) computation."""
    n: Optional[int]
    g: Optional[int]
    public_keys: dict = field(default_factory=dict)
    secrets: dict = field(default_factory=dict)
    steps: List[str] = field(default_factory=list)
    is_primitive_root: Optional[bool] = None
    error: Optional[str] = None

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @staticmethod
    def from_json(data: str) -> "ExchangeSummary":
        obj = json.loads(data)
        return ExchangeSummary(n=obj["n"], g=obj["g"], public_keys=obj["public_keys"],
                               secrets=obj["secrets"], steps=obj["steps"],
                               is_primitive_root=obj.get("is_primitive_root"), error=obj["error"])
