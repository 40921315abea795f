"""Number-theory helpers behind every Diffie-Hellman computation in the app."""
from typing import List, NamedTuple, Union

Number = Union[int, float]


class PrimitiveRootResult(NamedTuple):
    """Outcome of a primitive-root check; unpacks as ``(is_root, steps)``."""
    is_root: bool
    steps: List[int]


def _as_int(num: Number) -> Union[int, None]:
    if isinstance(num, float):
        if not num.is_integer():
            return None
        return int(num)
    return num


def is_prime(num: Number) -> bool:
    num = _as_int(num)
    if num is None or num <= 1:
        return False
    if num <= 3:
        return True
    if num % 2 == 0 or num % 3 == 0:
        return False
    i = 5
    while i * i <= num:
        if num % i == 0 or num % (i + 2) == 0:
            return False
        i += 6
    return True


def gcd(a: int, b: int) -> int:
    while b:
        a, b = b, a % b
    return a


def euler_totient(n: int) -> int:
    """
    Count of integers coprime to n.

    The count starts at 1 (for i = 1) and only walks [2, n-1], so n <= 2
    yields 1 and a prime p yields p - 1.
    """
    result = 1
    for i in range(2, n):
        if gcd(i, n) == 1:
            result += 1
    return result


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Square-and-multiply exponentiation, reduced mod ``modulus`` at every step."""
    if modulus == 1:
        return 0
    result = 1
    base %= modulus
    while exponent > 0:
        if exponent % 2:
            result = (result * base) % modulus
        exponent //= 2
        base = (base * base) % modulus
    return result


def power_trace(g: int, n: int) -> List[int]:
    """Residues g^i mod n for i = 1 .. n-1, in order."""
    steps = []
    value = 1
    for _ in range(1, n):
        value = (value * g) % n
        steps.append(value)
    return steps


def is_primitive_root(g: int, n: int) -> PrimitiveRootResult:
    totient = euler_totient(n)
    steps = power_trace(g, n)
    return PrimitiveRootResult(len(set(steps)) == totient, steps)


def public_key(g: int, private_key: int, n: int) -> int:
    return mod_pow(g, private_key, n)


def shared_secret(other_public_key: int, own_private_key: int, n: int) -> int:
    return mod_pow(other_public_key, own_private_key, n)
