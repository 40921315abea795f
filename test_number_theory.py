#!/usr/bin/env python3
"""
Number-theory checks against sympy and plain trial division.
Run: python test_number_theory.py
"""
import math

from sympy import isprime, totient, primerange, is_primitive_root as sympy_is_primitive_root

from number_theory import (
    is_prime, gcd, euler_totient, is_primitive_root, mod_pow, power_trace,
)


def _trial_division(num):
    if num < 2:
        return False
    return all(num % d for d in range(2, math.isqrt(num) + 1))


def test_is_prime():
    for num in range(-20, 2):
        assert not is_prime(num), f"{num} reported prime"
    assert is_prime(2) and is_prime(3)
    for num in range(10001):
        assert is_prime(num) == _trial_division(num) == isprime(num), f"is_prime({num}) disagrees"
    print("[PASS] is_prime agrees with trial division up to 10000")


def test_is_prime_non_integers():
    assert is_prime(7.0)
    assert not is_prime(9.0)
    assert not is_prime(7.5)
    print("[PASS] is_prime handles float input")


def test_gcd():
    for a in range(0, 60):
        assert gcd(a, 0) == a
        for b in range(1, 60):
            assert gcd(a, b) == gcd(b, a % b) == math.gcd(a, b), f"gcd({a}, {b})"
    print("[PASS] gcd follows Euclid's recursion")


def test_euler_totient():
    assert euler_totient(1) == 1
    assert euler_totient(2) == 1
    for p in primerange(2, 500):
        assert euler_totient(p) == p - 1, f"totient({p})"
    for n in range(1, 300):
        assert euler_totient(n) == totient(n), f"totient({n})"
    print("[PASS] euler_totient counts 1 plus coprimes in [2, n-1]")


def test_mod_pow():
    for base in range(0, 30):
        for exponent in range(0, 30):
            for modulus in (1, 2, 7, 23, 1000):
                assert mod_pow(base, exponent, modulus) == pow(base, exponent, modulus)
    big = 2 ** 89 - 1
    assert mod_pow(123456789, 987654321, big) == pow(123456789, 987654321, big)
    print("[PASS] mod_pow matches built-in pow")


def test_power_trace():
    assert power_trace(3, 7) == [3, 2, 6, 4, 5, 1]
    assert power_trace(5, 1) == []
    assert power_trace(-2, 7) == [pow(-2, i, 7) for i in range(1, 7)]
    print("[PASS] power_trace lists g^i mod n")


def test_primitive_root_example():
    is_root, steps = is_primitive_root(3, 7)
    assert is_root
    assert steps == [3, 2, 6, 4, 5, 1]
    assert euler_totient(7) == len(set(steps)) == 6
    print("[PASS] 3 is a primitive root of 7")


def test_primitive_root_permutation():
    for p in primerange(2, 120):
        for g in range(1, p):
            result = is_primitive_root(g, p)
            assert result.is_root == sympy_is_primitive_root(g, p), f"g={g} p={p}"
            assert len(result.steps) == p - 1
            if result.is_root:
                assert sorted(result.steps) == list(range(1, p))
    print("[PASS] primitive roots of primes produce a permutation of 1..n-1")


def test_primitive_root_rejections():
    is_root, steps = is_primitive_root(2, 7)
    assert not is_root
    assert steps == [2, 4, 1, 2, 4, 1]
    assert not is_primitive_root(5, 1).is_root
    print("[PASS] non-roots are rejected with their trace")


def test_primitive_root_composite_modulus():
    # applied as-is to composite moduli: 2 generates the units mod 9
    is_root, steps = is_primitive_root(2, 9)
    assert is_root
    assert steps == [2, 4, 8, 7, 5, 1, 2, 4]
    print("[PASS] composite modulus uses the same residue-count rule")


if __name__ == "__main__":
    test_is_prime()
    test_is_prime_non_integers()
    test_gcd()
    test_euler_totient()
    test_mod_pow()
    test_power_trace()
    test_primitive_root_example()
    test_primitive_root_permutation()
    test_primitive_root_rejections()
    test_primitive_root_composite_modulus()
    print("\nAll tests passed!")
