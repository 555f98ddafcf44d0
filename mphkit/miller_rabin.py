"""Deterministic Miller-Rabin primality test for 32-bit odd numbers."""

_SMALL_DIVISORS = (2, 3, 5, 7)
_WITNESSES = (2, 7, 61)


def _is_witness_passed(a_exp_d: int, n: int, s: int) -> bool:
    if a_exp_d in (1, n - 1):
        return True
    value = a_exp_d
    for _ in range(1, s):
        value = value * value % n
        if value == n - 1:
            return True
    return False


def check_primality(n: int) -> bool:
    """Return whether ``n`` passes the test.

    Multiples of 2, 3, 5 and 7 (the small primes themselves included) are
    rejected outright, as is any number divisible by a witness.
    """
    if n < 0:
        raise ValueError("n must be non-negative")
    if any(n % divisor == 0 for divisor in _SMALL_DIVISORS):
        return False
    if n == 1:
        raise ValueError("1 cannot be decomposed as 2^s * d with odd d")

    s = 0
    d = n - 1
    while True:
        s += 1
        d //= 2
        if d % 2 != 0:
            break

    return all(_is_witness_passed(pow(a, d, n), n, s) for a in _WITNESSES)