"""
Hyperoperators for the Ackermann engine
Tetration and pentation over Python's unbounded integers.

Both operators are defined by iteration starting from 1, so a height of 0
yields 1 for any base:

    tetration(a, b) = a^(a^(...^a))   (b copies of a)
    pentation(a, b) = tetration(a, tetration(a, ...))   (b applications)

Values grow hyper-exponentially. tetration(2, 5) already has 19729 decimal
digits and pentation(2, 4) = tetration(2, 65536) cannot be materialized.
"""


def tetration(a: int, b: int) -> int:
    """
    Iterated exponentiation: raise a to the running result, b times.

    Args:
        a: Base
        b: Height (number of exponentiations)

    Returns:
        a tetrated to height b

    Examples:
        tetration(2, 0) = 1
        tetration(2, 3) = 2^(2^2) = 16
        tetration(3, 2) = 3^3 = 27
    """
    result = 1
    for _ in range(b):
        result = a**result
    return result

def pentation(a: int, b: int) -> int:
    """
    Iterated tetration: tetrate a to the running result, b times.

    Args:
        a: Base
        b: Number of tetrations

    Returns:
        a pentated to b

    Examples:
        pentation(2, 0) = 1
        pentation(2, 2) = tetration(2, 2) = 4
        pentation(2, 3) = tetration(2, 4) = 65536
    """
    result = 1
    for _ in range(b):
        result = tetration(a, result)
    return result
