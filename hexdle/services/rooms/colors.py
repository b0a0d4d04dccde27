import math
import random
import string

HEX_DIGITS = string.hexdigits[:16]  # 0-9a-f
HEX_LENGTH = 6
MAX_DIFFERENCE = math.sqrt(3 * 255 * 255)


def generate_hex_code(rng=random) -> str:
    """Return a random 6-digit lowercase hex color, without the leading '#'."""
    return ''.join(rng.choice(HEX_DIGITS) for _ in range(HEX_LENGTH))


def normalize_hex(value: str) -> str:
    """Strip an optional '#', lowercase, and expand 3-digit shorthand."""
    if not isinstance(value, str):
        raise ValueError('hex color must be a string')
    code = value.strip().lstrip('#').lower()
    if len(code) == 3:
        code = ''.join(ch * 2 for ch in code)
    if len(code) != HEX_LENGTH or any(ch not in HEX_DIGITS for ch in code):
        raise ValueError(f'invalid hex color: {value!r}')
    return code


def hex_to_rgb(value: str) -> tuple:
    code = normalize_hex(value)
    return tuple(int(code[i:i + 2], 16) for i in (0, 2, 4))


def color_difference(first: str, second: str) -> float:
    """Euclidean distance between two colors in RGB space."""
    r1, g1, b1 = hex_to_rgb(first)
    r2, g2, b2 = hex_to_rgb(second)
    return math.sqrt((r1 - r2) ** 2 + (g1 - g2) ** 2 + (b1 - b2) ** 2)


def color_accuracy_percentage(guess: str, target: str) -> float:
    """How close a guess is to the target, 100.0 being an exact match."""
    difference = color_difference(guess, target)
    return round((MAX_DIFFERENCE - difference) / MAX_DIFFERENCE * 100, 2)
