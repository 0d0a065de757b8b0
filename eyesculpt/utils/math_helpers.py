import math


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from a to b by factor t (0.0-1.0)."""
    return a + (b - a) * t


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value between min_val and max_val."""
    return max(min_val, min(max_val, value))


# --- 2D vectors as (x, y) tuples ---

def add(a: tuple, b: tuple) -> tuple:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: tuple, b: tuple) -> tuple:
    return (a[0] - b[0], a[1] - b[1])


def length(v: tuple) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1])


def distance(a: tuple, b: tuple) -> float:
    return length(sub(a, b))


def rotate(v: tuple, angle: float) -> tuple:
    """Rotate v counterclockwise by angle (radians)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return (v[0] * c - v[1] * s, v[0] * s + v[1] * c)


def centroid(points) -> tuple:
    """Arithmetic mean of a non-empty sequence of points."""
    points = list(points)
    n = len(points)
    return (sum(p[0] for p in points) / n, sum(p[1] for p in points) / n)
