"""Small 3D vector helpers shared by the lattice and analysis code."""

import numpy as np

RAD2DEG = 180.0 / np.pi
DEG2RAD = np.pi / 180.0


def as_vector(values) -> np.ndarray:
    """Return ``values`` as a float array of shape (3,)."""
    vector = np.asarray(values, dtype=float)
    if vector.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {vector.shape}")
    return vector


def norm(vector: np.ndarray) -> float:
    """Euclidean length of a vector."""
    return float(np.sqrt(np.dot(vector, vector)))


def distance(p: np.ndarray, q: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return norm(np.asarray(q, dtype=float) - np.asarray(p, dtype=float))


def vector_angle(u: np.ndarray, v: np.ndarray) -> float:
    """
    Angle between two vectors in radians.

    The cosine is clipped to [-1, 1] so that parallel and antiparallel
    vectors give exactly 0 and pi instead of NaN from rounding.
    """
    cosine = np.dot(u, v) / (norm(u) * norm(v))
    return float(np.arccos(np.clip(cosine, -1.0, 1.0)))


def angle(vertex: np.ndarray, p: np.ndarray, q: np.ndarray) -> float:
    """
    Angle at ``vertex`` subtended by points ``p`` and ``q``, in radians.

    Args:
        vertex: Position of the central point
        p: Position of the first outer point
        q: Position of the second outer point

    Returns:
        Angle between ``p - vertex`` and ``q - vertex``
    """
    vertex = np.asarray(vertex, dtype=float)
    return vector_angle(np.asarray(p, dtype=float) - vertex, np.asarray(q, dtype=float) - vertex)
