"""Lattice parameters, lattice vectors and coordinate transforms."""

import math

import numpy as np

from .atom import Frame, Position
from .geometry import DEG2RAD, RAD2DEG, as_vector, norm, vector_angle

# Fractional components at or above -FOLD_TOLERANCE count as inside the cell
FOLD_TOLERANCE = 1e-15


class InvalidLatticeError(ValueError):
    """Raised for lattice parameters that do not describe a 3D cell."""


def cell_index(x: float) -> int:
    """
    Integer cell offset of a fractional component.

    Components at or above ``-FOLD_TOLERANCE`` truncate toward zero; anything
    more negative moves down one extra cell (``trunc(x) - 1``).
    """
    if x >= -FOLD_TOLERANCE:
        return int(math.trunc(x))
    return int(math.trunc(x)) - 1


def lattice_vectors(parameters: tuple[float, ...]) -> tuple[np.ndarray, float]:
    """
    Lattice vectors and volume for (a, b, c, alpha, beta, gamma).

    Args:
        parameters: Lengths in Angstroms and angles in degrees

    Returns:
        Tuple of (3x3 array with rows v_a, v_b, v_c, volume)

    Raises:
        InvalidLatticeError: If the angles cannot close a cell or the volume is not positive
    """
    a, b, c = parameters[:3]
    alpha, beta, gamma = (value * DEG2RAD for value in parameters[3:])

    radicand = (
        1
        - math.cos(alpha) ** 2
        - math.cos(beta) ** 2
        - math.cos(gamma) ** 2
        + 2 * math.cos(alpha) * math.cos(beta) * math.cos(gamma)
    )
    if radicand <= 0.0:
        raise InvalidLatticeError(
            f"Lattice angles alpha={parameters[3]}, beta={parameters[4]}, gamma={parameters[5]} "
            "do not form a 3D cell"
        )

    v_a = np.array([a, 0.0, 0.0])
    v_b = np.array([b * math.cos(gamma), b * math.sin(gamma), 0.0])
    v_c = np.array(
        [
            c * math.cos(beta),
            c * (math.cos(alpha) - math.cos(beta) * math.cos(gamma)) / math.sin(gamma),
            c * math.sqrt(radicand) / math.sin(gamma),
        ]
    )

    # Triple product from the vectors themselves, not the parametric formula
    volume = float(np.dot(v_c, np.cross(v_a, v_b)))
    if volume <= 0.0:
        raise InvalidLatticeError(f"Lattice parameters {parameters} give a non-positive volume ({volume})")

    return np.vstack([v_a, v_b, v_c]), volume


class Lattice:
    """
    Triclinic lattice described by (a, b, c, alpha, beta, gamma).

    Lattice vectors follow the standard construction: ``v_a`` along x,
    ``v_b`` in the xy-plane and ``v_c`` completing the set. The matrix of
    row vectors is therefore lower triangular, which the fractional
    solver relies on.

    Args:
        a, b, c: Lattice lengths in Angstroms
        alpha, beta, gamma: Lattice angles in degrees

    Raises:
        InvalidLatticeError: If the parameters do not describe a cell
            with positive volume

    Examples:
        >>> lattice = Lattice(4.0, 4.0, 4.0, 90, 90, 90)
        >>> round(lattice.volume, 6)
        64.0
    """

    def __init__(
        self,
        a: float = 1.0,
        b: float = 1.0,
        c: float = 1.0,
        alpha: float = 90.0,
        beta: float = 90.0,
        gamma: float = 90.0,
    ):
        self.set_parameters(a, b, c, alpha, beta, gamma)

    @classmethod
    def from_vectors(cls, v1, v2, v3) -> "Lattice":
        """
        Build a lattice from three vectors.

        Lengths are the vector norms and the angles come from the
        normalised dot products (alpha from v2.v3, beta from v1.v3, gamma
        from v1.v2). The vectors are then regenerated in the standard
        orientation, so only the shape of the cell is retained.
        """
        v1, v2, v3 = as_vector(v1), as_vector(v2), as_vector(v3)
        lengths = [norm(v) for v in (v1, v2, v3)]
        if min(lengths) <= 0.0:
            raise InvalidLatticeError(f"Lattice vectors must be non-zero, got lengths {lengths}")

        alpha = vector_angle(v2, v3) * RAD2DEG
        beta = vector_angle(v1, v3) * RAD2DEG
        gamma = vector_angle(v1, v2) * RAD2DEG
        return cls(lengths[0], lengths[1], lengths[2], alpha, beta, gamma)

    @classmethod
    def from_matrix(cls, matrix) -> "Lattice":
        """Build a lattice from a 3x3 array of row vectors (e.g., an ASE cell)."""
        matrix = np.asarray(matrix, dtype=float)
        if matrix.shape != (3, 3):
            raise InvalidLatticeError(f"Expected a 3x3 cell matrix, got shape {matrix.shape}")
        return cls.from_vectors(matrix[0], matrix[1], matrix[2])

    def set_parameters(
        self,
        a: float,
        b: float,
        c: float,
        alpha: float,
        beta: float,
        gamma: float,
    ) -> None:
        """Set the lattice parameters and recompute vectors and volume."""
        if min(a, b, c) <= 0.0:
            raise InvalidLatticeError(
                f"Lattice lengths must be positive, got a={a}, b={b}, c={c}"
            )
        for name, value in (("alpha", alpha), ("beta", beta), ("gamma", gamma)):
            if not 0.0 < value < 180.0:
                raise InvalidLatticeError(
                    f"Lattice angle {name}={value} must lie strictly between 0 and 180 degrees"
                )

        parameters = (float(a), float(b), float(c), float(alpha), float(beta), float(gamma))
        vectors, volume = lattice_vectors(parameters)
        vectors.flags.writeable = False
        self._parameters = parameters
        self._vectors = vectors
        self._volume = volume

    @property
    def parameters(self) -> tuple[float, float, float, float, float, float]:
        return self._parameters

    @property
    def a(self) -> float:
        return self._parameters[0]

    @property
    def b(self) -> float:
        return self._parameters[1]

    @property
    def c(self) -> float:
        return self._parameters[2]

    @property
    def alpha(self) -> float:
        return self._parameters[3]

    @property
    def beta(self) -> float:
        return self._parameters[4]

    @property
    def gamma(self) -> float:
        return self._parameters[5]

    @property
    def vectors(self) -> np.ndarray:
        """Lattice vectors as rows (v_a, v_b, v_c)."""
        return self._vectors

    @property
    def v_a(self) -> np.ndarray:
        return self._vectors[0]

    @property
    def v_b(self) -> np.ndarray:
        return self._vectors[1]

    @property
    def v_c(self) -> np.ndarray:
        return self._vectors[2]

    @property
    def volume(self) -> float:
        """Cell volume from the scalar triple product of the lattice vectors."""
        return self._volume

    def replication_counts(self, cutoff: float) -> tuple[int, int, int]:
        """
        Number of periodic images per axis needed to cover a sphere of ``cutoff``.

        Each count uses the vector's own-axis component (``v_a[0]``,
        ``v_b[1]``, ``v_c[2]``), not the spacing between lattice planes.
        Very skewed cells can therefore miss images near the cutoff.
        """
        return (
            math.ceil(cutoff / self.v_a[0]),
            math.ceil(cutoff / self.v_b[1]),
            math.ceil(cutoff / self.v_c[2]),
        )

    def _solve_fractional(self, coords: np.ndarray) -> tuple[float, float, float]:
        # Back substitution: v_c is the only vector with a z component and
        # v_a the only one left once b and c are removed
        remainder = np.array(coords, dtype=float)
        k = remainder[2] / self.v_c[2]
        remainder -= k * self.v_c
        j = remainder[1] / self.v_b[1]
        remainder -= j * self.v_b
        i = remainder[0] / self.v_a[0]
        return float(i), float(j), float(k)

    def to_cartesian(self, position: Position) -> Position:
        """Return ``position`` in Cartesian coordinates."""
        if position.is_cartesian:
            return position
        i, j, k = position.coords
        return Position.cartesian(i * self.v_a + j * self.v_b + k * self.v_c)

    def to_fractional(self, position: Position) -> Position:
        """Return ``position`` in fractional coordinates."""
        if position.frame is Frame.FRACTIONAL:
            return position
        return Position.fractional(self._solve_fractional(position.coords))

    def fold(self, position: Position) -> Position:
        """
        Move a position into the primary cell.

        Fractional positions are converted to Cartesian first; the result is
        always Cartesian, with fractional components in [0, 1) up to the
        ``FOLD_TOLERANCE`` boundary rule of :func:`cell_index`.
        """
        coords = self.to_cartesian(position).coords
        i, j, k = self._solve_fractional(coords)
        shift = cell_index(i) * self.v_a + cell_index(j) * self.v_b + cell_index(k) * self.v_c
        return Position.cartesian(coords - shift)

    def image_offsets(self, counts: tuple[int, int, int]) -> tuple[np.ndarray, np.ndarray]:
        """
        Enumerate periodic image offsets.

        Args:
            counts: Replication count per axis (n_a, n_b, n_c)

        Returns:
            Tuple of (integer offsets of shape (M, 3), Cartesian shifts of shape (M, 3)),
            ordered with the a offset outermost and the c offset innermost
        """
        n_a, n_b, n_c = counts
        grid = np.mgrid[-n_a : n_a + 1, -n_b : n_b + 1, -n_c : n_c + 1]
        offsets = grid.reshape(3, -1).T
        return offsets, offsets @ self._vectors

    def __repr__(self) -> str:
        a, b, c, alpha, beta, gamma = self._parameters
        return (
            f"Lattice(a={a:.6g}, b={b:.6g}, c={c:.6g}, "
            f"alpha={alpha:.6g}, beta={beta:.6g}, gamma={gamma:.6g})"
        )
