"""Fundamental astronomy primitives used to build the GCRS -> ITRS rotation.

The frame transformations never compute precession-nutation, Earth rotation
angle or polar motion themselves; they call an object satisfying
:class:`AstronomyPrimitives`.  The default, :class:`ErfaPrimitives`, delegates
the astronomy to the IAU SOFA algorithms packaged by ``pyerfa``
(IAU 2006/2000A CIO-based model) and does the elementary linear algebra in
``jax.numpy`` so that the vector stage stays JIT/vmap compatible.

Matrices are row-major ``(3, 3)`` arrays acting on column vectors
(``R @ v``). The linear algebra helpers broadcast over leading batch
dimensions, so a ``(N, 3)`` batch of row vectors can be passed directly.

Uses routines and computations derived from software provided by SOFA
under license. Does not itself constitute software provided by and/or
endorsed by SOFA.
"""

from __future__ import annotations

from typing import Protocol

import erfa
import jax.numpy as jnp
import numpy as np
from jax import Array
from jax.typing import ArrayLike

from framejax.config import get_dtype


class AstronomyPrimitives(Protocol):
    """Interface for the primitives consumed by :mod:`framejax.frames`."""

    def cip_xys(self, tt1: float, tt2: float) -> tuple[float, float, float]:
        """CIP X, Y and CIO locator s [rad] at a TT date."""
        ...

    def build_c2i_matrix(self, x: float, y: float, s: float) -> Array:
        """Celestial-to-intermediate matrix from CIP X, Y and s."""
        ...

    def earth_rotation_angle(self, ut11: float, ut12: float) -> float:
        """Earth rotation angle [rad] at a UT1 date."""
        ...

    def tio_locator(self, tt1: float, tt2: float) -> float:
        """TIO locator s' [rad] at a TT date."""
        ...

    def build_polar_motion_matrix(self, xp: float, yp: float, sp: float) -> Array:
        """Polar motion matrix (TIRS -> ITRS)."""
        ...

    def compose_cio_based(self, rc2i: ArrayLike, era: float, rpom: ArrayLike) -> Array:
        """Celestial-to-terrestrial matrix from its CIO-based components."""
        ...

    def mat_vec_multiply(self, r: ArrayLike, p: ArrayLike) -> Array:
        """Rotate vector(s) *p* by matrix *r*."""
        ...

    def cross_product(self, a: ArrayLike, b: ArrayLike) -> Array:
        """Cross product ``a x b``."""
        ...

    def vec_subtract(self, a: ArrayLike, b: ArrayLike) -> Array:
        """Difference ``a - b``."""
        ...


class ErfaPrimitives:
    """:class:`AstronomyPrimitives` backed by ``pyerfa`` and ``jax.numpy``.

    Scalars are returned as Python floats and matrices as JAX arrays of the
    configured dtype (:func:`~framejax.config.get_dtype`).

    Examples:
        ```python
        from framejax.primitives import ErfaPrimitives
        prims = ErfaPrimitives()
        x, y, s = prims.cip_xys(2451545.0, 0.0)
        ```
    """

    def cip_xys(self, tt1: float, tt2: float) -> tuple[float, float, float]:
        """CIP X, Y and CIO locator s, IAU 2006/2000A (``eraXys06a``).

        Args:
            tt1: TT as 2-part Julian Date (part 1).
            tt2: TT as 2-part Julian Date (part 2).

        Returns:
            Tuple of (x, y, s) in radians.
        """
        x, y, s = erfa.xys06a(tt1, tt2)
        return float(x), float(y), float(s)

    def build_c2i_matrix(self, x: float, y: float, s: float) -> Array:
        """Celestial-to-intermediate matrix (``eraC2ixys``).

        Args:
            x: CIP X coordinate [rad].
            y: CIP Y coordinate [rad].
            s: CIO locator [rad].

        Returns:
            3x3 GCRS -> CIRS matrix.
        """
        return jnp.asarray(erfa.c2ixys(x, y, s), dtype=get_dtype())

    def earth_rotation_angle(self, ut11: float, ut12: float) -> float:
        """Earth rotation angle, IAU 2000 (``eraEra00``).

        Args:
            ut11: UT1 as 2-part Julian Date (part 1).
            ut12: UT1 as 2-part Julian Date (part 2).

        Returns:
            Earth rotation angle in radians, in ``[0, 2*pi)``.
        """
        return float(erfa.era00(ut11, ut12))

    def tio_locator(self, tt1: float, tt2: float) -> float:
        """TIO locator s' (``eraSp00``).

        Args:
            tt1: TT as 2-part Julian Date (part 1).
            tt2: TT as 2-part Julian Date (part 2).

        Returns:
            s' in radians.
        """
        return float(erfa.sp00(tt1, tt2))

    def build_polar_motion_matrix(self, xp: float, yp: float, sp: float) -> Array:
        """Polar motion matrix (``eraPom00``).

        Args:
            xp: Polar motion x-component [rad].
            yp: Polar motion y-component [rad].
            sp: TIO locator s' [rad].

        Returns:
            3x3 TIRS -> ITRS matrix.
        """
        return jnp.asarray(erfa.pom00(xp, yp, sp), dtype=get_dtype())

    def compose_cio_based(self, rc2i: ArrayLike, era: float, rpom: ArrayLike) -> Array:
        """Assemble the celestial-to-terrestrial matrix (``eraC2tcio``).

        Computes ``rpom @ Rz(era) @ rc2i``.

        Args:
            rc2i: 3x3 celestial-to-intermediate matrix.
            era: Earth rotation angle [rad].
            rpom: 3x3 polar motion matrix.

        Returns:
            3x3 celestial-to-terrestrial matrix.
        """
        rc2t = erfa.c2tcio(
            np.asarray(rc2i, dtype=np.float64),
            era,
            np.asarray(rpom, dtype=np.float64),
        )
        return jnp.asarray(rc2t, dtype=get_dtype())

    def mat_vec_multiply(self, r: ArrayLike, p: ArrayLike) -> Array:
        """Rotate one vector ``(3,)`` or a batch ``(N, 3)`` by ``r``."""
        return jnp.matmul(jnp.asarray(p), jnp.asarray(r).T)

    def cross_product(self, a: ArrayLike, b: ArrayLike) -> Array:
        """Cross product, broadcasting over leading dimensions."""
        return jnp.cross(a, b)

    def vec_subtract(self, a: ArrayLike, b: ArrayLike) -> Array:
        return jnp.subtract(a, b)
