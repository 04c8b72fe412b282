"""Ways to build an :class:`EOPData` table.

Constant tables (:func:`static_eop`, :func:`zero_eop`) are for tests and
for callers who know their parameters.  Real data comes from an IERS
``finals.all.iau2000.txt`` file, either one the caller already has
(:func:`load_eop_from_file`) or one kept under the framejax cache directory
and refreshed from the IERS data centre with httpx (:func:`load_cached_eop`).

The cache root is ``$FRAMEJAX_CACHE`` when set, else ``~/.cache/framejax``.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

import httpx
import jax.numpy as jnp
import numpy as np

from framejax.config import get_dtype
from framejax.eop._parsers import parse_standard_file
from framejax.eop._types import EOPData
from framejax.errors import ExternalProviderError

logger = logging.getLogger(__name__)

IERS_STANDARD_URL: str = (
    "https://datacenter.iers.org/data/latestVersion/finals.all.iau2000.txt"
)
"""IERS Bulletin A finals file (IAU 2000 pole offsets)."""

STANDARD_FILENAME: str = "finals.all.iau2000.txt"

_CACHE_ENV_VAR = "FRAMEJAX_CACHE"
_DEFAULT_MAX_AGE_DAYS: float = 7.0
_DEFAULT_TIMEOUT: float = 120.0


def static_eop(
    pm_x: float = 0.0,
    pm_y: float = 0.0,
    ut1_utc: float = 0.0,
    dX: float = 0.0,
    dY: float = 0.0,
    lod: float = 0.0,
    mjd_min: float = 0.0,
    mjd_max: float = 99999.0,
) -> EOPData:
    """Two-row table holding the same values at *mjd_min* and *mjd_max*.

    Args:
        pm_x: Polar motion x-component [rad].
        pm_y: Polar motion y-component [rad].
        ut1_utc: UT1-UTC [s].
        dX: Celestial pole offset X [rad].
        dY: Celestial pole offset Y [rad].
        lod: Length of day excess [s].
        mjd_min: First MJD of the table.
        mjd_max: Last MJD of the table.

    Returns:
        EOPData that interpolates to the given constants everywhere.

    Examples:
        ```python
        from framejax.eop import EOPDataProvider, static_eop
        provider = EOPDataProvider(static_eop(ut1_utc=-0.1))
        ```
    """
    dtype = get_dtype()

    def pair(value: float):
        return jnp.array([value, value], dtype=dtype)

    return EOPData(
        mjd=jnp.array([mjd_min, mjd_max], dtype=dtype),
        pm_x=pair(pm_x),
        pm_y=pair(pm_y),
        ut1_utc=pair(ut1_utc),
        dX=pair(dX),
        dY=pair(dY),
        lod=pair(lod),
        mjd_min=jnp.array(mjd_min, dtype=dtype),
        mjd_max=jnp.array(mjd_max, dtype=dtype),
        mjd_last_lod=jnp.array(mjd_max, dtype=dtype),
        mjd_last_dxdy=jnp.array(mjd_max, dtype=dtype),
    )


def zero_eop() -> EOPData:
    """Table with every parameter zero (UT1 = UTC, no polar motion)."""
    return static_eop()


def load_eop_from_file(filepath: str | Path) -> EOPData:
    """Read an IERS standard-format file into an :class:`EOPData` table.

    Args:
        filepath: Path to a ``finals.all.iau2000.txt``-style file.

    Returns:
        EOPData with the last MJDs that carry LOD and dX/dY recorded.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file holds no usable record.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"EOP file not found: {filepath}")

    table = np.array(parse_standard_file(filepath), dtype=np.float64)
    mjd, pm_x, pm_y, ut1_utc, lod, dX, dY = table.T

    lod_valid = ~np.isnan(lod)
    dxdy_valid = ~np.isnan(dX) & ~np.isnan(dY)
    mjd_last_lod = mjd[lod_valid][-1] if lod_valid.any() else mjd[0]
    mjd_last_dxdy = mjd[dxdy_valid][-1] if dxdy_valid.any() else mjd[0]

    logger.debug(
        "Loaded %d EOP records from %s (MJD %.1f to %.1f)", mjd.size, filepath, mjd[0], mjd[-1]
    )

    dtype = get_dtype()
    columns = {
        "mjd": mjd,
        "pm_x": pm_x,
        "pm_y": pm_y,
        "ut1_utc": ut1_utc,
        "dX": dX,
        "dY": dY,
        "lod": lod,
        "mjd_min": mjd[0],
        "mjd_max": mjd[-1],
        "mjd_last_lod": mjd_last_lod,
        "mjd_last_dxdy": mjd_last_dxdy,
    }
    return EOPData(**{name: jnp.array(col, dtype=dtype) for name, col in columns.items()})


def _default_cache_path() -> Path:
    env = os.environ.get(_CACHE_ENV_VAR)
    root = Path(env) if env is not None else Path.home() / ".cache" / "framejax"
    return root / "eop" / STANDARD_FILENAME


def _needs_refresh(filepath: Path, max_age_days: float) -> bool:
    if not filepath.exists():
        return True
    age_days = (time.time() - filepath.stat().st_mtime) / 86400.0
    return age_days > max_age_days


def download_standard_eop_file(
    filepath: str | Path,
    *,
    url: str = IERS_STANDARD_URL,
    timeout: float = _DEFAULT_TIMEOUT,
) -> Path:
    """Fetch an IERS finals file and install it at *filepath*.

    The body goes to a ``.part`` sibling and must parse as at least one EOP
    record before it replaces *filepath*, so a failed or garbled download
    leaves an existing cached copy untouched.

    Args:
        filepath: Destination path. Parent directories are created.
        url: Source URL. Default: :data:`IERS_STANDARD_URL`.
        timeout: HTTP timeout [s].

    Returns:
        Resolved path of the installed file.

    Raises:
        httpx.HTTPError: On transport failures and non-2xx responses.
        ExternalProviderError: If the body holds no EOP record.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    partial = filepath.with_name(filepath.name + ".part")

    logger.info("Downloading EOP data from %s", url)
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url)
        response.raise_for_status()
    partial.write_text(response.text, encoding="utf-8")

    try:
        parse_standard_file(partial)
    except ValueError as exc:
        partial.unlink()
        raise ExternalProviderError(f"{url} did not return IERS standard-format EOP data") from exc

    partial.replace(filepath)
    logger.info("EOP data written to %s", filepath)
    return filepath.resolve()


def load_cached_eop(
    filepath: str | Path | None = None,
    *,
    max_age_days: float = _DEFAULT_MAX_AGE_DAYS,
) -> EOPData:
    """Load the cached IERS file, refreshing it first when it is too old.

    A missing file, or one last modified more than *max_age_days* ago, is
    downloaded again.  If that download fails and an older copy is on disk,
    the older copy is used and a warning is logged.

    Args:
        filepath: Cache location. Default:
            ``<cache root>/eop/finals.all.iau2000.txt``.
        max_age_days: Age after which the file is refreshed. Default: 7.

    Returns:
        EOPData read from the cache.

    Raises:
        ExternalProviderError: If the download fails and nothing is cached.

    Examples:
        ```python
        from framejax.eop import EOPDataProvider, load_cached_eop
        provider = EOPDataProvider(load_cached_eop(max_age_days=1.0))
        ```
    """
    filepath = _default_cache_path() if filepath is None else Path(filepath)

    if _needs_refresh(filepath, max_age_days):
        try:
            download_standard_eop_file(filepath)
        except (httpx.HTTPError, OSError, ExternalProviderError) as exc:
            if not filepath.exists():
                raise ExternalProviderError(
                    f"Failed to download EOP data and no cached copy exists at {filepath}"
                ) from exc
            logger.warning(
                "Failed to download EOP data; using stale cached file %s.",
                filepath,
                exc_info=True,
            )

    return load_eop_from_file(filepath)
