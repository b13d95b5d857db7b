"""bifiltered_ph.config

Centralised configuration + provenance helpers.
"""

from __future__ import annotations

from typing import Any, Dict


def default_config() -> Dict[str, Any]:
    """Return a *copy* of the default configuration.

    You can override any key in the returned dict.
    """
    return {
        # --- homology ---
        "hom_dim": 1,                   # dimension indexes cover hom_dim-1, hom_dim, hom_dim+1

        # --- Vietoris-Rips construction ---
        "max_dimension": 2,             # simplex dimension cap; use >= hom_dim + 1
        "max_edge_length": float("inf"),
        "spatial_dim": None,            # None = use every coordinate of each point

        # --- output ---
        "verbose": False,
    }


def get_library_versions() -> Dict[str, str]:
    """Collect versions of key libraries for provenance."""
    versions: Dict[str, str] = {}

    def _add(pkg: str) -> None:
        import importlib.metadata as md

        try:
            versions[pkg] = md.version(pkg)
        except md.PackageNotFoundError:
            pass

    for pkg in ["numpy", "scipy", "gudhi"]:
        _add(pkg)
    return versions
