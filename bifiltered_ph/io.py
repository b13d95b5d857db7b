"""bifiltered_ph.io

JSON serialisation of exported matrices.

Results of `compute_bifiltration_matrices` hold scipy sparse matrices and
numpy arrays. A Z/2 boundary or map matrix is written as its coordinate
list {"shape", "rows", "cols"}, every stored entry being 1. Dense index
matrices become nested lists. `load_matrices` reverses both.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import json

import numpy as np
from scipy import sparse
from scipy.sparse import csc_matrix

from .boundary import to_sparse


def matrix_to_dict(mat: Any) -> Dict[str, Any]:
    """Coordinate form of a 0/1 sparse matrix, entries sorted column-major."""
    coo = sparse.coo_matrix(mat)
    order = np.lexsort((coo.row, coo.col))
    return {
        "shape": [int(coo.shape[0]), int(coo.shape[1])],
        "rows": coo.row[order].astype(int).tolist(),
        "cols": coo.col[order].astype(int).tolist(),
    }


def dict_to_matrix(payload: Dict[str, Any]) -> csc_matrix:
    rows, cols = payload["shape"]
    return to_sparse((list(payload["rows"]), list(payload["cols"])), (rows, cols))


def _encode(obj: Any) -> Any:
    if isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj
    if isinstance(obj, dict):
        return {str(k): _encode(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_encode(v) for v in obj]
    if sparse.issparse(obj):
        return matrix_to_dict(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    raise TypeError(f"cannot serialise {type(obj).__name__} to JSON")


def _decode_direct_sum(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "boundary": dict_to_matrix(payload["boundary"]),
        "map": dict_to_matrix(payload["map"]),
        "index": np.asarray(payload["index"], dtype=np.int64),
    }


def matrices_to_json(result: Dict[str, Any], indent: int = 2) -> str:
    """Convert a result dict to a JSON string."""
    return json.dumps(_encode(result), indent=indent, ensure_ascii=False)


def save_matrices(result: Dict[str, Any], path: str | Path, indent: int = 2) -> Path:
    """Save a result dict to JSON on disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(matrices_to_json(result, indent=indent), encoding="utf-8")
    return path


def load_matrices(path: str | Path) -> Dict[str, Any]:
    """Read a file written by `save_matrices`.

    Sparse matrices come back as `csc_matrix` (uint8) and index matrices as
    int64 arrays. Per-dimension tables are keyed by int again.
    """
    result = json.loads(Path(path).read_text(encoding="utf-8"))
    if "boundary" in result:
        result["boundary"] = {int(d): dict_to_matrix(m) for d, m in result["boundary"].items()}
    if "index" in result:
        result["index"] = {int(d): np.asarray(m, dtype=np.int64) for d, m in result["index"].items()}
    for key in ("merge", "split"):
        if key in result:
            result[key] = _decode_direct_sum(result[key])
    return result
