"""
Compressed NPZ archives of compiled problems.

A compiled handle is stored as flat arrays so it can be reloaded without
the source document:

    row_names, row_has_name, row_types, row_lower, row_upper
    col_names, col_has_name, col_kinds, col_types, col_lower, col_upper, obj_coef
    mat_rows, mat_cols, mat_values       (1-based, row-major)
    name, direction
"""

from pathlib import Path
from typing import Union

import numpy as np

from ..config import ARCHIVE_SUFFIX
from .problem import Problem


def save_problem(problem: Problem, path: Union[str, Path],
                 overwrite: bool = False) -> Path:
    """
    Write `problem` to a compressed NPZ archive.

    Parameters
    ----------
    problem : Problem
        Compiled handle.
    path : str or Path
        Destination; the .npz suffix is added if missing.
    overwrite : bool
        If True, replace an existing file.

    Returns
    -------
    Path
        Path of the written archive.

    Raises
    ------
    FileExistsError
        If the archive exists and overwrite=False.
    """
    path = Path(path)
    if path.suffix != ARCHIVE_SUFFIX:
        path = path.with_suffix(ARCHIVE_SUFFIX)
    if path.exists() and not overwrite:
        raise FileExistsError(f"Archive already exists: {path}")

    rows = range(1, problem.n_rows + 1)
    cols = range(1, problem.n_cols + 1)
    row_bounds = [problem.get_row_bound(i) for i in rows]
    col_bounds = [problem.get_col_bound(j) for j in cols]
    entries = list(problem.matrix_entries())

    np.savez_compressed(
        path,
        name=np.array(problem.name or ""),
        has_name=np.bool_(problem.name is not None),
        direction=np.int32(problem.direction),
        row_names=np.array([problem.get_row_name(i) or "" for i in rows], dtype=str),
        row_has_name=np.array([problem.get_row_name(i) is not None for i in rows], dtype=bool),
        row_types=np.array([b.type for b in row_bounds], dtype=np.int32),
        row_lower=np.array([b.lower for b in row_bounds], dtype=np.float64),
        row_upper=np.array([b.upper for b in row_bounds], dtype=np.float64),
        col_names=np.array([problem.get_col_name(j) or "" for j in cols], dtype=str),
        col_has_name=np.array([problem.get_col_name(j) is not None for j in cols], dtype=bool),
        col_kinds=np.array([problem.get_col_kind(j) for j in cols], dtype=np.int32),
        col_types=np.array([b.type for b in col_bounds], dtype=np.int32),
        col_lower=np.array([b.lower for b in col_bounds], dtype=np.float64),
        col_upper=np.array([b.upper for b in col_bounds], dtype=np.float64),
        obj_coef=np.array([problem.get_obj_coef(j) for j in cols], dtype=np.float64),
        mat_rows=np.array([i for i, _, _ in entries], dtype=np.int32),
        mat_cols=np.array([j for _, j, _ in entries], dtype=np.int32),
        mat_values=np.array([v for _, _, v in entries], dtype=np.float64),
    )
    return path


def load_problem(path: Union[str, Path]) -> Problem:
    """
    Rebuild a Problem from an archive written by `save_problem`.

    Raises
    ------
    FileNotFoundError
        If the archive does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Archive not found: {path}")

    with np.load(path) as data:
        problem = Problem(str(data["name"]) if bool(data["has_name"]) else None)
        problem.set_obj_dir(int(data["direction"]))

        n_rows = len(data["row_types"])
        if n_rows > 0:
            problem.add_rows(n_rows)
        for k in range(n_rows):
            i = k + 1
            problem.set_row_name(
                i, str(data["row_names"][k]) if bool(data["row_has_name"][k]) else None
            )
            problem.set_row_bnds(i, int(data["row_types"][k]),
                                 float(data["row_lower"][k]), float(data["row_upper"][k]))

        n_cols = len(data["col_kinds"])
        if n_cols > 0:
            problem.add_cols(n_cols)
        for k in range(n_cols):
            j = k + 1
            problem.set_col_name(
                j, str(data["col_names"][k]) if bool(data["col_has_name"][k]) else None
            )
            problem.set_col_kind(j, int(data["col_kinds"][k]))
            problem.set_col_bnds(j, int(data["col_types"][k]),
                                 float(data["col_lower"][k]), float(data["col_upper"][k]))
            problem.set_obj_coef(j, float(data["obj_coef"][k]))

        ne = len(data["mat_values"])
        problem.load_matrix(
            ne,
            [0] + data["mat_rows"].tolist(),
            [0] + data["mat_cols"].tolist(),
            [0.0] + data["mat_values"].tolist(),
        )

    return problem
