"""
Adapters exposing numpy, scipy.sparse and torch matrices through the element access abstraction.
"""
import logging
from functools import cached_property

import numpy as np
import scipy.sparse as sp
import torch

from matrixcompare.access import Matrix, DenseAccess, SparseAccess, DuplicatePolicy

log_module = logging.getLogger(__name__)


def _tensor_values(tensor: torch.Tensor):
    # numpy values keep the element precision, e.g. float32 entries stay np.float32 for ULP distances.
    # numpy has no bfloat16, such tensors fall back to python scalars
    tensor = tensor.cpu().resolve_conj()
    if tensor.dtype == torch.bfloat16:
        return tensor.tolist()
    values = tensor.numpy()
    return values[()] if values.ndim == 0 else values


def _check_2d(shape: tuple, type_name: str):
    if len(shape) != 2:
        err = f"Only 2d matrices can be compared, but found {type_name} with shape {tuple(shape)}."
        log_module.error(err)
        raise ValueError(err)


class NumpyDenseMatrix(DenseAccess):
    """
    Dense access to a 2d numpy array (or anything numpy.asarray accepts, e.g. nested lists).
    """
    def __init__(self, data: np.ndarray | list):
        data = np.asarray(data)
        _check_2d(data.shape, "array")
        self._data: np.ndarray = data

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    def fetch_single(self, row: int, col: int):
        self.check_index(row, col)
        return self._data[row, col]

    def to_numpy(self) -> np.ndarray:
        return self._data


class TorchDenseMatrix(DenseAccess):
    def __init__(self, tensor: torch.Tensor):
        if tensor.layout != torch.strided:
            err = f"TorchDenseMatrix requires a strided tensor, got layout {tensor.layout}."
            log_module.error(err)
            raise ValueError(err)
        _check_2d(tensor.shape, "tensor")
        self._tensor: torch.Tensor = tensor.detach()

    @property
    def rows(self) -> int:
        return self._tensor.shape[0]

    @property
    def cols(self) -> int:
        return self._tensor.shape[1]

    def fetch_single(self, row: int, col: int):
        self.check_index(row, col)
        return _tensor_values(self._tensor[row, col])

    def to_numpy(self) -> np.ndarray | None:
        if self._tensor.dtype == torch.bfloat16:
            # numpy has no bfloat16, fall back to element access
            return None
        return self._tensor.cpu().resolve_conj().numpy()


class ScipySparseMatrix(SparseAccess):
    """
    Sparse access to any scipy.sparse matrix or array.
    The input is converted to COO format with duplicates summed on first element access,
    hence the matrix keeps the scipy semantics of repeated entries.
    """
    duplicate_policy = DuplicatePolicy.SUM

    def __init__(self, matrix):
        if not sp.issparse(matrix):
            err = f"ScipySparseMatrix requires a scipy.sparse input, got {type(matrix)}."
            log_module.error(err)
            raise TypeError(err)
        _check_2d(matrix.shape, "sparse matrix")
        self._matrix = matrix

    @cached_property
    def _coo(self):
        coo = sp.coo_array(self._matrix, copy=True)
        coo.sum_duplicates()
        return coo

    @property
    def rows(self) -> int:
        return self._matrix.shape[0]

    @property
    def cols(self) -> int:
        return self._matrix.shape[1]

    def nnz(self) -> int:
        return self._coo.nnz

    def fetch_triplets(self) -> list[tuple[int, int, object]]:
        return list(zip(self._coo.row.tolist(), self._coo.col.tolist(), self._coo.data))

    def zero(self):
        return self._coo.dtype.type(0)


class TorchSparseMatrix(SparseAccess):
    """
    Sparse access to a torch sparse tensor (COO, CSR, CSC, ...). Tensors are coalesced on first element access.
    """
    duplicate_policy = DuplicatePolicy.SUM

    def __init__(self, tensor: torch.Tensor):
        if tensor.layout == torch.strided:
            err = "TorchSparseMatrix requires a sparse tensor, got a strided (dense) tensor."
            log_module.error(err)
            raise ValueError(err)
        _check_2d(tensor.shape, "sparse tensor")
        self._input: torch.Tensor = tensor.detach()

    @cached_property
    def _tensor(self) -> torch.Tensor:
        tensor = self._input.cpu()
        if tensor.layout != torch.sparse_coo:
            tensor = tensor.to_sparse_coo()
        return tensor.coalesce()

    @property
    def rows(self) -> int:
        return self._input.shape[0]

    @property
    def cols(self) -> int:
        return self._input.shape[1]

    def nnz(self) -> int:
        return self._tensor.values().shape[0]

    def fetch_triplets(self) -> list[tuple[int, int, object]]:
        indices = self._tensor.indices()
        return list(zip(indices[0].tolist(), indices[1].tolist(), _tensor_values(self._tensor.values())))

    def zero(self):
        return _tensor_values(torch.zeros((), dtype=self._input.dtype))


def as_matrix(obj) -> Matrix:
    """
    Wrap an object into the matching matrix adapter.

    Matrix instances are returned as they are. scipy.sparse inputs and sparse torch tensors get
    sparse access, numpy arrays, strided torch tensors and nested sequences get dense access.
    :param obj: matrix like object
    :return: Matrix exposing dense or sparse access
    """
    if isinstance(obj, Matrix):
        return obj
    if sp.issparse(obj):
        return ScipySparseMatrix(obj)
    if torch.is_tensor(obj):
        if obj.layout == torch.strided:
            return TorchDenseMatrix(obj)
        return TorchSparseMatrix(obj)
    if isinstance(obj, (np.ndarray, list, tuple)):
        return NumpyDenseMatrix(obj)
    err = f"Cannot compare object of type {type(obj)}, provide a Matrix adapter."
    log_module.error(err)
    raise TypeError(err)
