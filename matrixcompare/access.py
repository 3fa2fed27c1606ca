"""
Element access abstraction.

Any matrix type that should be compared implements one of the two access modes:
dense (random access to single elements) or sparse (enumeration of explicit triplets).
The comparison engine dispatches once per operand on the access mode and never inspects
the underlying storage.
"""
import logging
from abc import ABC, abstractmethod
from enum import Enum, auto

log_module = logging.getLogger(__name__)


class AccessType(Enum):
    """
    Specifies how the elements of a matrix are exposed to the comparison engine.
    """
    DENSE = auto()
    SPARSE = auto()


class DuplicatePolicy(Enum):
    """
    Specifies how repeated (row, col) triplets of a sparse matrix are treated.
    ERROR: a repeated coordinate is a contract violation of the adapter.
    SUM: repeated entries are summed, as for COO matrices in scipy or torch.
    """
    ERROR = auto()
    SUM = auto()


class Side(Enum):
    LEFT = auto()
    RIGHT = auto()


class AccessContractError(RuntimeError):
    """
    Raised when a matrix adapter does not honor the access contract.
    Signals a bug in the adapter, never a mismatch of values.
    """
    def __init__(self, message: str, coord: tuple[int, int], side: Side | None = None):
        self.coord = coord
        self.side = side
        self.reason = message
        super().__init__(self._compose())

    def _compose(self) -> str:
        side = "" if self.side is None else f" ({self.side.name.lower()} operand)"
        return (f"Matrix adapter contract violated{side}: {self.reason} "
                f"Offending coordinate: {self.coord}. "
                f"This indicates a broken matrix adapter, not a mismatch of values.")

    def with_side(self, side: Side) -> "AccessContractError":
        return self.__class__(self.reason, self.coord, side)


class DenseIndexOutOfBoundsError(AccessContractError):
    pass


class SparseEntryOutOfBoundsError(AccessContractError):
    pass


class DuplicateSparseEntryError(AccessContractError):
    pass


class Matrix(ABC):
    """
    Main interface for access to the shape and elements of a matrix.
    rows and cols must stay constant while a comparison is running.
    """
    @property
    @abstractmethod
    def rows(self) -> int:
        raise NotImplementedError

    @property
    @abstractmethod
    def cols(self) -> int:
        raise NotImplementedError

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    @abstractmethod
    def access_type(self) -> AccessType:
        raise NotImplementedError

    def __repr__(self):
        return f"{self.__class__.__name__}(rows={self.rows}, cols={self.cols})"


class DenseAccess(Matrix, ABC):
    """
    Random access to every element of the matrix.
    fetch_single is expected to be O(1) amortized for all in-range coordinates.
    """
    @property
    def access_type(self) -> AccessType:
        return AccessType.DENSE

    @abstractmethod
    def fetch_single(self, row: int, col: int):
        raise NotImplementedError

    def to_numpy(self):
        """
        Optionally expose the whole matrix as a 2d numpy array.
        The engine uses it for a vectorized dense - dense comparison. Return None if not available.
        """
        return None

    def check_index(self, row: int, col: int):
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            err = f"Dense lookup out of bounds for matrix of shape {self.shape}."
            log_module.error(err)
            raise DenseIndexOutOfBoundsError(err, (row, col))


class SparseAccess(Matrix, ABC):
    """
    Access to the explicitly stored entries of a sparse matrix.
    Every coordinate not enumerated by fetch_triplets is implicitly zero.
    """
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR

    @property
    def access_type(self) -> AccessType:
        return AccessType.SPARSE

    @abstractmethod
    def fetch_triplets(self) -> list[tuple[int, int, object]]:
        """
        Retrieve the (row, col, value) triplets of the explicit entries, in any order.
        Each call returns a fresh sequence.
        """
        raise NotImplementedError

    def nnz(self) -> int:
        return len(self.fetch_triplets())

    def zero(self):
        # implicit value of entries not stored
        return 0


def build_triplet_map(matrix: SparseAccess) -> dict[tuple[int, int], object]:
    """
    Buffer the triplets of a sparse matrix into a coordinate map, validating the contract.

    Runs in O(nnz). Coordinates outside the matrix shape raise SparseEntryOutOfBoundsError.
    Repeated coordinates raise DuplicateSparseEntryError, unless the matrix declares
    DuplicatePolicy.SUM in which case the values are added up.
    """
    rows, cols = matrix.rows, matrix.cols
    summing = matrix.duplicate_policy == DuplicatePolicy.SUM
    entries = {}
    for row, col, value in matrix.fetch_triplets():
        row, col = int(row), int(col)
        if not (0 <= row < rows and 0 <= col < cols):
            err = f"Sparse entry out of bounds for matrix of shape {(rows, cols)}."
            log_module.error(err)
            raise SparseEntryOutOfBoundsError(err, (row, col))
        coord = (row, col)
        if coord in entries:
            if not summing:
                err = "Duplicate sparse entry."
                log_module.error(err)
                raise DuplicateSparseEntryError(err, coord)
            entries[coord] = entries[coord] + value
        else:
            entries[coord] = value
    return entries
