import logging
import pathlib as plib

import numpy as np
import scipy.sparse as sp
import torch

log_module = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".npy", ".npz", ".pt")


def set_load_path(path_to_file: str | plib.Path, suffixes: tuple[str, ...] = SUPPORTED_SUFFIXES) -> plib.Path:
    path_to_file = plib.Path(path_to_file).absolute()
    if not path_to_file.is_file():
        err = f"could not find file: {path_to_file}"
        log_module.error(err)
        raise FileNotFoundError(err)
    if path_to_file.suffix not in suffixes:
        err = f"file {path_to_file} not found to be one of {suffixes} files."
        log_module.error(err)
        raise AttributeError(err)
    log_module.info(f"Load file: {path_to_file}")
    return path_to_file


def load_matrix(path_to_file: str | plib.Path):
    """
    Load a matrix from file.

    Args:
        path_to_file: .npy file holding a dense numpy array, .npz file written by scipy.sparse.save_npz
            or .pt file holding a (dense or sparse) torch tensor.

    Returns:
        numpy.ndarray, scipy.sparse array or torch.Tensor, ready to be compared.

    Raises:
        FileNotFoundError: If the file does not exist.
        AttributeError: If the suffix is not supported.
    """
    path_to_file = set_load_path(path_to_file)
    match path_to_file.suffix:
        case ".npy":
            return np.load(path_to_file)
        case ".npz":
            return sp.load_npz(path_to_file)
        case _:
            return torch.load(path_to_file, map_location="cpu")
