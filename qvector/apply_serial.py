import numpy as np


def as_amplitudes(values) -> np.ndarray:
    """Pack amplitudes into a contiguous complex128 array (shape (N,))."""
    values = list(values)
    return np.fromiter((complex(v) for v in values), dtype=np.complex128, count=len(values))


def norm2_serial(psi: np.ndarray) -> float:
    """Sum of squared magnitudes, i.e. <psi|psi>."""
    if psi.shape[0] == 0:
        return 0.0
    return float(np.vdot(psi, psi).real)
