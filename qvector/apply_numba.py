import numpy as np
from numba import njit, prange, set_num_threads, get_num_threads

# ---------- low-level kernels (Numba JIT) ----------

@njit(parallel=True, fastmath=True)
def _norm2_kernel(psi):
    total = 0.0
    for i in prange(psi.shape[0]):
        a = psi[i]
        total += a.real*a.real + a.imag*a.imag
    return total

# ---------- user-facing helpers ----------

def set_threads(n: int):
    set_num_threads(n)

def get_threads() -> int:
    return get_num_threads()

def norm2_numba(psi: np.ndarray) -> float:
    return float(_norm2_kernel(psi.astype(np.complex128)))
