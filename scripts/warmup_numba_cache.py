import sys

import numpy as np


def warmup_linalg_utils():
    """Pre-compile linalg_utils JIT kernels."""
    print("Warming up Numba JIT cache for fourier-shader-simulator...")

    try:
        from fourier_shaders.linalg_utils import (
            _apply_controlled_phase_gradient_large,
            _apply_hadamard_large,
            _apply_phase_gradient_large,
            _apply_reverse_bits_large,
        )

        n_qubits = 12
        state = np.zeros(2**n_qubits, dtype=complex)
        state[0] = 1.0 + 0.0j
        out = np.zeros_like(state)

        _apply_controlled_phase_gradient_large(state, 0, 4, 1.0, out)
        _apply_phase_gradient_large(state, 0, 4, 1.0, out)
        _apply_reverse_bits_large(state, 0, 4, out)
        _apply_hadamard_large(state, 0, out)

        print("✓ Numba JIT cache warmed up successfully")
        return True

    except Exception as e:
        print(f"Warning: Could not warm up Numba cache: {e}")
        print("This is not critical - kernels will compile on first use")
        return False


if __name__ == "__main__":
    success = warmup_linalg_utils()
    sys.exit(0 if success else 0)
