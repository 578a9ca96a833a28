# Copyright Amazon.com Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License"). You
# may not use this file except in compliance with the License. A copy of
# the License is located at
#
#     http://aws.amazon.com/apache2.0/
#
# or in the "license" file accompanying this file. This file is
# distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF
# ANY KIND, either express or implied. See the License for the specific
# language governing permissions and limitations under the License.

"""
CPU implementations of the elementary kernel passes.

Every kernel reads a flat amplitude vector and writes a second, preallocated one.
Qubit row ``k`` is bit ``k`` of the flat index, and a kernel of span ``s`` at row ``r``
acts on the block index ``(i >> r) & (2**s - 1)``.

Each kernel has a NumPy implementation for small states and a Numba implementation
for large ones; :class:`~fourier_shaders.kernel_dispatcher.KernelDispatcher` picks
between them using ``_QUBIT_THRESHOLD``.
"""

import numba as nb
import numpy as np
from numba import cuda

nb.config.NUMBA_OPT = 3
nb.config.THREADING_LAYER = "workqueue"
nb.config.CAPTURED_ERRORS = "new_style"

_QUBIT_THRESHOLD = nb.int32(10)

_GPU_AVAILABLE = cuda.is_available()
_MAX_BLOCKS_PER_GRID = 65535
_OPTIMAL_THREADS_PER_BLOCK = 256

_TAU = 2.0 * np.pi
_INV_SQRT2 = 1.0 / np.sqrt(2.0)


def _block_indices(size: int, row: int, span: int) -> np.ndarray:
    indices = np.arange(size, dtype=np.int64)
    return (indices >> row) & ((1 << span) - 1)


def _apply_controlled_phase_gradient_small(
    state: np.ndarray, row: int, span: int, factor: float, out: np.ndarray
) -> np.ndarray:
    """Applies the controlled phase ramp using vectorized index arithmetic."""
    block = _block_indices(state.size, row, span)
    hold = block >> (span - 1)
    step = block & ((1 << (span - 1)) - 1)
    angle = (hold * step) * (factor * _TAU / (1 << span))
    np.multiply(state, np.exp(1j * angle), out=out)
    return out


@nb.njit(parallel=True, fastmath=True, cache=True, nogil=True)
def _apply_controlled_phase_gradient_large(  # pragma: no cover
    state: np.ndarray, row: int, span: int, factor: float, out: np.ndarray
) -> np.ndarray:
    """Applies the controlled phase ramp one amplitude at a time."""
    block_mask = (np.int64(1) << span) - 1
    step_mask = (np.int64(1) << (span - 1)) - 1
    scale = factor * _TAU / (np.int64(1) << span)

    for j in nb.prange(state.size):
        i = np.int64(j)
        block = (i >> row) & block_mask
        hold = block >> (span - 1)
        step = block & step_mask
        angle = hold * step * scale
        out[i] = state[i] * complex(np.cos(angle), np.sin(angle))
    return out


def _apply_phase_gradient_small(
    state: np.ndarray, row: int, span: int, factor: float, out: np.ndarray
) -> np.ndarray:
    """Multiplies each amplitude by a phase proportional to its block index."""
    block = _block_indices(state.size, row, span)
    angle = block * (factor * np.pi / (1 << span))
    np.multiply(state, np.exp(1j * angle), out=out)
    return out


@nb.njit(parallel=True, fastmath=True, cache=True, nogil=True)
def _apply_phase_gradient_large(  # pragma: no cover
    state: np.ndarray, row: int, span: int, factor: float, out: np.ndarray
) -> np.ndarray:
    block_mask = (np.int64(1) << span) - 1
    scale = factor * np.pi / (np.int64(1) << span)

    for j in nb.prange(state.size):
        i = np.int64(j)
        angle = ((i >> row) & block_mask) * scale
        out[i] = state[i] * complex(np.cos(angle), np.sin(angle))
    return out


def _apply_reverse_bits_small(
    state: np.ndarray, row: int, span: int, out: np.ndarray
) -> np.ndarray:
    """Gathers each amplitude from the index whose block bits are mirrored."""
    indices = np.arange(state.size, dtype=np.int64)
    block = (indices >> row) & ((1 << span) - 1)
    reversed_block = np.zeros_like(block)
    for k in range(span):
        reversed_block |= ((block >> k) & 1) << (span - 1 - k)
    source = (indices & ~(((1 << span) - 1) << row)) | (reversed_block << row)
    np.take(state, source, out=out)
    return out


@nb.njit(parallel=True, fastmath=True, cache=True, nogil=True)
def _apply_reverse_bits_large(  # pragma: no cover
    state: np.ndarray, row: int, span: int, out: np.ndarray
) -> np.ndarray:
    block_mask = (np.int64(1) << span) - 1
    clear_mask = ~(block_mask << row)

    for j in nb.prange(state.size):
        i = np.int64(j)
        block = (i >> row) & block_mask
        reversed_block = np.int64(0)
        for k in range(span):
            reversed_block |= ((block >> k) & 1) << (span - 1 - k)
        out[i] = state[(i & clear_mask) | (reversed_block << row)]
    return out


def _apply_hadamard_small(state: np.ndarray, row: int, out: np.ndarray) -> np.ndarray:
    """Applies a Hadamard using array slicing."""
    after_size = 1 << row
    before_size = state.size // (2 * after_size)

    state_reshaped = state.reshape(before_size, 2, after_size)
    out_reshaped = out.reshape(before_size, 2, after_size)

    state_0 = state_reshaped[:, 0, :]
    state_1 = state_reshaped[:, 1, :]

    out_reshaped[:, 0, :] = _INV_SQRT2 * (state_0 + state_1)
    out_reshaped[:, 1, :] = _INV_SQRT2 * (state_0 - state_1)
    return out


@nb.njit(parallel=True, fastmath=True, cache=True, nogil=True)
def _apply_hadamard_large(  # pragma: no cover
    state: np.ndarray, row: int, out: np.ndarray
) -> np.ndarray:
    """Applies a Hadamard using bit masking."""
    mask = (np.int64(1) << row) - 1
    target_mask = np.int64(1) << row
    half_size = state.size >> 1

    for j in nb.prange(half_size):
        i = np.int64(j)
        idx0 = (i & ~mask) << 1 | (i & mask)
        idx1 = idx0 | target_mask

        s0, s1 = state[idx0], state[idx1]

        out[idx0] = _INV_SQRT2 * (s0 + s1)
        out[idx1] = _INV_SQRT2 * (s0 - s1)
    return out
