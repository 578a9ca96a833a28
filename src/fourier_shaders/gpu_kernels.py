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
CUDA implementations of the elementary kernel passes.

These mirror the CPU kernels in :mod:`fourier_shaders.linalg_utils` and operate on
device-resident buffers owned by a :class:`~fourier_shaders.state_trader.StateTrader`.
All kernels use a grid-stride loop so a single launch covers any state size.
"""

import math

from numba import cuda

from fourier_shaders.linalg_utils import (
    _INV_SQRT2,
    _MAX_BLOCKS_PER_GRID,
    _OPTIMAL_THREADS_PER_BLOCK,
    _TAU,
)


def _get_optimal_config(total_size: int) -> tuple[int, int]:
    """Get thread/block configuration based on problem size."""
    if total_size >= 2**26:
        threads = 128
    elif total_size >= 2**22:
        threads = 256
    elif total_size >= 2**18:
        threads = 512
    else:
        threads = _OPTIMAL_THREADS_PER_BLOCK

    blocks = min((total_size + threads - 1) // threads, _MAX_BLOCKS_PER_GRID)
    return max(blocks, 1), threads


def launch_controlled_phase_gradient(state, row: int, span: int, factor: float, out) -> None:
    blocks, threads = _get_optimal_config(state.size)
    scale = factor * _TAU / (1 << span)
    _controlled_phase_gradient_kernel[blocks, threads](
        state, out, row, (1 << span) - 1, span - 1, scale, state.size
    )


def launch_phase_gradient(state, row: int, span: int, factor: float, out) -> None:
    blocks, threads = _get_optimal_config(state.size)
    scale = factor * math.pi / (1 << span)
    _phase_gradient_kernel[blocks, threads](state, out, row, (1 << span) - 1, scale, state.size)


def launch_reverse_bits(state, row: int, span: int, out) -> None:
    blocks, threads = _get_optimal_config(state.size)
    _reverse_bits_kernel[blocks, threads](state, out, row, span, state.size)


def launch_hadamard(state, row: int, out) -> None:
    half_size = state.size >> 1
    blocks, threads = _get_optimal_config(half_size)
    _hadamard_kernel[blocks, threads](state, out, row, (1 << row) - 1, half_size, _INV_SQRT2)


# =============================================================================
# CUDA Kernels
# =============================================================================


@cuda.jit(fastmath=True)
def _controlled_phase_gradient_kernel(  # pragma: no cover
    state_flat, out_flat, row, block_mask, hold_shift, scale, total_size
):
    """Phase ramp coupling the top qubit of the block to the qubits below it."""
    idx = cuda.grid(1)
    stride = cuda.gridsize(1)

    step_mask = (1 << hold_shift) - 1
    for i in range(idx, total_size, stride):
        block = (i >> row) & block_mask
        hold = block >> hold_shift
        step = block & step_mask
        angle = hold * step * scale
        out_flat[i] = state_flat[i] * complex(math.cos(angle), math.sin(angle))


@cuda.jit(fastmath=True)
def _phase_gradient_kernel(  # pragma: no cover
    state_flat, out_flat, row, block_mask, scale, total_size
):
    idx = cuda.grid(1)
    stride = cuda.gridsize(1)

    for i in range(idx, total_size, stride):
        angle = ((i >> row) & block_mask) * scale
        out_flat[i] = state_flat[i] * complex(math.cos(angle), math.sin(angle))


@cuda.jit(fastmath=True)
def _reverse_bits_kernel(state_flat, out_flat, row, span, total_size):  # pragma: no cover
    """Gathers from the index with mirrored block bits."""
    idx = cuda.grid(1)
    stride = cuda.gridsize(1)

    block_mask = (1 << span) - 1
    for i in range(idx, total_size, stride):
        block = (i >> row) & block_mask
        reversed_block = 0
        for k in range(span):
            reversed_block |= ((block >> k) & 1) << (span - 1 - k)
        out_flat[i] = state_flat[(i & ~(block_mask << row)) | (reversed_block << row)]


@cuda.jit(fastmath=True)
def _hadamard_kernel(state_flat, out_flat, row, mask, half_size, inv_sqrt2):  # pragma: no cover
    """Hadamard gate."""
    idx = cuda.grid(1)
    stride = cuda.gridsize(1)

    target_mask = 1 << row
    for i in range(idx, half_size, stride):
        idx0 = (i & ~mask) << 1 | (i & mask)
        idx1 = idx0 | target_mask

        s0 = state_flat[idx0]
        s1 = state_flat[idx1]

        out_flat[idx0] = inv_sqrt2 * (s0 + s1)
        out_flat[idx1] = inv_sqrt2 * (s0 - s1)
