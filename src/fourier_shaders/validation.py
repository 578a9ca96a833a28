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
Checks that kernel decompositions act like dense matrices.

The dense reference contracts the matrix into the state tensor, so it is only practical
for small blocks; it exists to validate the passes, never to replace them.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import opt_einsum

from fourier_shaders.operation import Operation
from fourier_shaders.simulation import StateVectorSimulation


def random_state(qubit_count: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """A normalized state with random complex amplitudes."""
    rng = rng or np.random.default_rng()
    size = 2**qubit_count
    state = rng.normal(size=size) + 1j * rng.normal(size=size)
    return state / np.linalg.norm(state)


def apply_matrix(state: np.ndarray, matrix: np.ndarray, row: int) -> np.ndarray:
    """Multiplies the matrix into the block of rows starting at `row`.

    Args:
        state (np.ndarray): Flat amplitudes, qubit row ``k`` as bit ``k`` of the index.
        matrix (np.ndarray): A ``2**span`` square matrix over the block value.
        row (int): The first qubit row of the block.

    Returns:
        np.ndarray: The new flat amplitudes.
    """
    qubit_count = int(state.size).bit_length() - 1
    span = int(matrix.shape[0]).bit_length() - 1
    if row < 0 or row + span > qubit_count:
        raise ValueError(f"Block of {span} rows at row {row} does not fit {qubit_count} qubits")

    # Tensor axis a holds row qubit_count - 1 - a, so the block's axes are contiguous
    # with its top row first, matching the matrix reshape.
    first_axis = qubit_count - row - span
    covariant = [*range(first_axis, first_axis + span)]
    contravariant = [*range(qubit_count, qubit_count + span)]
    output = [*range(qubit_count)]
    output[first_axis : first_axis + span] = contravariant

    product = opt_einsum.contract(
        state.reshape([2] * qubit_count),
        [*range(qubit_count)],
        np.reshape(matrix, [2] * (2 * span)),
        contravariant + covariant,
        output,
        optimize="auto",
    )
    return product.reshape(-1)


def max_amplitude_error(actual: np.ndarray, expected: np.ndarray) -> float:
    return float(np.max(np.abs(np.asarray(actual) - np.asarray(expected))))


def assert_acts_like_matrix(
    operation: Operation,
    matrix: np.ndarray,
    qubit_count: Optional[int] = None,
    row: Optional[int] = None,
    atol: float = 1e-6,
    rng: Optional[np.random.Generator] = None,
) -> None:
    """Applies the operation to a random state and compares against the dense matrix.

    By default the operation is placed at row 1 of a register with one spare qubit on
    each side, so the passes must leave the surrounding qubits alone.

    Raises:
        AssertionError: If any amplitude differs by more than `atol`.
    """
    row = 1 if row is None else row
    qubit_count = qubit_count or row + operation.height + 1
    state = random_state(qubit_count, rng)

    simulation = StateVectorSimulation(qubit_count)
    simulation.reset(state)
    simulation.apply(operation, row)

    expected = apply_matrix(state, matrix, row)
    error = max_amplitude_error(simulation.state_vector, expected)
    if error > atol:
        raise AssertionError(
            f"{operation!r} differs from the matrix by {error} (tolerance {atol})"
        )
