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

import numpy as np
import pytest

from fourier_shaders.gate_operations import Hadamard
from fourier_shaders.validation import (
    apply_matrix,
    assert_acts_like_matrix,
    max_amplitude_error,
    random_state,
)

X = np.array([[0, 1], [1, 0]], dtype=complex)


def test_random_state_is_normalized(rng):
    state = random_state(4, rng)
    assert state.shape == (16,)
    assert np.isclose(np.linalg.norm(state), 1)


@pytest.mark.parametrize("row, index", [(0, 0b001), (1, 0b010), (2, 0b100)])
def test_apply_matrix_targets_row(row, index):
    state = np.zeros(8, dtype=complex)
    state[0] = 1
    assert apply_matrix(state, X, row)[index] == 1


def test_apply_matrix_block_order():
    # The block value's low bit sits on the block's first row.
    state = np.zeros(8, dtype=complex)
    state[0b010] = 1
    matrix = np.zeros((4, 4), dtype=complex)
    matrix[0b10, 0b01] = 1
    assert apply_matrix(state, matrix, 1)[0b100] == 1


def test_apply_matrix_must_fit():
    with pytest.raises(ValueError):
        apply_matrix(np.zeros(4, dtype=complex), np.eye(4), 1)


def test_assert_acts_like_matrix(rng):
    assert_acts_like_matrix(Hadamard(), np.array([[1, 1], [1, -1]]) / np.sqrt(2), rng=rng)
    with pytest.raises(AssertionError):
        assert_acts_like_matrix(Hadamard(), X, rng=rng)


def test_max_amplitude_error():
    assert max_amplitude_error([1, 0], [1, 0.5j]) == 0.5
