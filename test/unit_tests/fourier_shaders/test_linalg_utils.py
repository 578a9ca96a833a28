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

from fourier_shaders.linalg_utils import (
    _apply_controlled_phase_gradient_large,
    _apply_controlled_phase_gradient_small,
    _apply_hadamard_large,
    _apply_hadamard_small,
    _apply_phase_gradient_large,
    _apply_phase_gradient_small,
    _apply_reverse_bits_large,
    _apply_reverse_bits_small,
)
from fourier_shaders.validation import apply_matrix, random_state


def controlled_phase_gradient_matrix(span, factor):
    size = 1 << span
    half = size >> 1
    k = np.arange(size)
    return np.diag(np.exp(2j * np.pi * (k // half) * (k % half) * factor / size))


def reverse_bits_matrix(span):
    size = 1 << span
    matrix = np.zeros((size, size), dtype=complex)
    for k in range(size):
        reversed_k = int(format(k, f"0{span}b")[::-1], 2)
        matrix[reversed_k, k] = 1
    return matrix


def hadamard_matrix():
    return np.array([[1, 1], [1, -1]], dtype=complex) / np.sqrt(2)


block_testdata = [
    (1, 0, 1, 1),
    (3, 0, 3, 1),
    (5, 1, 3, -1),
    (6, 2, 4, 0.5),
    (7, 0, 7, -2),
]


@pytest.mark.parametrize(
    "implementation",
    [_apply_controlled_phase_gradient_small, _apply_controlled_phase_gradient_large],
)
@pytest.mark.parametrize("qubit_count, row, span, factor", block_testdata)
def test_controlled_phase_gradient(implementation, qubit_count, row, span, factor, rng):
    state = random_state(qubit_count, rng)
    out = np.zeros_like(state)
    implementation(state, row, span, factor, out)
    expected = apply_matrix(state, controlled_phase_gradient_matrix(span, factor), row)
    assert np.allclose(out, expected, atol=1e-7)


@pytest.mark.parametrize(
    "implementation",
    [_apply_controlled_phase_gradient_small, _apply_controlled_phase_gradient_large],
)
def test_controlled_phase_gradient_span_one_is_identity(implementation, rng):
    state = random_state(3, rng)
    out = np.zeros_like(state)
    implementation(state, 1, 1, 1.0, out)
    assert np.allclose(out, state)


@pytest.mark.parametrize(
    "implementation", [_apply_phase_gradient_small, _apply_phase_gradient_large]
)
@pytest.mark.parametrize(
    "span, factor, expected_diagonal",
    [
        (3, 1, np.exp(1j * np.arange(8) * np.pi / 8)),
        (4, -1, np.exp(-1j * np.arange(16) * np.pi / 16)),
    ],
)
def test_phase_gradient(implementation, span, factor, expected_diagonal, rng):
    state = random_state(span + 1, rng)
    out = np.zeros_like(state)
    implementation(state, 1, span, factor, out)
    expected = apply_matrix(state, np.diag(expected_diagonal), 1)
    assert np.allclose(out, expected, atol=1e-7)


@pytest.mark.parametrize("implementation", [_apply_reverse_bits_small, _apply_reverse_bits_large])
@pytest.mark.parametrize("qubit_count, row, span", [(2, 0, 2), (4, 1, 3), (6, 2, 4), (5, 0, 5)])
def test_reverse_bits(implementation, qubit_count, row, span, rng):
    state = random_state(qubit_count, rng)
    out = np.zeros_like(state)
    implementation(state, row, span, out)
    assert np.array_equal(out, apply_matrix(state, reverse_bits_matrix(span), row))


@pytest.mark.parametrize("implementation", [_apply_reverse_bits_small, _apply_reverse_bits_large])
@pytest.mark.parametrize("span", [1, 2, 5, 8])
def test_reverse_bits_twice_restores_order(implementation, span, rng):
    state = random_state(span + 2, rng)
    once = np.zeros_like(state)
    twice = np.zeros_like(state)
    implementation(state, 1, span, once)
    implementation(once, 1, span, twice)
    assert np.array_equal(twice, state)


def test_reverse_bits_basis_state():
    state = np.zeros(8, dtype=complex)
    state[0b001] = 1
    out = np.zeros_like(state)
    _apply_reverse_bits_small(state, 0, 3, out)
    assert out[0b100] == 1


@pytest.mark.parametrize("implementation", [_apply_hadamard_small, _apply_hadamard_large])
@pytest.mark.parametrize("qubit_count, row", [(1, 0), (3, 0), (3, 2), (6, 3)])
def test_hadamard(implementation, qubit_count, row, rng):
    state = random_state(qubit_count, rng)
    out = np.zeros_like(state)
    implementation(state, row, out)
    assert np.allclose(out, apply_matrix(state, hadamard_matrix(), row))


@pytest.mark.parametrize(
    "small, large, args",
    [
        (
            _apply_controlled_phase_gradient_small,
            _apply_controlled_phase_gradient_large,
            (2, 5, 1.0),
        ),
        (_apply_phase_gradient_small, _apply_phase_gradient_large, (1, 6, -1.0)),
        (_apply_reverse_bits_small, _apply_reverse_bits_large, (3, 4)),
        (_apply_hadamard_small, _apply_hadamard_large, (7,)),
    ],
)
def test_small_and_large_agree(small, large, args, rng):
    state = random_state(8, rng)
    small_out = np.zeros_like(state)
    large_out = np.zeros_like(state)
    small(state, *args, small_out)
    large(state, *args, large_out)
    assert np.allclose(small_out, large_out, atol=1e-7)
