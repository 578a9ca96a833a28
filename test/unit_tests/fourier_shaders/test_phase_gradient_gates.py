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

from fourier_shaders.fourier_transform_gates import build_fourier_transform_gates
from fourier_shaders.gate import gates_by_serialized_id
from fourier_shaders.gate_operations import phase_gradient
from fourier_shaders.phase_gradient_gates import build_phase_gradient_gates, phase_gradient_matrix
from fourier_shaders.simulation import StateVectorSimulation
from fourier_shaders.validation import assert_acts_like_matrix, max_amplitude_error, random_state


def test_phase_gradient(rng):
    gates = build_phase_gradient_gates()
    assert_acts_like_matrix(
        gates.forward.for_span(3), np.diag(np.exp(1j * np.arange(8) * np.pi / 8)), rng=rng
    )
    assert_acts_like_matrix(
        gates.inverse.for_span(4), np.diag(np.exp(-1j * np.arange(16) * np.pi / 16)), rng=rng
    )


@pytest.mark.parametrize("span", [1, 2, 3])
def test_attached_matrices(span, rng):
    gates = build_phase_gradient_gates()
    forward = gates.forward.for_span(span)
    inverse = gates.inverse.for_span(span)
    assert np.allclose(forward.matrix, phase_gradient_matrix(span, 1))
    assert np.allclose(inverse.matrix, forward.matrix.conj().T)
    assert_acts_like_matrix(forward, forward.matrix, rng=rng)
    assert_acts_like_matrix(inverse, inverse.matrix, rng=rng)


@pytest.mark.parametrize("span", range(1, 17))
def test_matrix_presence(span):
    gates = build_phase_gradient_gates()
    assert (gates.forward.for_span(span).matrix is not None) == (span < 4)
    assert (gates.inverse.for_span(span).matrix is not None) == (span < 4)


def test_serialized_ids():
    gates = build_phase_gradient_gates()
    assert [gate.serialized_id for gate in gates.forward] == [
        f"PhaseGradient{s}" for s in range(1, 17)
    ]
    assert [gate.serialized_id for gate in gates.inverse] == [
        f"PhaseUngradient{s}" for s in range(1, 17)
    ]
    index = gates_by_serialized_id(gates.all + build_fourier_transform_gates().all)
    assert len(index) == 64


def test_gradient_then_ungradient_is_identity(rng):
    gates = build_phase_gradient_gates()
    state = random_state(16, rng)
    simulation = StateVectorSimulation(16)
    simulation.reset(state)
    simulation.apply(gates.forward.for_span(16))
    simulation.apply(gates.inverse.for_span(16))
    assert max_amplitude_error(simulation.state_vector, state) < 1e-6


@pytest.mark.parametrize("factor", [0.37, -2.5])
@pytest.mark.parametrize("span", [1, 2, 8, 16])
def test_phase_gradient_diagonal_law(span, factor, rng):
    row = 1
    simulation = StateVectorSimulation(span + row)
    state = random_state(span + row, rng)
    simulation.reset(state)
    phase_gradient(simulation.context(row), span, factor)

    block = (np.arange(state.size) >> row) & ((1 << span) - 1)
    expected = state * np.exp(1j * np.pi * block * factor / 2**span)
    assert max_amplitude_error(simulation.state_vector, expected) < 1e-6
