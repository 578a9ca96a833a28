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

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

import numpy as np

from fourier_shaders.gate import MATRIX_SPAN_LIMIT, Gate, GateFamily, generate_family
from fourier_shaders.gate_operations import phase_gradient
from fourier_shaders.kernel_dispatcher import MAX_SPAN, MIN_SPAN

if TYPE_CHECKING:
    from fourier_shaders.eval_context import CircuitEvalContext


def phase_gradient_matrix(span: int, factor: float = 1) -> np.ndarray:
    """The diagonal unitary ``D[k] = exp(iπ * k * factor / 2**span)``."""
    size = 1 << span
    return np.diag(np.exp(1j * np.pi * factor * np.arange(size) / size))


def _apply_phase_gradient(context: CircuitEvalContext, span: int) -> None:
    phase_gradient(context, span, +1)


def _apply_phase_ungradient(context: CircuitEvalContext, span: int) -> None:
    phase_gradient(context, span, -1)


def _gradient_gate(span: int) -> Gate:
    return Gate(
        symbol="Grad^½",
        name="Half Turn Phase Gradient Gate",
        blurb="Phases by an amount proportional to the target value, up to a half turn.",
        serialized_id=f"PhaseGradient{span}",
        height=span,
        operation=_apply_phase_gradient,
        matrix=phase_gradient_matrix(span, +1) if span < MATRIX_SPAN_LIMIT else None,
    )


def _ungradient_gate(span: int) -> Gate:
    return Gate(
        symbol="Grad^-½",
        name="Inverse Half Turn Phase Gradient Gate",
        blurb="Counter-phases by an amount proportional to the target value, up to a half turn.",
        serialized_id=f"PhaseUngradient{span}",
        height=span,
        operation=_apply_phase_ungradient,
        matrix=phase_gradient_matrix(span, -1) if span < MATRIX_SPAN_LIMIT else None,
    )


@dataclass(frozen=True)
class PhaseGradientGates:
    forward: GateFamily
    inverse: GateFamily
    all: tuple[Gate, ...]


@lru_cache(maxsize=None)
def build_phase_gradient_gates() -> PhaseGradientGates:
    forward = generate_family(MIN_SPAN, MAX_SPAN, _gradient_gate)
    inverse = generate_family(MIN_SPAN, MAX_SPAN, _ungradient_gate)
    return PhaseGradientGates(forward, inverse, forward.all + inverse.all)
