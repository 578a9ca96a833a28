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
Quantum Fourier transform gates, spans 1 through 16.

The transform is never applied as a dense matrix. Instead it is decomposed into one
bit reversal followed by alternating controlled phase ramps and Hadamards, so a gate of
span ``s`` costs ``2s`` passes over the state. Gates of span below 4 also carry the
analytic matrix, for validation and display.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

import numpy as np

from fourier_shaders.gate import MATRIX_SPAN_LIMIT, Gate, GateFamily, generate_family
from fourier_shaders.gate_operations import (
    Hadamard,
    ReverseBits,
    apply_controlled_phase_gradient,
)
from fourier_shaders.kernel_dispatcher import MAX_SPAN, MIN_SPAN

if TYPE_CHECKING:
    from fourier_shaders.eval_context import CircuitEvalContext

_TAU = 2 * np.pi
_HADAMARD = Hadamard()


def fourier_transform_matrix(span: int) -> np.ndarray:
    """The unitary ``M[r][c] = 2**(-span/2) * exp(2πi * r * c / 2**span)``."""
    size = 1 << span
    indices = np.arange(size)
    exponents = np.outer(indices, indices) % size
    return np.exp(1j * _TAU * exponents / size) * 2 ** (-span / 2)


def inverse_fourier_transform_matrix(span: int) -> np.ndarray:
    return fourier_transform_matrix(span).conj().T


def apply_forward_gradient_shaders(context: CircuitEvalContext, span: int) -> None:
    """Applies the Fourier transform to the block of `span` rows at the context's row.

    After the bit reversal, qubit ``i`` is made to pick up the phases controlled by every
    qubit below it before it is itself mixed by a Hadamard.
    """
    if span > 1:
        ReverseBits(span).apply(context)
    for i in range(span):
        if i > 0:
            apply_controlled_phase_gradient(context, i + 1, +1)
        _HADAMARD.apply(context.with_row(context.row + i))


def apply_backward_gradient_shaders(context: CircuitEvalContext, span: int) -> None:
    """Exactly undoes :func:`apply_forward_gradient_shaders`."""
    for i in range(span - 1, -1, -1):
        _HADAMARD.apply(context.with_row(context.row + i))
        if i > 0:
            apply_controlled_phase_gradient(context, i + 1, -1)
    if span > 1:
        ReverseBits(span).apply(context)


def _forward_gate(span: int) -> Gate:
    return Gate(
        symbol="QFT",
        name="Fourier Transform Gate",
        blurb="Transforms to/from phase frequency space.",
        serialized_id=f"QFT{span}",
        height=span,
        operation=apply_forward_gradient_shaders,
        matrix=fourier_transform_matrix(span) if span < MATRIX_SPAN_LIMIT else None,
    )


def _inverse_gate(span: int) -> Gate:
    return Gate(
        symbol="QFT^†",
        name="Inverse Fourier Transform Gate",
        blurb="Transforms from/to phase frequency space.",
        serialized_id=f"QFT†{span}",
        height=span,
        operation=apply_backward_gradient_shaders,
        matrix=inverse_fourier_transform_matrix(span) if span < MATRIX_SPAN_LIMIT else None,
    )


@dataclass(frozen=True)
class FourierTransformGates:
    forward: GateFamily
    inverse: GateFamily
    all: tuple[Gate, ...]


@lru_cache(maxsize=None)
def build_fourier_transform_gates() -> FourierTransformGates:
    """Builds the forward and inverse Fourier transform families.

    The families are built on the first call; later calls return the same object.

    Returns:
        FourierTransformGates: The forward family, the inverse family, and all gates of
        both, forward first.
    """
    forward = generate_family(MIN_SPAN, MAX_SPAN, _forward_gate)
    inverse = generate_family(MIN_SPAN, MAX_SPAN, _inverse_gate)
    return FourierTransformGates(forward, inverse, forward.all + inverse.all)
