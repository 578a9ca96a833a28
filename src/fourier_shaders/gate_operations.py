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

from typing import TYPE_CHECKING

from fourier_shaders.kernel_dispatcher import (
    CONTROLLED_PHASE_GRADIENT,
    HADAMARD,
    PHASE_GRADIENT,
    REVERSE_BITS,
)
from fourier_shaders.operation import Operation

if TYPE_CHECKING:
    from fourier_shaders.eval_context import CircuitEvalContext


class Hadamard(Operation):
    """Hadamard gate on the context's row"""

    height = 1

    def apply(self, context: CircuitEvalContext) -> None:
        context.shade_and_trade(HADAMARD.with_args(row=context.row))


class ReverseBits(Operation):
    """Reverses the order of the qubits in a block of `span` rows."""

    def __init__(self, span: int):
        self.height = span

    def apply(self, context: CircuitEvalContext) -> None:
        context.shade_and_trade(REVERSE_BITS.with_args(row=context.row, span=self.height))

    def __eq__(self, other) -> bool:
        return isinstance(other, ReverseBits) and other.height == self.height

    def __hash__(self) -> int:
        return hash((ReverseBits, self.height))

    def __repr__(self) -> str:
        return f"ReverseBits(span={self.height})"


def apply_controlled_phase_gradient(
    context: CircuitEvalContext, span: int, factor: float = 1
) -> None:
    """Applies the controlled phase ramp to the block of `span` rows at the context's row.

    The top qubit of the block controls a phase of ``2π * step * factor / 2**span`` where
    ``step`` is the value of the qubits below it.

    Args:
        context (CircuitEvalContext): The context to evaluate against.
        span (int): Size of the block.
        factor (float): Scaling factor for the applied phases; its sign selects the
            rotation direction. Default 1.
    """
    context.shade_and_trade(
        CONTROLLED_PHASE_GRADIENT.with_args(row=context.row, span=span, factor=factor)
    )


def phase_gradient(context: CircuitEvalContext, span: int, factor: float = 1) -> None:
    """Multiplies each amplitude by ``exp(iπ * k * factor / 2**span)``, where ``k`` is the
    value of the block of `span` rows at the context's row.
    """
    context.shade_and_trade(PHASE_GRADIENT.with_args(row=context.row, span=span, factor=factor))
