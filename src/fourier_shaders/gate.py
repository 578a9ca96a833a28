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

from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Iterator, Mapping, Optional

import numpy as np

from fourier_shaders.kernel_dispatcher import MAX_SPAN, MIN_SPAN
from fourier_shaders.operation import Operation

if TYPE_CHECKING:
    from fourier_shaders.eval_context import CircuitEvalContext

# Dense matrices are only materialized below this many qubits.
MATRIX_SPAN_LIMIT = 4


@dataclass(frozen=True)
class Gate(Operation):
    """
    Immutable gate descriptor.

    The gate's behavior is a stateless decomposition called with the evaluation context
    and the gate's height, so two descriptors built from the same arguments compare equal.
    """

    symbol: str
    name: str
    blurb: str
    serialized_id: str
    height: int
    operation: Callable[[CircuitEvalContext, int], None] = field(repr=False)
    matrix: Optional[np.ndarray] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not MIN_SPAN <= self.height <= MAX_SPAN:
            raise ValueError(f"Gate height must be in [{MIN_SPAN}, {MAX_SPAN}]: {self.height}")
        if self.matrix is not None:
            matrix = np.array(self.matrix, dtype=complex)
            dimension = 1 << self.height
            if matrix.shape != (dimension, dimension):
                raise ValueError(
                    f"Matrix of {self.serialized_id} must be {dimension}x{dimension}, "
                    f"got {matrix.shape}"
                )
            matrix.setflags(write=False)
            object.__setattr__(self, "matrix", matrix)

    @property
    def has_known_matrix(self) -> bool:
        """bool: Whether a dense matrix is attached to the gate."""
        return self.matrix is not None

    def apply(self, context: CircuitEvalContext) -> None:
        self.operation(context, self.height)


@dataclass(frozen=True)
class GateFamily:
    """Gates of one kind, one per span, in increasing span order."""

    gates: tuple[Gate, ...]

    def __iter__(self) -> Iterator[Gate]:
        return iter(self.gates)

    def __len__(self) -> int:
        return len(self.gates)

    @property
    def all(self) -> tuple[Gate, ...]:
        return self.gates

    def for_span(self, span: int) -> Gate:
        """Returns the family member with the given height.

        Raises:
            ValueError: If the family has no member of that height.
        """
        for gate in self.gates:
            if gate.height == span:
                return gate
        raise ValueError(f"No gate of span {span} in family")


def generate_family(
    min_span: int, max_span: int, factory: Callable[[int], Gate]
) -> GateFamily:
    """Builds one gate per span in ``[min_span, max_span]``.

    Args:
        min_span (int): The smallest span, at least 1.
        max_span (int): The largest span, at most 16.
        factory (Callable[[int], Gate]): Builds the gate of a given span.

    Returns:
        GateFamily: The generated gates.

    Raises:
        ValueError: If the span range is empty or falls outside [1, 16].
    """
    if not MIN_SPAN <= min_span <= max_span <= MAX_SPAN:
        raise ValueError(
            f"Span range [{min_span}, {max_span}] must lie within [{MIN_SPAN}, {MAX_SPAN}]"
        )
    return GateFamily(tuple(factory(span) for span in range(min_span, max_span + 1)))


def gates_by_serialized_id(gates: Iterable[Gate]) -> Mapping[str, Gate]:
    """Indexes gates by their serialized id.

    Raises:
        ValueError: If two gates share a serialized id.
    """
    index = {}
    for gate in gates:
        if gate.serialized_id in index:
            raise ValueError(f"Duplicate serialized id: {gate.serialized_id}")
        index[gate.serialized_id] = gate
    return MappingProxyType(index)
