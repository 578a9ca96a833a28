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

from dataclasses import dataclass, replace

from fourier_shaders.kernel_dispatcher import Kernel, KernelDispatcher
from fourier_shaders.state_trader import StateTrader


@dataclass(frozen=True)
class CircuitEvalContext:
    """The row offset, amplitude store and dispatcher a gate is applied with."""

    row: int
    qubit_count: int
    state_trader: StateTrader
    dispatcher: KernelDispatcher

    def with_row(self, row: int) -> CircuitEvalContext:
        return replace(self, row=row)

    def shade_and_trade(self, kernel: Kernel) -> None:
        """Compiles the kernel and runs it as one pass against the state."""
        self.state_trader.shade_and_trade(self.dispatcher.compile(kernel))
