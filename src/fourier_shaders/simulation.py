# Copyright 2019-2019 Amazon.com, Inc. or its affiliates. All Rights Reserved.
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
from logging import Logger, getLogger
from typing import Optional

import numpy as np

from fourier_shaders.eval_context import CircuitEvalContext
from fourier_shaders.kernel_dispatcher import KernelDispatcher
from fourier_shaders.operation import Operation
from fourier_shaders.state_trader import StateTrader


class StateVectorSimulation:
    """
    This class tracks the evolution of a quantum system with `qubit_count` qubits.
    The state of the system evolves by application of `Operation`s at qubit row offsets
    using the `apply()` and `evolve()` methods.
    """

    def __init__(self, qubit_count: int, use_gpu: bool = False, logger: Optional[Logger] = None):
        r"""
        Args:
            qubit_count (int): The number of qubits being simulated.
                All the qubits start in the :math:`\ket{\mathbf{0}}` computational basis state.
            use_gpu (bool): Whether to keep the state on a CUDA device. Falls back to the CPU
                when no device is available. Default False.
            logger (Optional[Logger]): Logger for applied operations. Default module logger.
        """
        if qubit_count < 1:
            raise ValueError(f"Simulation needs at least one qubit: {qubit_count}")
        self._qubit_count = qubit_count
        self.logger = logger or getLogger(__name__)
        self._dispatcher = KernelDispatcher(qubit_count, use_gpu, self.logger)
        self._trader = StateTrader.zero_state(qubit_count, self._dispatcher.on_device)

    @property
    def qubit_count(self) -> int:
        """int: The number of qubits being simulated by the simulation."""
        return self._qubit_count

    @property
    def state_trader(self) -> StateTrader:
        return self._trader

    @property
    def state_vector(self) -> np.ndarray:
        """
        np.ndarray: The state vector specifying the current state of the simulation,
        with qubit row ``k`` as bit ``k`` of the index.
        """
        return self._trader.state_vector

    @property
    def probabilities(self) -> np.ndarray:
        """np.ndarray: The probabilities of each computational basis state."""
        return np.abs(self.state_vector) ** 2

    def context(self, row: int = 0) -> CircuitEvalContext:
        """Returns an evaluation context over this simulation's state at the given row."""
        return CircuitEvalContext(row, self._qubit_count, self._trader, self._dispatcher)

    def apply(self, operation: Operation, row: int = 0) -> None:
        """Applies an operation to the block of rows starting at `row`.

        Args:
            operation (Operation): The operation to apply.
            row (int): The first qubit row the operation acts on. Default 0.

        Raises:
            ValueError: If the operation does not fit in the simulated qubits.

        Note:
            This method mutates the state of the simulation. If it raises partway, the state
            is corrupted and must be reset before further use.
        """
        if row < 0 or row + operation.height > self._qubit_count:
            raise ValueError(
                f"Operation of height {operation.height} at row {row} does not fit in "
                f"{self._qubit_count} qubits"
            )
        self.logger.debug(f"Applying {operation!r} at row {row}")
        try:
            operation.apply(self.context(row))
        except BaseException:
            self._trader.mark_corrupted()
            raise

    def evolve(self, operations: Iterable[tuple[Operation, int]]) -> None:
        """Evolves the state of the simulation under the action of
        the specified operations, in order.

        Args:
            operations (Iterable[tuple[Operation, int]]): Operations to apply, each paired
                with the first qubit row it acts on.

        Note:
            This method mutates the state of the simulation.
        """
        for operation, row in operations:
            self.apply(operation, row)

    def reset(self, state: Optional[np.ndarray] = None) -> None:
        r"""Restores the simulation to the given state, or to :math:`\ket{\mathbf{0}}`.

        Args:
            state (Optional[np.ndarray]): Amplitudes of length ``2**qubit_count``.

        Raises:
            ValueError: If the state has the wrong length.
        """
        if state is None:
            state = np.zeros(2**self._qubit_count, dtype=complex)
            state[0] = 1
        state = np.asarray(state, dtype=complex).reshape(-1)
        if state.size != 2**self._qubit_count:
            raise ValueError(
                f"State of length {state.size} does not match {self._qubit_count} qubits"
            )
        self._trader.reset(state)
