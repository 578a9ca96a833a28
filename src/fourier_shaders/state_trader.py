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

import numpy as np
from numba import cuda

from fourier_shaders.kernel_dispatcher import ConfiguredKernel


class StateTrader:
    """
    Double-buffered amplitude store.

    Each pass reads the active buffer and writes the scratch buffer, after which the two
    are traded so the next pass reads what was just written. On the host the active buffer
    is read-only while a pass runs. Only one pass may run at a time. If a pass fails
    partway, the amplitudes are corrupted and every later pass is refused until the store
    is reset.
    """

    def __init__(self, state: np.ndarray, on_device: bool = False):
        """
        Args:
            state (np.ndarray): The initial amplitudes; its length must be a power of two.
            on_device (bool): Whether to keep the buffers on a CUDA device. Default False.
        """
        self._on_device = on_device
        self._active = None
        self._scratch = None
        self._busy = False
        self._corrupted = False
        self.reset(state)

    @classmethod
    def zero_state(cls, qubit_count: int, on_device: bool = False) -> StateTrader:
        r"""Creates a store holding the computational basis state :math:`\ket{0 \cdots 0}`."""
        state = np.zeros(2**qubit_count, dtype=complex)
        state[0] = 1
        return cls(state, on_device)

    @property
    def qubit_count(self) -> int:
        """int: The number of qubits the amplitudes describe."""
        return int(self._active.size).bit_length() - 1

    @property
    def on_device(self) -> bool:
        """bool: Whether the buffers live on a CUDA device."""
        return self._on_device

    @property
    def corrupted(self) -> bool:
        """bool: Whether a failed pass left the amplitudes in an unknown state."""
        return self._corrupted

    @property
    def state_vector(self) -> np.ndarray:
        """np.ndarray: A host copy of the active amplitudes."""
        if self._corrupted:
            raise RuntimeError("State is corrupted by an aborted pass; reset it first")
        if self._on_device:
            return self._active.copy_to_host()
        return self._active.copy()

    def reset(self, state: np.ndarray) -> None:
        """Replaces the amplitudes and clears any corruption.

        Args:
            state (np.ndarray): The new amplitudes; its length must be a power of two.
        """
        if self._busy:
            raise RuntimeError("Cannot reset the state while a pass is running")
        state = np.ascontiguousarray(np.asarray(state, dtype=complex).reshape(-1))
        if state.size < 2 or state.size & (state.size - 1):
            raise ValueError(f"State length must be a power of two of at least 2: {state.size}")

        if self._on_device:
            self._active = cuda.to_device(state)
            self._scratch = cuda.device_array_like(self._active)
        else:
            self._active = state.copy()
            self._scratch = np.zeros_like(self._active)
        self._corrupted = False

    def shade_and_trade(self, kernel: ConfiguredKernel) -> None:
        """Runs one kernel pass from the active buffer into scratch, then trades them.

        Args:
            kernel (ConfiguredKernel): The pass to run.

        Raises:
            RuntimeError: If another pass is running or the state is corrupted.
            ValueError: If the pass reaches past the last qubit of the state.
        """
        if self._busy:
            raise RuntimeError("A kernel pass is already running on this state")
        if self._corrupted:
            raise RuntimeError("State is corrupted by an aborted pass; reset it first")
        if kernel.reach > self.qubit_count:
            raise ValueError(
                f"Kernel {kernel.kernel.program} needs {kernel.reach} qubits but the state has "
                f"{self.qubit_count}"
            )

        self._busy = True
        if not self._on_device:
            self._active.setflags(write=False)
        try:
            kernel(self._active, self._scratch)
        except BaseException:
            self._corrupted = True
            raise
        finally:
            if not self._on_device:
                self._active.setflags(write=True)
            self._busy = False

        self._active, self._scratch = self._scratch, self._active

    def mark_corrupted(self) -> None:
        """Flags the amplitudes as unusable until the next :meth:`reset`.

        Used when a multi-pass operation stops between passes.
        """
        self._corrupted = True
