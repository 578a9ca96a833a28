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

import numbers
from dataclasses import dataclass
from logging import Logger, getLogger
from types import MappingProxyType
from typing import Callable, Optional

import numpy as np

from fourier_shaders import gpu_kernels, linalg_utils

MIN_SPAN = 1
MAX_SPAN = 16

_INTEGER_UNIFORMS = frozenset({"row", "span"})


class KernelCompilationError(ValueError):
    """Raised when a kernel descriptor cannot be bound to a kernel program.

    This always indicates a defect in how the kernel was described, so it is never retried.
    """


@dataclass(frozen=True)
class Kernel:
    """What to compute: the name of a kernel program plus its bound uniform values."""

    program: str
    uniforms: tuple[tuple[str, float], ...]

    @property
    def args(self) -> dict[str, float]:
        """dict[str, float]: The bound uniform values by name."""
        return dict(self.uniforms)


@dataclass(frozen=True)
class KernelProgram:
    """A named kernel program and the uniforms it declares, in call order."""

    name: str
    uniforms: tuple[str, ...]

    def with_args(self, **uniforms: float) -> Kernel:
        return Kernel(self.name, tuple(sorted(uniforms.items())))


CONTROLLED_PHASE_GRADIENT = KernelProgram("controlled_phase_gradient", ("row", "span", "factor"))
PHASE_GRADIENT = KernelProgram("phase_gradient", ("row", "span", "factor"))
REVERSE_BITS = KernelProgram("reverse_bits", ("row", "span"))
HADAMARD = KernelProgram("hadamard", ("row",))

PROGRAMS = MappingProxyType(
    {
        program.name: program
        for program in (CONTROLLED_PHASE_GRADIENT, PHASE_GRADIENT, REVERSE_BITS, HADAMARD)
    }
)

_CPU_SMALL_IMPLEMENTATIONS = MappingProxyType(
    {
        "controlled_phase_gradient": linalg_utils._apply_controlled_phase_gradient_small,
        "phase_gradient": linalg_utils._apply_phase_gradient_small,
        "reverse_bits": linalg_utils._apply_reverse_bits_small,
        "hadamard": linalg_utils._apply_hadamard_small,
    }
)

_CPU_LARGE_IMPLEMENTATIONS = MappingProxyType(
    {
        "controlled_phase_gradient": linalg_utils._apply_controlled_phase_gradient_large,
        "phase_gradient": linalg_utils._apply_phase_gradient_large,
        "reverse_bits": linalg_utils._apply_reverse_bits_large,
        "hadamard": linalg_utils._apply_hadamard_large,
    }
)

_GPU_IMPLEMENTATIONS = MappingProxyType(
    {
        "controlled_phase_gradient": gpu_kernels.launch_controlled_phase_gradient,
        "phase_gradient": gpu_kernels.launch_phase_gradient,
        "reverse_bits": gpu_kernels.launch_reverse_bits,
        "hadamard": gpu_kernels.launch_hadamard,
    }
)


@dataclass(frozen=True)
class ConfiguredKernel:
    """A kernel bound to a backend implementation, ready to run one pass.

    Calling it reads ``state`` and writes every amplitude of ``out``.
    """

    kernel: Kernel
    implementation: Callable
    arguments: tuple

    @property
    def reach(self) -> int:
        """int: The number of qubit rows the pass needs, counted from row 0."""
        args = self.kernel.args
        return int(args["row"]) + int(args.get("span", 1))

    def __call__(self, state, out) -> None:
        self.implementation(state, *self.arguments, out)


class KernelDispatcher:
    def __init__(self, qubit_count: int, use_gpu: bool = False, logger: Optional[Logger] = None):
        """
        Compiles kernel descriptors into passes for one backend. CUDA kernels are used when
        requested and a device is present; otherwise it selects between small-state (NumPy)
        and large-state (Numba JIT-compiled) implementations based on the number of qubits.

        Args:
            qubit_count (int): The number of qubits in the simulated state.
            use_gpu (bool): Whether to run passes on a CUDA device. Default False.
            logger (Optional[Logger]): Logger for compiled passes. Default module logger.
        """
        self.qubit_count = qubit_count
        self.logger = logger or getLogger(__name__)
        self.on_device = use_gpu and linalg_utils._GPU_AVAILABLE

        if use_gpu and not self.on_device:
            self.logger.warning("CUDA device not available, falling back to CPU kernels")

        if self.on_device:
            self._implementations = _GPU_IMPLEMENTATIONS
        elif qubit_count > linalg_utils._QUBIT_THRESHOLD:
            self._implementations = _CPU_LARGE_IMPLEMENTATIONS
        else:
            self._implementations = _CPU_SMALL_IMPLEMENTATIONS

    def compile(self, kernel: Kernel) -> ConfiguredKernel:
        """Binds a kernel descriptor to this dispatcher's backend.

        Args:
            kernel (Kernel): The kernel program name and uniform values.

        Returns:
            ConfiguredKernel: The pass, ready to hand to a state trader.

        Raises:
            KernelCompilationError: If the program is unknown, the uniforms do not match
                the program's declaration, or a uniform value is out of range.
        """
        program = PROGRAMS.get(kernel.program)
        if program is None:
            raise KernelCompilationError(f"Unknown kernel program: {kernel.program}")

        args = kernel.args
        missing = set(program.uniforms) - set(args)
        unexpected = set(args) - set(program.uniforms)
        if missing or unexpected:
            raise KernelCompilationError(
                f"Kernel {program.name} expects uniforms {program.uniforms}; "
                f"missing {sorted(missing)}, unexpected {sorted(unexpected)}"
            )

        arguments = tuple(
            _coerce_uniform(program.name, name, args[name]) for name in program.uniforms
        )
        self.logger.debug(f"Compiled kernel: {kernel}")
        return ConfiguredKernel(kernel, self._implementations[program.name], arguments)


def _coerce_uniform(program: str, name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise KernelCompilationError(f"Uniform {name} of {program} must be a real number: {value}")
    if name not in _INTEGER_UNIFORMS:
        if not np.isfinite(value):
            raise KernelCompilationError(f"Uniform {name} of {program} must be finite: {value}")
        return float(value)
    if not isinstance(value, numbers.Integral):
        raise KernelCompilationError(f"Uniform {name} of {program} must be an integer: {value}")
    if name == "row" and value < 0:
        raise KernelCompilationError(f"Uniform row of {program} must be non-negative: {value}")
    if name == "span" and not MIN_SPAN <= value <= MAX_SPAN:
        raise KernelCompilationError(
            f"Uniform span of {program} must be in [{MIN_SPAN}, {MAX_SPAN}]: {value}"
        )
    return int(value)
