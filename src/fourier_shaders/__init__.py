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

from fourier_shaders._version import __version__  # noqa: F401
from fourier_shaders.eval_context import CircuitEvalContext  # noqa: F401
from fourier_shaders.fourier_transform_gates import (  # noqa: F401
    FourierTransformGates,
    build_fourier_transform_gates,
    fourier_transform_matrix,
    inverse_fourier_transform_matrix,
)
from fourier_shaders.gate import Gate, GateFamily, gates_by_serialized_id  # noqa: F401
from fourier_shaders.kernel_dispatcher import (  # noqa: F401
    Kernel,
    KernelCompilationError,
    KernelDispatcher,
)
from fourier_shaders.operation import Operation  # noqa: F401
from fourier_shaders.phase_gradient_gates import (  # noqa: F401
    PhaseGradientGates,
    build_phase_gradient_gates,
)
from fourier_shaders.simulation import StateVectorSimulation  # noqa: F401
from fourier_shaders.state_trader import StateTrader  # noqa: F401
