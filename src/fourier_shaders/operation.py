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

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fourier_shaders.eval_context import CircuitEvalContext


class Operation(ABC):
    """
    Encapsulates an operation acting on a contiguous block of qubit rows.

    The block starts at the row of the evaluation context it is applied with and spans
    `height` rows.
    """

    height: int

    @abstractmethod
    def apply(self, context: CircuitEvalContext) -> None:
        """Applies the operation to the state behind the given context.

        Args:
            context (CircuitEvalContext): The context to evaluate against. It is borrowed
                for the duration of the call and must not be retained.

        Note:
            This method mutates the state held by the context's state trader.
        """
