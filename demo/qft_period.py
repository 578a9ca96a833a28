import numpy as np

from fourier_shaders import StateVectorSimulation, build_fourier_transform_gates

# A register of 6 qubits holding an equal superposition of multiples of 8.
qubit_count = 6
state = np.zeros(2**qubit_count, dtype=complex)
state[::8] = 1
state /= np.linalg.norm(state)

simulation = StateVectorSimulation(qubit_count)
simulation.reset(state)
simulation.apply(build_fourier_transform_gates().inverse.for_span(qubit_count))

peaks = np.flatnonzero(simulation.probabilities > 1e-9)
print(peaks)  # multiples of 2**6 / 8 = 8
