# collapse/qubit.py
from __future__ import annotations
import numpy as np
from dataclasses import dataclass

__all__ = [
    "Qubit",
    "norm",
]

# ------------------ helpers ------------------

def norm(alpha: complex, beta: complex) -> float:
    """Squared L2 norm |alpha|^2 + |beta|^2 of an amplitude pair."""
    return float(abs(alpha) ** 2 + abs(beta) ** 2)

def _phase(theta: float) -> complex:
    """Unit phase factor e^{i theta}."""
    return complex(np.exp(1j * theta))

# ------------------ model ------------------

@dataclass
class Qubit:
    """
    Two-amplitude state (alpha, beta) evolved independently of any other qubit.

    The unit-norm invariant is not enforced by construction; every mutating
    method ends with normalize().
    """
    alpha: complex = 1.0 + 0.0j
    beta: complex = 0.0j

    @classmethod
    def from_index(cls, index: int, qubit_count: int) -> "Qubit":
        q = cls()
        q.initialize(index, qubit_count)
        return q

    def initialize(self, index: int, qubit_count: int) -> None:
        """Seed alpha with the phase 2*pi*index/qubit_count, beta with i."""
        if qubit_count <= 0:
            raise ValueError("qubit_count must be positive.")
        angle = 2.0 * np.pi * float(index) / float(qubit_count)
        self.alpha = _phase(angle)
        self.beta = 1j
        self.normalize()

    def normalize(self) -> None:
        n = float(np.sqrt(norm(self.alpha, self.beta)))
        if n == 0.0:
            # fallback basis state |0>
            self.alpha = 1.0 + 0.0j
            self.beta = 0.0j
            return
        self.alpha = complex(self.alpha) / n
        self.beta = complex(self.beta) / n

    def apply_deterministic_gate(self, theta: float) -> None:
        """
        alpha <- alpha * e^{i theta}, beta <- beta * e^{-i theta}.
        Not a 2x2 unitary mixing the amplitudes; each one is rotated on its own.
        """
        phase = _phase(theta)
        self.alpha = self.alpha * phase
        self.beta = self.beta * phase.conjugate()
        self.normalize()

    def collapse_bit(self) -> str:
        """Threshold |alpha|^2 at 0.5: '0' at or above, '1' below."""
        p0 = (self.alpha * self.alpha.conjugate()).real
        return "0" if p0 >= 0.5 else "1"

    def norm(self) -> float:
        return norm(self.alpha, self.beta)
