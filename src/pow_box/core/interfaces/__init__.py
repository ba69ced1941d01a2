"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from pow_box.core.interfaces.network_client import NetworkClient
from pow_box.core.interfaces.proof_of_work import ProofOfWork

__all__ = ["NetworkClient", "ProofOfWork"]
