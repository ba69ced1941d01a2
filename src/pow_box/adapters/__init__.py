"""Adaptadores de I/O (HTTP, PoW box).

Por qué un paquete:
- Cada módulo implementa un contrato de `pow_box.core.interfaces`.
"""

from pow_box.adapters.http_client import HttpNetworkClient, build_async_client
from pow_box.adapters.proof_of_work_box import ProofOfWorkBox

__all__ = [
    "HttpNetworkClient",
    "ProofOfWorkBox",
    "build_async_client",
]
