"""pow-box: proof-of-work remota para transacciones IOTA vía un PoW box."""

from pow_box.adapters.http_client import HttpNetworkClient
from pow_box.adapters.proof_of_work_box import ProofOfWorkBox
from pow_box.core.domain.trytes import Hash, Trytes
from pow_box.core.errors import (
    ConfigurationError,
    NetworkError,
    PowBoxError,
    ProtocolError,
    RemoteJobError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Hash",
    "HttpNetworkClient",
    "NetworkError",
    "PowBoxError",
    "ProofOfWorkBox",
    "ProtocolError",
    "RemoteJobError",
    "Trytes",
    "ValidationError",
]
