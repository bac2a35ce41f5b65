"""Transport package.

Architectural role:
    Owns everything that touches the network: configuration of the endpoint,
    headers and credentials, and the blocking JSON transport used by builders,
    the client facade and the run lifecycle controller.

Module split:
    - `config`: environment-driven `ClientSettings` and key lookup.
    - `transport`: `Networking`, one method per service endpoint.
"""

from assistantkit.networking.config import ClientSettings, load_key
from assistantkit.networking.transport import Networking

__all__ = ["ClientSettings", "Networking", "load_key"]
