"""
tracewire encodes finished traces and service metadata into the payloads
sent to a trace agent::

    from tracewire import Span
    from tracewire.encoding import get_encoder

    encoder = get_encoder("msgpack")
    payload = encoder.encode_traces([[Span("web.request", service="web")]])
    headers = {"Content-Type": encoder.content_type}
"""
from .span import Span  # noqa: F401


__version__ = "0.1.0"

__all__ = ["Span", "__version__"]
