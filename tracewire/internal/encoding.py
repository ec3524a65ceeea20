from collections.abc import Mapping
import json
import threading
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import TYPE_CHECKING
from typing import Union

import msgpack

from ..constants import ENCODING_JSON
from ..constants import ENCODING_JSON_V2
from ..constants import ENCODING_MSGPACK
from ..constants import JSON_CONTENT_TYPE
from ..constants import MSGPACK_CONTENT_TYPE
from ..settings.encoding import config
from ._exceptions import UnsupportedElementError
from ._serializable import PACK_MSGPACK
from ._serializable import TO_DICT
from ._serializable import get_pack_msgpack
from ._serializable import get_to_dict
from ._serializable import is_msgpack_native
from .compat import ensure_text
from .logger import get_logger


__all__ = ["JSONEncoder", "JSONEncoderV2", "MsgpackEncoder", "ENCODERS", "get_encoder"]


if TYPE_CHECKING:  # pragma: no cover
    from ..span import Span


log = get_logger(__name__)


class _EncoderBase(object):
    """
    Encoder interface that provides the logic to encode traces and services.

    ``content_type`` must be set by every concrete encoder: the transport
    uses it as the request ``Content-Type`` so that it never needs to know
    which format the payload is in.
    """

    content_type = ""

    def encode_traces(self, traces):
        # type: (List[List[Span]]) -> Union[str, bytes]
        """
        Encodes a list of traces, expecting a list of items where each items
        is a list of spans. Before dumping the string in a serialized format all
        traces are normalized according to the encoding format. The trace
        nesting is not changed.

        :param traces: A list of traces that should be serialized
        """
        normalized_traces = [[self._normalize_span(span) for span in trace] for trace in traces]
        return self.encode(normalized_traces)

    def encode_trace(self, trace):
        # type: (List[Span]) -> Union[str, bytes]
        """
        Encodes a single trace. The result can be combined with other encoded
        traces with :meth:`join_encoded`.
        """
        raise NotImplementedError()

    def join_encoded(self, encoded_traces):
        # type: (List[Any]) -> Union[str, bytes]
        """
        Joins traces encoded with :meth:`encode_trace` into a payload equivalent
        to the one :meth:`encode_traces` produces for the same traces.
        """
        raise NotImplementedError()

    def encode_services(self, services):
        # type: (Dict[str, Dict[str, Any]]) -> Union[str, bytes]
        """
        Encodes a dictionary of services. Services are encoded as they are.

        :param services: A dictionary that contains one or more services
        """
        return self.encode(services)

    def encode(self, obj):
        # type: (Any) -> Union[str, bytes]
        """
        Defines the underlying format used during traces or services encoding.
        This method must be implemented and should only be used by the internal
        functions.
        """
        raise NotImplementedError()

    def _normalize_span(self, span):
        # type: (Any) -> Any
        return span


class JSONEncoder(json.JSONEncoder, _EncoderBase):
    content_type = JSON_CONTENT_TYPE

    def __init__(self, *args, **kwargs):
        log.info("using JSON encoder; application performance may be degraded")
        super(JSONEncoder, self).__init__(*args, **kwargs)

    def encode_trace(self, trace):
        return self.encode([self._normalize_span(span) for span in trace])

    def join_encoded(self, encoded_traces):
        # type: (List[str]) -> str
        return "[%s]" % self.item_separator.join(encoded_traces)

    def _normalize_span(self, span):
        # type: (Any) -> Dict[str, Any]
        to_dict = get_to_dict(span)
        if to_dict is None:
            raise UnsupportedElementError(span, TO_DICT)

        d = dict(to_dict())
        # Ensure all string attributes are actually strings and not bytes
        # DEV: meta/metrics are not normalized, they may still contain `bytes`.
        for key in ("resource", "name", "service"):
            if key in d:
                d[key] = JSONEncoder._normalize_str(d[key])
        return d

    @staticmethod
    def _normalize_str(obj):
        if obj is None:
            return obj
        if isinstance(obj, (str, bytes)):
            return ensure_text(obj, errors="backslashreplace")
        return obj

    @staticmethod
    def decode(data):
        # type: (Union[str, bytes]) -> Any
        return json.loads(data)


class JSONEncoderV2(JSONEncoder):
    """
    JSONEncoderV2 encodes traces to the intake API format: identifiers are
    rendered as 16 hex digits and the traces are wrapped in a ``traces`` key.
    """

    content_type = JSON_CONTENT_TYPE

    def encode_traces(self, traces):
        # type: (List[List[Span]]) -> str
        normalized_traces = [[self._normalize_span(span) for span in trace] for trace in traces]
        return self.encode({"traces": normalized_traces})

    def join_encoded(self, encoded_traces):
        # type: (List[str]) -> str
        return '{"traces": [%s]}' % self.item_separator.join(encoded_traces)

    def _normalize_span(self, span):
        # type: (Any) -> Dict[str, Any]
        sp = super(JSONEncoderV2, self)._normalize_span(span)
        sp["trace_id"] = JSONEncoderV2._encode_id_to_hex(sp.get("trace_id"))
        sp["parent_id"] = JSONEncoderV2._encode_id_to_hex(sp.get("parent_id"))
        sp["span_id"] = JSONEncoderV2._encode_id_to_hex(sp.get("span_id"))
        return sp

    @staticmethod
    def _encode_id_to_hex(dd_id):
        # type: (Optional[int]) -> str
        if not dd_id:
            return "0000000000000000"
        return "%0.16X" % int(dd_id)

    @staticmethod
    def _decode_id_to_hex(hex_id):
        # type: (Optional[str]) -> int
        if not hex_id:
            return 0
        return int(hex_id, 16)


class MsgpackEncoder(_EncoderBase):
    """
    Encodes traces as a msgpack array of arrays.

    A single ``msgpack.Packer`` is reused across calls. It is reset before
    anything is written and guarded by a lock, so concurrent callers sharing
    an instance never interleave their payloads.
    """

    content_type = MSGPACK_CONTENT_TYPE

    def __init__(self):
        log.debug("using Msgpack encoder")
        self._lock = threading.RLock()
        self._packer = msgpack.Packer(autoreset=False)

    def encode(self, obj):
        # type: (Any) -> bytes
        with self._lock:
            self._packer.reset()
            if isinstance(obj, Mapping):
                self._packer.pack(obj)
            else:
                self._packer.pack_array_header(len(obj))
                for trace in obj:
                    self._pack_trace(trace)
            return self._packer.bytes()

    def encode_trace(self, trace):
        # type: (List[Any]) -> bytes
        with self._lock:
            self._packer.reset()
            self._pack_trace(trace)
            return self._packer.bytes()

    def join_encoded(self, encoded_traces):
        # type: (List[bytes]) -> bytes
        with self._lock:
            self._packer.reset()
            self._packer.pack_array_header(len(encoded_traces))
            return self._packer.bytes() + b"".join(encoded_traces)

    def _pack_trace(self, trace):
        # type: (List[Any]) -> None
        packer = self._packer
        packer.pack_array_header(len(trace))
        for elem in trace:
            pack_msgpack = get_pack_msgpack(elem)
            if pack_msgpack is not None:
                pack_msgpack(packer)
            elif is_msgpack_native(elem):
                packer.pack(elem)
            else:
                raise UnsupportedElementError(elem, PACK_MSGPACK)

    @staticmethod
    def decode(data):
        # type: (bytes) -> Any
        return msgpack.unpackb(data, raw=False, strict_map_key=False)


ENCODERS = {
    ENCODING_JSON: JSONEncoder,
    ENCODING_JSON_V2: JSONEncoderV2,
    ENCODING_MSGPACK: MsgpackEncoder,
}


def get_encoder(name=None):
    # type: (Optional[str]) -> _EncoderBase
    """
    Returns a new encoder for ``name``, or for the configured
    ``TRACEWIRE_ENCODING`` when no name is given.
    """
    if name is None:
        name = config.encoding
    try:
        encoder_class = ENCODERS[name]
    except KeyError:
        raise ValueError(
            "Unsupported encoding: '%s'. The supported encodings are: %s" % (name, ", ".join(sorted(ENCODERS.keys())))
        )
    return encoder_class()
