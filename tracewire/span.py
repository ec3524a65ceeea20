import random
import time
from typing import Any
from typing import Dict
from typing import Optional
from typing import Text
from typing import TYPE_CHECKING
from typing import Union

from .internal.compat import NumericType
from .internal.compat import ensure_text
from .internal.compat import is_integer


if TYPE_CHECKING:  # pragma: no cover
    import msgpack


_MAX_UINT_64BITS = (1 << 64) - 1


def _rand64bits():
    # type: () -> int
    return random.getrandbits(64) or 1


class Span(object):
    """
    A finished unit of work, as handed over to the encoders.

    ``Span`` exposes both element capabilities: ``to_dict`` for the JSON
    encoders and ``pack_msgpack`` for the msgpack encoder. Both produce the
    same set of fields.
    """

    __slots__ = [
        "name",
        "service",
        "resource",
        "span_type",
        "trace_id",
        "span_id",
        "parent_id",
        "start_ns",
        "duration_ns",
        "error",
        "_meta",
        "_metrics",
    ]

    def __init__(
        self,
        name,  # type: Optional[Text]
        service=None,  # type: Optional[Text]
        resource=None,  # type: Optional[Text]
        span_type=None,  # type: Optional[Text]
        trace_id=None,  # type: Optional[int]
        span_id=None,  # type: Optional[int]
        parent_id=None,  # type: Optional[int]
        start_ns=None,  # type: Optional[int]
        duration_ns=None,  # type: Optional[int]
        error=0,  # type: Union[int, bool]
        meta=None,  # type: Optional[Dict[str, str]]
        metrics=None,  # type: Optional[Dict[str, NumericType]]
    ):
        # type: (...) -> None
        self.name = name
        self.service = service
        self.resource = name if resource is None else resource
        self.span_type = span_type
        self.span_id = span_id or _rand64bits()
        self.trace_id = trace_id or self.span_id
        self.parent_id = parent_id
        self.start_ns = time.time_ns() if start_ns is None else start_ns
        self.duration_ns = duration_ns
        self.error = error
        self._meta = {}  # type: Dict[str, str]
        self._metrics = {}  # type: Dict[str, NumericType]
        if meta:
            self.set_tags(meta)
        if metrics:
            for key, value in metrics.items():
                self.set_metric(key, value)

    @property
    def _trace_id_64bits(self):
        # type: () -> int
        return self.trace_id & _MAX_UINT_64BITS

    @property
    def finished(self):
        # type: () -> bool
        return self.duration_ns is not None

    def finish(self, finish_time_ns=None):
        # type: (Optional[int]) -> None
        """Sets the duration of the span. Finishing an already finished span is a no-op."""
        if self.duration_ns is not None:
            return
        if finish_time_ns is None:
            finish_time_ns = time.time_ns()
        self.duration_ns = finish_time_ns - self.start_ns

    def set_tag(self, key, value):
        # type: (Text, Any) -> None
        """Sets a tag. Numeric values are stored as metrics, everything else as text."""
        if is_integer(value) or isinstance(value, float):
            self.set_metric(key, value)
            return
        self._metrics.pop(key, None)
        if isinstance(value, bytes):
            value = ensure_text(value, errors="backslashreplace")
        self._meta[key] = value if isinstance(value, str) else str(value)

    def set_tags(self, tags):
        # type: (Dict[Text, Any]) -> None
        for key, value in tags.items():
            self.set_tag(key, value)

    def set_metric(self, key, value):
        # type: (Text, NumericType) -> None
        if not (is_integer(value) or isinstance(value, float)):
            raise TypeError("metric %r must be an int or a float, got %r" % (key, value))
        self._meta.pop(key, None)
        self._metrics[key] = value

    def get_tag(self, key):
        # type: (Text) -> Optional[Text]
        return self._meta.get(key)

    def get_tags(self):
        # type: () -> Dict[Text, Text]
        return self._meta.copy()

    def get_metric(self, key):
        # type: (Text) -> Optional[NumericType]
        return self._metrics.get(key)

    def get_metrics(self):
        # type: () -> Dict[Text, NumericType]
        return self._metrics.copy()

    def to_dict(self):
        # type: () -> Dict[str, Any]
        d = {
            "trace_id": self._trace_id_64bits,
            "parent_id": self.parent_id,
            "span_id": self.span_id,
            "service": self.service,
            "resource": self.resource,
            "name": self.name,
            "error": self.error,
        }  # type: Dict[str, Any]

        # a common mistake is to set the error field to a boolean instead of an
        # int. let's special case that here, because it's sure to happen in
        # customer code.
        if type(d["error"]) is bool:
            d["error"] = int(d["error"])

        if self.start_ns:
            d["start"] = self.start_ns

        if self.duration_ns:
            d["duration"] = self.duration_ns

        if self._meta:
            d["meta"] = self._meta

        if self._metrics:
            d["metrics"] = self._metrics

        if self.span_type:
            d["type"] = self.span_type

        return d

    def pack_msgpack(self, packer):
        # type: (msgpack.Packer) -> None
        d = self.to_dict()
        packer.pack_map_header(len(d))
        for key, value in d.items():
            packer.pack(key)
            packer.pack(value)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.error = 1
        self.finish()

    def __repr__(self):
        return "<Span(id=%s,trace_id=%s,parent_id=%s,name=%s)>" % (
            self.span_id,
            self.trace_id,
            self.parent_id,
            self.name,
        )
