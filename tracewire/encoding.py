from .internal._exceptions import UnsupportedElementError
from .internal.encoding import ENCODERS
from .internal.encoding import JSONEncoder
from .internal.encoding import JSONEncoderV2
from .internal.encoding import MsgpackEncoder
from .internal.encoding import get_encoder


Encoder = MsgpackEncoder


__all__ = (
    "ENCODERS",
    "Encoder",
    "JSONEncoder",
    "JSONEncoderV2",
    "MsgpackEncoder",
    "UnsupportedElementError",
    "get_encoder",
)
