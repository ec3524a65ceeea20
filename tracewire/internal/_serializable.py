"""
Capabilities a span-like element can expose to the encoders.

An element is never required to inherit from anything: encoders look the
capability up on the object at encode time.

- ``to_dict()`` returns a flat key/value mapping, used by the JSON encoders.
- ``pack_msgpack(packer)`` writes the element's own msgpack representation
  into the shared ``msgpack.Packer``, used by the msgpack encoder.
"""
from typing import Any
from typing import Callable
from typing import Dict
from typing import Optional
from typing import Protocol
from typing import Union
from typing import runtime_checkable

import msgpack


TO_DICT = "to_dict"
PACK_MSGPACK = "pack_msgpack"

# Values the generic msgpack path knows how to serialize on its own.
MSGPACK_NATIVE_TYPES = (str, bytes, bytearray, int, float, bool, type(None), dict, list, tuple)


@runtime_checkable
class SupportsToDict(Protocol):
    def to_dict(self) -> Dict[str, Any]:
        ...


@runtime_checkable
class SupportsPackMsgpack(Protocol):
    def pack_msgpack(self, packer: msgpack.Packer) -> None:
        ...


def get_to_dict(elem):
    # type: (Union[SupportsToDict, Any]) -> Optional[Callable[[], Dict[str, Any]]]
    to_dict = getattr(elem, TO_DICT, None)
    return to_dict if callable(to_dict) else None


def get_pack_msgpack(elem):
    # type: (Union[SupportsPackMsgpack, Any]) -> Optional[Callable[[msgpack.Packer], None]]
    pack = getattr(elem, PACK_MSGPACK, None)
    return pack if callable(pack) else None


def is_msgpack_native(elem):
    # type: (Any) -> bool
    return isinstance(elem, MSGPACK_NATIVE_TYPES)
