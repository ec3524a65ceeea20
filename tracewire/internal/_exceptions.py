from typing import Any


class UnsupportedElementError(TypeError):
    """
    Raised when an element handed to an encoder lacks the capability that
    encoder relies on (``to_dict`` for JSON, ``pack_msgpack`` for msgpack
    when the element is not a plain msgpack value).
    """

    def __init__(self, element: Any, capability: str) -> None:
        self.element = element
        self.capability = capability
        super(UnsupportedElementError, self).__init__(
            "%s object does not support %r and cannot be encoded" % (type(element).__name__, capability)
        )
