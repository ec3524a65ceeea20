JSON_CONTENT_TYPE = "application/json"
MSGPACK_CONTENT_TYPE = "application/msgpack"

ENCODING_JSON = "json"
ENCODING_JSON_V2 = "json_v2"
ENCODING_MSGPACK = "msgpack"

SUPPORTED_ENCODINGS = (ENCODING_JSON, ENCODING_JSON_V2, ENCODING_MSGPACK)
DEFAULT_ENCODING = ENCODING_MSGPACK

DEFAULT_LOGGING_RATE = 60
