from envier import En
from envier import validators

from tracewire.constants import DEFAULT_ENCODING
from tracewire.constants import DEFAULT_LOGGING_RATE
from tracewire.constants import SUPPORTED_ENCODINGS


def _validate_non_negative_int(value: int) -> None:
    if value < 0:
        raise ValueError("value must be non negative")


class EncodingConfig(En):
    __prefix__ = "tracewire"

    encoding = En.v(
        str,
        "encoding",
        default=DEFAULT_ENCODING,
        help_type="String",
        help="Wire format used to encode trace payloads. Valid values: %s" % ", ".join(SUPPORTED_ENCODINGS),
        validator=validators.choice(SUPPORTED_ENCODINGS),
    )

    logging_rate = En.v(
        int,
        "logging_rate",
        default=DEFAULT_LOGGING_RATE,
        help_type="Int",
        help="Seconds between two records emitted from the same line of code. 0 disables rate limiting",
        validator=_validate_non_negative_int,
    )


config = EncodingConfig()
