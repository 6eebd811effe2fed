import logging
import typing
from dataclasses import dataclass

logger = logging.getLogger("corsrelay")

UNKNOWN_ENCODING = "unknown"


@dataclass(frozen=True)
class EncodingValidator:
    name: str
    codec: str

    def accepts(self, data: bytes) -> bool:
        try:
            data.decode(self.codec, errors="strict")
        except UnicodeDecodeError:
            return False
        return True


# Order matters: only bytes that are not valid UTF-8 reach the Latin family.
ENCODING_VALIDATORS: typing.Tuple[EncodingValidator, ...] = (
    EncodingValidator("UTF-8", "utf-8"),
    EncodingValidator("ISO-8859-1", "iso-8859-1"),
    EncodingValidator("ISO-8859-15", "iso-8859-15"),
)


def detect_encoding(
    data: bytes,
    validators: typing.Iterable[EncodingValidator] = ENCODING_VALIDATORS,
) -> str:
    for validator in validators:
        if validator.accepts(data):
            return validator.name
    return UNKNOWN_ENCODING


def to_utf8(
    data: bytes,
    encoding: str,
    validators: typing.Iterable[EncodingValidator] = ENCODING_VALIDATORS,
) -> bytes:
    """Transcode the whole body to UTF-8; unknown encodings pass through."""
    codecs = {v.name: v.codec for v in validators}
    codec = codecs.get(encoding)
    if codec is None:
        logger.debug("No codec for encoding, passing bytes through", extra={"encoding": encoding})
        return data
    if codec == "utf-8":
        return data
    return data.decode(codec).encode("utf-8")


def normalize_to_utf8(
    data: bytes,
    validators: typing.Iterable[EncodingValidator] = ENCODING_VALIDATORS,
) -> typing.Tuple[bytes, str]:
    validators = tuple(validators)
    encoding = detect_encoding(data, validators)
    return to_utf8(data, encoding, validators), encoding
