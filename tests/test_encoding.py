from corsrelay.encoding import (
    ENCODING_VALIDATORS,
    UNKNOWN_ENCODING,
    EncodingValidator,
    detect_encoding,
    normalize_to_utf8,
    to_utf8,
)


def test_validator_order():
    assert [v.name for v in ENCODING_VALIDATORS] == ["UTF-8", "ISO-8859-1", "ISO-8859-15"]


def test_detect_utf8():
    assert detect_encoding("<p>ça va</p>".encode("utf-8")) == "UTF-8"
    assert detect_encoding(b"") == "UTF-8"
    assert detect_encoding(b"plain ascii") == "UTF-8"


def test_detect_latin1_when_not_utf8():
    assert detect_encoding(b"caf\xe9") == "ISO-8859-1"


def test_detect_unknown():
    ascii_only = (EncodingValidator("ASCII", "ascii"),)
    assert detect_encoding(b"\xff\xfe", ascii_only) == UNKNOWN_ENCODING


def test_to_utf8_latin1():
    assert to_utf8(b"na\xefve", "ISO-8859-1") == "naïve".encode("utf-8")


def test_to_utf8_latin9_euro():
    assert to_utf8(b"\xa4", "ISO-8859-15") == "€".encode("utf-8")


def test_to_utf8_unknown_passthrough():
    assert to_utf8(b"\xff\xfe\x00", UNKNOWN_ENCODING) == b"\xff\xfe\x00"


def test_normalize_to_utf8():
    body, encoding = normalize_to_utf8(b"<x>\xe0 bient\xf4t</x>")
    assert encoding == "ISO-8859-1"
    assert body == "<x>à bientôt</x>".encode("utf-8")

    utf8 = "<x>日本</x>".encode("utf-8")
    assert normalize_to_utf8(utf8) == (utf8, "UTF-8")


def test_normalize_unknown_passthrough():
    ascii_only = (EncodingValidator("ASCII", "ascii"),)
    assert normalize_to_utf8(b"\x80abc", ascii_only) == (b"\x80abc", UNKNOWN_ENCODING)
