import pytest

from timed_lyrics.lrc.timecode import InvalidTimeFormat, decode, encode, format_tag, split


def test_decode_basic():
    assert decode("01:02.50") == 62500
    assert decode("00:00.10") == 100
    assert decode("1:2.5") == 62050


def test_decode_does_not_bound_seconds():
    # the validator reports seconds >= 60, the codec just converts
    assert decode("00:60.00") == 60000
    assert split("00:61.20") == (0, 61, 20)


@pytest.mark.parametrize("bad", ["", "00:01", "aa:bb.cc", "00:01.00 ", "[00:01.00]", "00:01.00\n"])
def test_decode_rejects_malformed(bad):
    with pytest.raises(InvalidTimeFormat):
        decode(bad)


def test_encode_pads_and_truncates():
    assert encode(0) == "00:00.00"
    assert encode(62500) == "01:02.50"
    assert encode(1005) == "00:01.00"
    assert encode(3_599_990) == "59:59.99"
    assert format_tag(100) == "[00:00.10]"


def test_encode_rejects_negative():
    with pytest.raises(ValueError):
        encode(-10)


def test_round_trip_within_an_hour():
    for ms in range(0, 3_600_000, 7_130):
        assert decode(encode(ms)) == ms
    assert decode(encode(3_599_990)) == 3_599_990
