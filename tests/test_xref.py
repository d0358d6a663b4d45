"""Tests for the xref model, xref streams and stream filters."""

import zlib

import pytest

from pdfgrammar.core.objects import Dictionary, Name, Stream
from pdfgrammar.core.stream_decoder import StreamDecoder, decode_stream
from pdfgrammar.core.xref import CompressedEntry, NormalEntry, Xref, decode_xref_stream


def make_stream(content, **entries):
    dictionary = Dictionary({key.encode('ascii'): value for key, value in entries.items()})
    dictionary[b'Length'] = len(content)
    return Stream(dictionary, content=content)


# ---------------------------------------------------------------------------
# Xref
# ---------------------------------------------------------------------------

def test_xref_insert_and_iterate_sorted():
    xref = Xref(size=10)
    xref.insert(5, NormalEntry(500, 0))
    xref.insert(2, CompressedEntry(9, 0))
    assert list(xref) == [2, 5]
    assert len(xref) == 2
    assert 5 in xref and 3 not in xref
    assert xref.get(3) is None

def test_xref_merge_keeps_newer_entries():
    newer = Xref(size=4, entries={1: NormalEntry(100, 0), 3: NormalEntry(300, 1)})
    older = Xref(size=6, entries={1: NormalEntry(10, 0), 5: NormalEntry(50, 0)})
    newer.merge(older)
    assert newer.entries == {
        1: NormalEntry(100, 0),
        3: NormalEntry(300, 1),
        5: NormalEntry(50, 0),
    }
    assert newer.size == 6


# ---------------------------------------------------------------------------
# xref streams
# ---------------------------------------------------------------------------

ENTRIES = bytes([
    0, 0, 0, 255,
    1, 0, 16, 0,
    2, 0, 5, 3,
])

def test_decode_xref_stream():
    xref, trailer = decode_xref_stream(make_stream(ENTRIES, Size=3, W=[1, 2, 1]))
    assert xref.size == 3
    assert xref.entries == {
        1: NormalEntry(offset=16, generation=0),
        2: CompressedEntry(container=5, index=3),
    }
    assert trailer.get_int(b'Size') == 3

def test_decode_xref_stream_flate():
    stream = make_stream(zlib.compress(ENTRIES), Size=3, W=[1, 2, 1], Filter=Name(b'FlateDecode'))
    xref, _ = decode_xref_stream(stream)
    assert xref.get(1) == NormalEntry(16, 0)

def test_decode_xref_stream_with_png_predictor():
    # 각 행 앞에 PNG Up 필터(2)
    rows = bytes([2, 1, 0, 16, 0, 2, 0, 0, 16, 0])
    stream = make_stream(
        zlib.compress(rows), Size=2, W=[1, 2, 1], Index=[4, 2],
        Filter=Name(b'FlateDecode'),
        DecodeParms=Dictionary({b'Predictor': 12, b'Columns': 4}),
    )
    xref, _ = decode_xref_stream(stream)
    assert xref.entries == {
        4: NormalEntry(offset=16, generation=0),
        5: NormalEntry(offset=32, generation=0),
    }

def test_decode_xref_stream_index_subsections():
    data = bytes([1, 0, 10, 0, 1, 0, 20, 0, 1, 0, 30, 0])
    xref, _ = decode_xref_stream(make_stream(data, Size=20, W=[1, 2, 1], Index=[0, 1, 10, 2]))
    assert xref.entries == {
        0: NormalEntry(10, 0),
        10: NormalEntry(20, 0),
        11: NormalEntry(30, 0),
    }

def test_decode_xref_stream_missing_type_field():
    data = bytes([0, 9, 0, 0, 12, 1])
    xref, _ = decode_xref_stream(make_stream(data, Size=2, W=[0, 2, 1]))
    assert xref.entries == {0: NormalEntry(9, 0), 1: NormalEntry(12, 1)}

def test_decode_xref_stream_truncated():
    xref, _ = decode_xref_stream(make_stream(ENTRIES[:6], Size=3, W=[1, 2, 1]))
    assert xref.entries == {}
    assert xref.size == 3

def test_decode_xref_stream_unsupported_filter():
    stream = make_stream(ENTRIES, Size=3, W=[1, 2, 1], Filter=Name(b'LZWDecode'))
    with pytest.raises(ValueError):
        decode_xref_stream(stream)

def test_decode_xref_stream_requires_size():
    with pytest.raises(ValueError):
        decode_xref_stream(make_stream(ENTRIES, W=[1, 2, 1]))

def test_decode_xref_stream_requires_widths():
    with pytest.raises(ValueError):
        decode_xref_stream(make_stream(ENTRIES, Size=3, W=[1, 2]))
    with pytest.raises(ValueError):
        decode_xref_stream(make_stream(ENTRIES, Size=3, W=Name(b'W')))


# ---------------------------------------------------------------------------
# stream filters
# ---------------------------------------------------------------------------

def test_decode_unfiltered():
    assert decode_stream(make_stream(b"BT ET")) == b"BT ET"

def test_decode_filter_chain():
    data = zlib.compress(b"hello").hex().encode('ascii') + b">"
    stream = make_stream(data, Filter=[Name(b'ASCIIHexDecode'), Name(b'FlateDecode')])
    assert decode_stream(stream) == b"hello"

def test_decode_raw_deflate():
    compressor = zlib.compressobj(wbits=-15)
    data = compressor.compress(b"raw deflate") + compressor.flush()
    assert StreamDecoder.decode_flate(data) == b"raw deflate"

def test_decode_corrupt_flate():
    with pytest.raises(ValueError):
        StreamDecoder.decode_flate(b"not compressed at all")

def test_decode_deferred_stream():
    with pytest.raises(ValueError):
        decode_stream(Stream(Dictionary(), start_position=10))

def test_decode_unknown_filter():
    with pytest.raises(NotImplementedError):
        decode_stream(make_stream(b"x", Filter=Name(b'JBIG2Decode')))

def test_png_sub_predictor():
    assert StreamDecoder.apply_predictor(bytes([1, 5, 3]), 11, 2) == bytes([5, 8])

def test_tiff_predictor():
    assert StreamDecoder.apply_predictor(bytes([1, 2, 3]), 2, 3) == bytes([1, 3, 6])
