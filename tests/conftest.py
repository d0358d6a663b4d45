"""Shared fixtures: small PDF documents built in memory with correct offsets."""

import zlib

import pytest


def build_pdf(objects, trailer=b"", version=b"1.4"):
    """
    (번호, 본문) 목록으로 classic XRef 테이블을 가진 PDF 생성

    본문은 'N 0 obj'와 'endobj' 사이에 들어갈 bytes.
    """
    out = b"%PDF-" + version + b"\n%\xe2\xe3\xcf\xd3\n"
    offsets = {}
    for number, body in objects:
        offsets[number] = len(out)
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_pos = len(out)
    size = max(offsets) + 1
    out += b"xref\n0 %d\n" % size
    out += b"0000000000 65535 f \n"
    for number in range(1, size):
        if number in offsets:
            out += b"%010d 00000 n \n" % offsets[number]
        else:
            out += b"0000000000 65535 f \n"
    out += b"trailer\n<< /Size %d " % size + trailer + b">>\n"
    out += b"startxref\n%d\n%%%%EOF\n" % xref_pos
    return out


def build_xref_stream_pdf():
    """
    XRef 스트림 + Object Stream을 쓰는 PDF 1.5 문서

    1: Catalog (일반 객체)
    2: Object Stream (객체 3을 담음)
    3: Pages (압축 객체)
    4: XRef 스트림
    """
    out = b"%PDF-1.5\n"
    offsets = {}

    offsets[1] = len(out)
    out += b"1 0 obj\n<< /Type /Catalog /Pages 3 0 R >>\nendobj\n"

    packed = b"3 0 << /Type /Pages /Count 0 >>"
    compressed = zlib.compress(packed)
    offsets[2] = len(out)
    out += (b"2 0 obj\n<< /Type /ObjStm /N 1 /First 4 /Filter /FlateDecode /Length %d >>\nstream\n"
            % len(compressed) + compressed + b"\nendstream\nendobj\n")

    offsets[4] = len(out)
    rows = [
        bytes([0, 0, 0, 0]),
        bytes([1]) + offsets[1].to_bytes(2, 'big') + bytes([0]),
        bytes([1]) + offsets[2].to_bytes(2, 'big') + bytes([0]),
        bytes([2, 0, 2, 0]),
        bytes([1]) + offsets[4].to_bytes(2, 'big') + bytes([0]),
    ]
    entries = zlib.compress(b"".join(rows))
    out += (b"4 0 obj\n<< /Type /XRef /Size 5 /W [1 2 1] /Root 1 0 R "
            b"/Filter /FlateDecode /Length %d >>\nstream\n" % len(entries)
            + entries + b"\nendstream\nendobj\n")
    out += b"startxref\n%d\n%%%%EOF\n" % offsets[4]
    return out


@pytest.fixture
def simple_pdf():
    return build_pdf(
        [
            (1, b"<< /Type /Catalog /Pages 2 0 R >>"),
            (2, b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>"),
            (3, b"<< /Type /Page /Parent 2 0 R /Contents 4 0 R >>"),
            (4, b"<< /Length 5 0 R >>\nstream\nBT /F1 12 Tf (Hi) Tj ET\nendstream"),
            (5, b"23"),
        ],
        trailer=b"/Root 1 0 R ",
    )


@pytest.fixture
def xref_stream_pdf():
    return build_xref_stream_pdf()
