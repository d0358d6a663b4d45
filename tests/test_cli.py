"""Tests for the pdfgrammar command line."""

import pytest

from pdfgrammar.__main__ import main


@pytest.fixture
def pdf_path(tmp_path, simple_pdf):
    path = tmp_path / "doc.pdf"
    path.write_bytes(simple_pdf)
    return str(path)


def test_info(pdf_path, capsys):
    assert main([pdf_path]) == 0
    out = capsys.readouterr().out
    assert "버전: 1.4" in out
    assert "XRef Size: 6" in out
    assert "/Root: Ref(1 0 R)" in out

def test_xref(pdf_path, capsys):
    assert main([pdf_path, '--xref']) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5
    assert lines[0].split()[0] == "1"

def test_object(pdf_path, capsys):
    assert main([pdf_path, '--object', '1']) == 0
    assert "/Catalog" in capsys.readouterr().out

def test_stream_object(pdf_path, capsys):
    assert main([pdf_path, '-o', '4']) == 0
    assert "stream: 23 bytes" in capsys.readouterr().out

def test_missing_object(pdf_path, capsys):
    assert main([pdf_path, '--object', '42']) == 1
    assert "42 0" in capsys.readouterr().err

def test_content(pdf_path, capsys):
    assert main([pdf_path, '--content', '4']) == 0
    assert capsys.readouterr().out.splitlines() == [
        "BT",
        "/F1 12 Tf",
        "(Hi) Tj",
        "ET",
    ]

def test_content_of_non_stream(pdf_path, capsys):
    assert main([pdf_path, '--content', '1']) == 1

def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.pdf")]) == 1
    assert "파일을 찾을 수 없습니다" in capsys.readouterr().err

def test_invalid_pdf(tmp_path, capsys):
    path = tmp_path / "bad.pdf"
    path.write_bytes(b"hello world")
    assert main([str(path)]) == 1
    assert "오류" in capsys.readouterr().err
