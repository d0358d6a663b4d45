"""Tests for content stream parsing."""

import pytest

from pdfgrammar.core.content_stream import Operation, parse_content
from pdfgrammar.core.errors import NestingTooDeep, ParseError
from pdfgrammar.core.objects import Dictionary, Name, PdfString, StringFormat


SAMPLE = b"""
2 J
BT
/F1 12 Tf
0 Tc
0 Tw
72.5 712 TD
[(Unencoded streams can be read easily) 65 (,) ] TJ
0 -14 TD
[(b) 20 (ut generally tak) 10 (e more space than \\311)] TJ
T* (encoded streams.) Tj
\t\t"""


# ---------------------------------------------------------------------------
# sample page content
# ---------------------------------------------------------------------------

def test_sample_operators_in_order():
    content = parse_content(SAMPLE)
    assert content.operators() == [
        'J', 'BT', 'Tf', 'Tc', 'Tw', 'TD', 'TJ', 'TD', 'TJ', 'T*', 'Tj',
    ]
    assert len(content) == 11

def test_sample_operands():
    operations = list(parse_content(SAMPLE))
    assert operations[0] == Operation('J', [2])
    assert operations[1] == Operation('BT', [])
    assert operations[2] == Operation('Tf', [Name(b'F1'), 12])
    assert operations[5] == Operation('TD', [72.5, 712])
    assert operations[6].operands == [[
        PdfString(b'Unencoded streams can be read easily'), 65, PdfString(b','),
    ]]
    assert operations[7] == Operation('TD', [0, -14])
    assert operations[8].operands[0][-1] == PdfString(b'e more space than \xc9')
    assert operations[9] == Operation('T*', [])
    assert operations[10] == Operation('Tj', [PdfString(b'encoded streams.')])


# ---------------------------------------------------------------------------
# operators
# ---------------------------------------------------------------------------

def test_empty_content():
    assert len(parse_content(b"")) == 0
    assert len(parse_content(b" \r\n\x00 ")) == 0

def test_operator_with_digits():
    content = parse_content(b"0 0 d0 1000 0 0 0 750 750 d1")
    assert content.operators() == ['d0', 'd1']
    assert content.operations[0].operands == [0, 0]

def test_quote_operators():
    content = parse_content(b"(a) '\n1 2 (b) \"")
    assert content.operators() == ["'", '"']
    assert content.operations[1].operands == [1, 2, PdfString(b'b')]

def test_operator_adjacent_to_operand():
    content = parse_content(b"(Hi)Tj/F1 9 Tf")
    assert content.operators() == ['Tj', 'Tf']

def test_hex_string_and_dictionary_operands():
    content = parse_content(b"/Span <</MCID 0>> BDC <00410042> Tj EMC")
    assert content.operations[0] == Operation('BDC', [Name(b'Span'), Dictionary({b'MCID': 0})])
    assert content.operations[1].operands == [
        PdfString(b'\x00A\x00B', StringFormat.HEXADECIMAL)
    ]
    assert content.operators() == ['BDC', 'Tj', 'EMC']

def test_references_are_not_operands():
    content = parse_content(b"1 0 R Tj")
    assert content.operations[0] == Operation('R', [1, 0])
    assert content.operators() == ['R', 'Tj']

def test_references_inside_arrays_are_rejected():
    with pytest.raises(ParseError):
        parse_content(b"[1 0 R] TJ")

def test_nested_array_and_dictionary_operands():
    content = parse_content(b"[[1] (a)] TJ /P << /K [2] >> BDC")
    assert content.operations[0].operands == [[[1], PdfString(b'a')]]
    assert content.operations[1].operands == [Name(b'P'), Dictionary({b'K': [2]})]

def test_keyword_operands():
    content = parse_content(b"true false null op")
    assert content.operations[0].operands == [True, False, None]


# ---------------------------------------------------------------------------
# failures
# ---------------------------------------------------------------------------

def test_trailing_operand_without_operator():
    with pytest.raises(ParseError):
        parse_content(b"BT 1 2")

def test_unbalanced_string():
    with pytest.raises(ParseError):
        parse_content(b"(abc Tj")

def test_nesting_limit():
    with pytest.raises(NestingTooDeep):
        parse_content(b"[" * 50 + b"]" * 50 + b" TJ")
