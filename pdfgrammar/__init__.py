"""
pdfgrammar - PDF 어휘/구문 파서

메모리 위의 bytes를 PDF 객체 모델로 변환
- 객체: null, boolean, 정수, 실수, 문자열, Name, 배열, 딕셔너리, 스트림, 참조
- 문서 구조: 헤더, XRef 테이블/스트림, trailer, startxref
- Content Stream: 연산자/피연산자 목록
- 외부 라이브러리 없이 순수 Python으로 구현

사용법:
    from pdfgrammar import parse_direct_object, parse_content, read_pdf

    obj, end = parse_direct_object(b'<< /Type /Page /Parent 2 0 R >>')
    content = parse_content(b'BT /F1 12 Tf (Hello) Tj ET')

    doc = read_pdf(data)
    page = doc.get(3)
"""
from .core import (
    PDFSyntaxError, ParseError, Mismatch, Incomplete, FatalParseError, NestingTooDeep,
    ObjectId, Reference, Name, PdfString, StringFormat, Dictionary, Stream, as_int,
    Xref, NormalEntry, CompressedEntry, decode_xref_stream,
    Reader, NullReader,
    parse_direct_object, parse_indirect_object, parse_header,
    parse_xref_and_trailer, parse_xref_start,
    Content, Operation, parse_content,
    StreamDecoder, decode_stream, DocumentReader, read_pdf,
)

__version__ = '0.1.0'
__all__ = [
    # Errors
    'PDFSyntaxError', 'ParseError', 'Mismatch', 'Incomplete', 'FatalParseError', 'NestingTooDeep',
    # Objects
    'ObjectId', 'Reference', 'Name', 'PdfString', 'StringFormat', 'Dictionary', 'Stream', 'as_int',
    # XRef
    'Xref', 'NormalEntry', 'CompressedEntry', 'decode_xref_stream',
    # Grammar
    'Reader', 'NullReader',
    'parse_direct_object', 'parse_indirect_object', 'parse_header',
    'parse_xref_and_trailer', 'parse_xref_start',
    # Content Stream
    'Content', 'Operation', 'parse_content',
    # Reader
    'StreamDecoder', 'decode_stream', 'DocumentReader', 'read_pdf',
]
