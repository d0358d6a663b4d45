"""
PDF Grammar Core Module
"""
from .errors import (
    PDFSyntaxError, ParseError, Mismatch, Incomplete, FatalParseError, NestingTooDeep
)
from .objects import (
    ObjectId, Reference, Name, PdfString, StringFormat, Dictionary, Stream,
    PdfObject, as_int
)
from .xref import Xref, XrefEntry, NormalEntry, CompressedEntry, decode_xref_stream
from .parser import (
    Reader, NullReader,
    direct_object, indirect_object, stream, header, xref_table, trailer,
    xref_and_trailer, xref_start,
    parse_direct_object, parse_indirect_object, parse_header,
    parse_xref_and_trailer, parse_xref_start,
)
from .content_stream import Content, Operation, parse_content
from .stream_decoder import StreamDecoder, decode_stream
from .reader import DocumentReader, resolve_deferred_stream, read_pdf

__all__ = [
    # Errors
    'PDFSyntaxError', 'ParseError', 'Mismatch', 'Incomplete', 'FatalParseError', 'NestingTooDeep',
    # Objects
    'ObjectId', 'Reference', 'Name', 'PdfString', 'StringFormat', 'Dictionary', 'Stream',
    'PdfObject', 'as_int',
    # XRef
    'Xref', 'XrefEntry', 'NormalEntry', 'CompressedEntry', 'decode_xref_stream',
    # Grammar
    'Reader', 'NullReader',
    'direct_object', 'indirect_object', 'stream', 'header', 'xref_table', 'trailer',
    'xref_and_trailer', 'xref_start',
    'parse_direct_object', 'parse_indirect_object', 'parse_header',
    'parse_xref_and_trailer', 'parse_xref_start',
    # Content Stream
    'Content', 'Operation', 'parse_content',
    # Reader
    'StreamDecoder', 'decode_stream', 'DocumentReader', 'resolve_deferred_stream', 'read_pdf',
]
