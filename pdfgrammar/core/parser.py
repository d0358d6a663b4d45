"""
PDF 객체 문법과 문서 구조 문법

1. 객체: null, boolean, 참조(1 0 R), 실수, 정수, Name, 문자열, 배열, 딕셔너리, 스트림
2. 간접 객체: id gen obj ... endobj
3. 문서 구조: 헤더, XRef 테이블, trailer, XRef 스트림, startxref

모든 파서는 메모리 위의 bytes와 시작 위치만 받는다. 파일 I/O는 하지 않는다.
스트림의 /Length가 참조일 때만 Reader 협력자에게 객체를 물어본다.
"""

import logging
from typing import Callable, List, Optional, Protocol, Tuple

from .combinator import (
    Parser, Source, alt, lazy, one_of, seq, success, tag, take, take_while
)
from .errors import FatalParseError, ParseError, PDFSyntaxError
from .lexer import (
    boolean, comment, eol, hexadecimal, hexadecimal_string, integer, literal,
    literal_string, name, null, real, space, unsigned
)
from .objects import Dictionary, Name, ObjectId, PdfObject, Reference, Stream, as_int
from .xref import NormalEntry, Xref, decode_xref_stream

log = logging.getLogger(__name__)


class Reader(Protocol):
    """
    객체 조회 협력자

    파싱 도중에 호출될 수 있어야 하고, 순환 참조 방지(메모이제이션 등)는
    Reader의 책임이다.
    """

    def get_object(self, id: ObjectId) -> Optional[PdfObject]:
        ...


class NullReader:
    """아무 객체도 모르는 Reader - 참조된 /Length는 항상 미확정"""

    def get_object(self, id: ObjectId) -> Optional[PdfObject]:
        return None


XrefStreamDecoder = Callable[[Stream], Tuple[Xref, Dictionary]]


# ---------------------------------------------------------------------------
# 객체
# ---------------------------------------------------------------------------

object_id = seq(unsigned.skip(space), unsigned.skip(space)).convert(lambda ids: ObjectId(*ids))
object_id.name = 'object id'

reference = object_id.skip(tag(b'R')).map(Reference)
reference.name = 'reference'


def _fold_entries(entries: List[Tuple[bytes, PdfObject]]) -> Dictionary:
    result = Dictionary()
    for key, value in entries:
        result[key] = value
    return result


_direct_object = lazy(lambda: direct_object)

array = (
    tag(b'[').then(space)
    .then(_direct_object.many())
    .skip(tag(b']'))
    .nested()
)
array.name = 'array'

dictionary = (
    tag(b'<<').then(space)
    .then(seq(name.skip(space), _direct_object).many())
    .skip(tag(b'>>'))
    .map(_fold_entries)
    .nested()
)
dictionary.name = 'dictionary'

# 순서 중요: 참조(id gen R)는 정수보다 먼저 시도
_object_alternatives = [
    null,
    boolean,
    reference,
    real,
    integer,
    name.map(Name),
    literal_string.map(literal),
    hexadecimal_string.map(hexadecimal),
    array,
]

direct_object = alt(*_object_alternatives, dictionary).skip(space)
direct_object.name = 'object'


# ---------------------------------------------------------------------------
# 스트림
# ---------------------------------------------------------------------------

def _stream_length(stream_dict: Dictionary, reader: Reader) -> Optional[int]:
    """/Length 값 - 참조면 Reader로 해석, 알 수 없으면 None"""
    value = stream_dict.get(b'Length')
    if isinstance(value, Reference):
        length = as_int(reader.get_object(value.id))
        if length is None:
            log.debug("stream /Length %r could not be resolved", value)
        return length
    return as_int(value)


_stream_keyword = seq(space, tag(b'stream'), eol)


def _stream_body(stream_dict: Dictionary, reader: Reader) -> Parser:
    """
    'stream' 키워드 이후: 길이를 알면 본문과 endstream, 모르면 위치만 기록

    키워드 뒤에서는 되돌아가지 않는다. Reader의 오류도 FatalParseError가 된다.
    """
    def _body(source: Source, pos: int):
        try:
            length = _stream_length(stream_dict, reader)
        except PDFSyntaxError as e:
            raise FatalParseError(f"cannot resolve stream /Length: {e.message}", pos) from e
        if length is not None and (length < 0 or pos + length > source.length):
            log.debug("stream /Length %d at %d runs past the buffer", length, pos)
            length = None

        if length is None:
            # 실제 끝은 이후 단계에서 찾는다
            return Stream(stream_dict, start_position=pos), pos

        content, pos = take(length).run(source, pos)
        _, pos = eol.optional().run(source, pos)
        _, pos = tag(b'endstream').expect('endstream').run(source, pos)
        return Stream(stream_dict, content=content), pos
    return Parser(_body, 'stream')


def stream(reader: Reader) -> Parser:
    """딕셔너리 + stream 키워드 + 본문"""
    return dictionary.bind(lambda d: _stream_keyword.then(_stream_body(d, reader)))


def _dictionary_or_stream(reader: Reader) -> Parser:
    # 딕셔너리를 한 번만 파싱하고 뒤에 stream이 오는지 본다. 키워드만 되돌릴 수 있다
    def _after_dictionary(d: Dictionary) -> Parser:
        return _stream_keyword.optional().bind(
            lambda keyword: success(d) if keyword is None else _stream_body(d, reader))
    return dictionary.bind(_after_dictionary)


def object_parser(reader: Reader) -> Parser:
    """간접 객체 안의 객체 - 직접 객체에 스트림이 추가됨"""
    return alt(*_object_alternatives, _dictionary_or_stream(reader)).skip(space)


def indirect_object(reader: Optional[Reader] = None) -> Parser:
    """id gen obj <객체> [endobj] - endobj 누락은 허용"""
    if reader is None:
        reader = NullReader()
    return seq(
        object_id.skip(tag(b'obj')).skip(space),
        object_parser(reader).skip(space).skip(tag(b'endobj').optional()).skip(space),
    )


# ---------------------------------------------------------------------------
# 문서 구조
# ---------------------------------------------------------------------------

# %PDF-1.7 다음 줄의 바이너리 주석들은 버린다
header = (
    tag(b'%PDF-')
    .then(take_while(lambda c: c not in b'\r\n'))
    .convert(lambda version: version.decode('utf-8'))
    .skip(eol)
    .skip(comment.many())
)
header.name = 'header'

# 20바이트 고정 형식: OOOOOOOOOO GGGGG n/f + 줄바꿈 2바이트
xref_entry = seq(
    unsigned.skip(tag(b' ')),
    unsigned.skip(tag(b' ')),
    one_of(b'nf').map(lambda kind: kind == ord('n')),
).skip(take(2))


def _xref_subsection(start_count: Tuple[int, int]) -> Parser:
    start, count = start_count
    return xref_entry.many(count, count).map(lambda entries: (start, entries))


xref_section = (
    seq(unsigned.skip(tag(b' ')), unsigned)
    .skip(tag(b' ').optional())
    .skip(eol)
    .bind(_xref_subsection)
)


def _fold_sections(sections) -> Xref:
    xref = Xref()
    for start, entries in sections:
        for index, (offset, generation, in_use) in enumerate(entries):
            # free 항목은 정렬을 위해 파싱만 하고 버린다
            if in_use:
                xref.insert(start + index, NormalEntry(offset=offset, generation=generation))
    return xref


xref_table = (
    tag(b'xref').then(eol)
    .then(xref_section.many(1))
    .skip(space)
    .map(_fold_sections)
)
xref_table.name = 'xref table'

trailer = tag(b'trailer').then(space).then(dictionary).skip(space)
trailer.name = 'trailer'


def _classic_xref_and_trailer(source: Source, pos: int):
    (xref, trailer_dict), end = seq(xref_table, trailer).run(source, pos)
    size = trailer_dict.get_int(b'Size')
    if size is None:
        raise FatalParseError("trailer has no integer /Size", pos)
    xref.size = size
    return (xref, trailer_dict), end


def xref_and_trailer(reader: Optional[Reader] = None,
                     decoder: XrefStreamDecoder = decode_xref_stream) -> Parser:
    """XRef 테이블 + trailer, 실패하면 XRef 스트림 객체로 해석"""
    def _as_xref_stream(pair):
        _, obj = pair
        if not isinstance(obj, Stream):
            raise ValueError("Xref is not a stream object")
        return decoder(obj)

    xref_stream = indirect_object(reader).convert(_as_xref_stream)

    def _xref_and_trailer(source: Source, pos: int):
        try:
            return _classic_xref_and_trailer(source, pos)
        except ParseError as e:
            log.debug("no xref table at %d (%s), trying xref stream", pos, e.message)
        return xref_stream.run(source, pos)
    return Parser(_xref_and_trailer, 'xref and trailer')


xref_start = (
    tag(b'startxref').then(eol)
    .then(integer)
    .skip(eol)
    .skip(tag(b'%%EOF'))
    .skip(space)
)
xref_start.name = 'startxref'


# ---------------------------------------------------------------------------
# 진입점: (값, 새 위치) 반환, 실패하면 PDFSyntaxError
# ---------------------------------------------------------------------------

def parse_direct_object(data: bytes, pos: int = 0,
                        max_depth: Optional[int] = None) -> Tuple[PdfObject, int]:
    """직접 객체 하나 파싱 (참조는 가능, 스트림은 불가)"""
    return direct_object.parse(data, pos, max_depth)


def parse_indirect_object(data: bytes, pos: int = 0, reader: Optional[Reader] = None,
                          max_depth: Optional[int] = None) -> Tuple[Tuple[ObjectId, PdfObject], int]:
    """pos의 간접 객체를 ((ObjectId, 객체), 새 위치)로"""
    return indirect_object(reader).parse(data, pos, max_depth)


def parse_header(data: bytes, pos: int = 0) -> Tuple[str, int]:
    """%PDF-X.Y 헤더의 버전 문자열"""
    return header.parse(data, pos)


def parse_xref_and_trailer(data: bytes, pos: int, reader: Optional[Reader] = None,
                           decoder: XrefStreamDecoder = decode_xref_stream,
                           max_depth: Optional[int] = None) -> Tuple[Tuple[Xref, Dictionary], int]:
    return xref_and_trailer(reader, decoder).parse(data, pos, max_depth)


def parse_xref_start(data: bytes, pos: int) -> Tuple[int, int]:
    """startxref 뒤의 XRef 오프셋"""
    return xref_start.parse(data, pos)
