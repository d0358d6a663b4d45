"""
버퍼 기반 Reader

문법 바깥의 협력자. 메모리 위의 PDF 전체를 받아서
1. 헤더 버전 확인
2. 파일 끝에서 startxref 위치를 찾아 XRef + trailer 파싱 (/Prev 체인 포함)
3. get_object()로 객체를 필요할 때 파싱 (메모이제이션, 순환 참조 방지, 깊이 제한)
4. 길이를 몰라 deferred 상태인 스트림은 endstream을 찾아 확정
"""

import logging
from typing import Dict, Iterator, Optional, Set, Tuple

from .. import settings
from .combinator import seq
from .errors import Mismatch, PDFSyntaxError
from .lexer import space, unsigned
from .objects import Dictionary, ObjectId, PdfObject, Stream
from .parser import (
    NullReader, Reader, XrefStreamDecoder, parse_direct_object, parse_header,
    parse_indirect_object, parse_xref_and_trailer, parse_xref_start
)
from .stream_decoder import StreamDecoder
from .xref import CompressedEntry, NormalEntry, Xref, decode_xref_stream

log = logging.getLogger(__name__)

__all__ = ['Reader', 'NullReader', 'DocumentReader', 'resolve_deferred_stream', 'read_pdf']


def resolve_deferred_stream(stream: Stream, data: bytes) -> bool:
    """
    deferred 스트림의 본문을 endstream 앞까지로 확정

    Returns:
        확정했으면 True, endstream을 찾지 못하면 False (deferred 유지)
    """
    if not stream.is_deferred:
        return True
    start = stream.start_position
    end = data.find(b'endstream', start)
    if end == -1:
        return False

    # endstream 앞의 EOL 하나 제거
    if end - start >= 2 and data[end - 2:end] == b'\r\n':
        end -= 2
    elif end > start and data[end - 1:end] in (b'\n', b'\r'):
        end -= 1
    stream.set_content(data[start:end])
    return True


_object_stream_pair = seq(unsigned.skip(space), unsigned.skip(space))


class DocumentReader:
    """PDF 버퍼 전체를 감싸는 Reader 구현"""

    def __init__(self, data: bytes, decoder: XrefStreamDecoder = decode_xref_stream,
                 max_resolve_depth: Optional[int] = None, max_depth: Optional[int] = None,
                 strict: Optional[bool] = None):
        self.data = bytes(data)
        self.decoder = decoder
        self.max_resolve_depth = settings.MAX_RESOLVE_DEPTH if max_resolve_depth is None else max_resolve_depth
        self.max_depth = max_depth
        self.strict = settings.STRICT if strict is None else strict

        self.version = ""
        self.xref = Xref()
        self.trailer = Dictionary()

        self._cache: Dict[ObjectId, PdfObject] = {}
        self._in_progress: Set[ObjectId] = set()
        # Object Stream 번호 -> (디코딩된 데이터, First, {객체 번호: 상대 오프셋})
        self._object_streams: Dict[int, Tuple[bytes, int, Dict[int, int]]] = {}

    @classmethod
    def from_file(cls, filepath: str, **kwargs) -> 'DocumentReader':
        with open(filepath, 'rb') as f:
            data = f.read()
        return cls(data, **kwargs).load()

    # ------------------------------------------------------------------
    # 로딩
    # ------------------------------------------------------------------

    def load(self) -> 'DocumentReader':
        """헤더, XRef, trailer 파싱"""
        header_pos = self.data.find(b'%PDF-')
        if header_pos == -1:
            raise Mismatch("Invalid PDF: missing header", 0)
        self.version, _ = parse_header(self.data, header_pos)

        self.xref, self.trailer = self._read_xref_chain(self.find_xref_start())
        log.debug("loaded PDF %s with %d xref entries", self.version, len(self.xref))
        return self

    def find_xref_start(self) -> int:
        """파일 끝쪽의 startxref 값"""
        pos = self.data.rfind(b'startxref')
        if pos == -1:
            raise Mismatch("Invalid PDF: missing startxref", len(self.data))
        offset, _ = parse_xref_start(self.data, pos)
        return offset

    def _read_xref_chain(self, offset: int) -> Tuple[Xref, Dictionary]:
        """XRef 섹션을 /Prev를 따라 읽는다 - 최신 섹션의 항목이 우선"""
        xref: Optional[Xref] = None
        trailer = Dictionary()
        seen: Set[int] = set()

        while offset is not None:
            if offset in seen:
                log.warning("xref /Prev chain loops back to %d", offset)
                break
            seen.add(offset)

            (section, section_trailer), _ = parse_xref_and_trailer(
                self.data, offset, self, self._decode_xref_stream, self.max_depth)
            if xref is None:
                xref, trailer = section, section_trailer
            else:
                xref.merge(section)
            offset = section_trailer.get_int(b'Prev')

        return xref, trailer

    def _decode_xref_stream(self, stream: Stream) -> Tuple[Xref, Dictionary]:
        # XRef 스트림의 /Length가 참조면 아직 해석할 수 없으므로 endstream으로 확정
        if stream.is_deferred:
            resolve_deferred_stream(stream, self.data)
        return self.decoder(stream)

    # ------------------------------------------------------------------
    # 객체 조회
    # ------------------------------------------------------------------

    def get_object(self, id: ObjectId) -> Optional[PdfObject]:
        """id의 객체 - 없거나 해석할 수 없으면 None"""
        if id in self._cache:
            return self._cache[id]
        if id in self._in_progress:
            log.warning("reference cycle while resolving %r", id)
            return None
        if len(self._in_progress) >= self.max_resolve_depth:
            log.warning("resolution deeper than %d at %r", self.max_resolve_depth, id)
            return None

        entry = self.xref.get(id.number)
        if entry is None:
            return None

        self._in_progress.add(id)
        try:
            if isinstance(entry, CompressedEntry):
                obj = self._load_compressed(id, entry)
            else:
                obj = self._load_normal(id, entry)
        finally:
            self._in_progress.discard(id)

        if obj is not None:
            self._cache[id] = obj
        return obj

    def get(self, number: int, generation: int = 0) -> Optional[PdfObject]:
        return self.get_object(ObjectId(number, generation))

    def iter_objects(self) -> Iterator[Tuple[ObjectId, PdfObject]]:
        """XRef에 등록된 모든 객체 (해석 실패는 건너뜀)"""
        for number in self.xref:
            entry = self.xref.get(number)
            generation = entry.generation if isinstance(entry, NormalEntry) else 0
            id = ObjectId(number, generation)
            obj = self.get_object(id)
            if obj is not None:
                yield id, obj

    def _load_normal(self, id: ObjectId, entry: NormalEntry) -> Optional[PdfObject]:
        if entry.generation != id.generation:
            return None
        try:
            (found_id, obj), _ = parse_indirect_object(self.data, entry.offset, self, self.max_depth)
        except PDFSyntaxError as e:
            if self.strict:
                raise
            log.warning("cannot parse object %r at %d: %s", id, entry.offset, e)
            return None

        if found_id != id:
            if self.strict:
                raise Mismatch(f"expected object {id!r}, found {found_id!r}", entry.offset)
            log.warning("expected object %r at %d, found %r", id, entry.offset, found_id)
            return None

        if isinstance(obj, Stream) and obj.is_deferred:
            if not resolve_deferred_stream(obj, self.data):
                log.warning("no endstream for %r after %d", id, obj.start_position)
        return obj

    def _load_compressed(self, id: ObjectId, entry: CompressedEntry) -> Optional[PdfObject]:
        if id.generation != 0:
            return None
        loaded = self._object_stream(entry.container)
        if loaded is None:
            return None

        data, first, offsets = loaded
        if id.number not in offsets:
            log.warning("object %r not in object stream %d", id, entry.container)
            return None
        try:
            obj, _ = parse_direct_object(data, first + offsets[id.number], self.max_depth)
        except PDFSyntaxError as e:
            if self.strict:
                raise
            log.warning("cannot parse object %r in object stream %d: %s", id, entry.container, e)
            return None
        return obj

    def _object_stream(self, number: int) -> Optional[Tuple[bytes, int, Dict[int, int]]]:
        """Object Stream (ObjStm) 디코딩과 헤더 파싱, 결과는 캐시"""
        if number in self._object_streams:
            return self._object_streams[number]

        container = self.get_object(ObjectId(number, 0))
        if not isinstance(container, Stream) or container.dictionary.get_name(b'Type') != b'ObjStm':
            log.warning("object %d is not an object stream", number)
            return None

        n = container.dictionary.get_int(b'N') or 0
        first = container.dictionary.get_int(b'First') or 0
        try:
            data = StreamDecoder.decode(container)
            # 헤더: obj_num1 offset1 obj_num2 offset2 ...
            pairs, _ = space.then(_object_stream_pair.many(n, n)).parse(data, 0, self.max_depth)
        except (ValueError, NotImplementedError) as e:
            log.warning("cannot read object stream %d: %s", number, e)
            return None

        loaded = (data, first, {obj_num: offset for obj_num, offset in pairs})
        self._object_streams[number] = loaded
        return loaded


def read_pdf(data: bytes, **kwargs) -> DocumentReader:
    """bytes에서 DocumentReader를 만들고 로드"""
    return DocumentReader(data, **kwargs).load()
