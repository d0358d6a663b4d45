"""
XRef (상호 참조) 모델과 XRef 스트림 디코더

- Xref: 객체 번호 -> 항목, 그리고 trailer의 Size
- decode_xref_stream: XRef 스트림 객체를 (Xref, trailer) 쌍으로 변환 (PDF 1.5+)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .objects import Dictionary, Stream, as_int
from .stream_decoder import StreamDecoder

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalEntry:
    """파일 안에 직접 있는 객체"""
    offset: int          # 파일 내 바이트 오프셋
    generation: int      # 세대 번호


@dataclass(frozen=True)
class CompressedEntry:
    """Object Stream 안에 압축된 객체"""
    container: int       # Object Stream의 객체 번호
    index: int           # Object Stream 내 인덱스


XrefEntry = Union[NormalEntry, CompressedEntry]


@dataclass
class Xref:
    """XRef 테이블 - 사용 중인 항목만 담는다"""
    size: int = 0
    entries: Dict[int, XrefEntry] = field(default_factory=dict)

    def get(self, number: int) -> Optional[XrefEntry]:
        return self.entries.get(number)

    def insert(self, number: int, entry: XrefEntry):
        self.entries[number] = entry

    def merge(self, older: 'Xref'):
        """이전 XRef 섹션 병합 - 이미 있는 항목이 우선 (최신 XRef 우선)"""
        for number, entry in older.entries.items():
            self.entries.setdefault(number, entry)
        self.size = max(self.size, older.size)

    def __contains__(self, number: int) -> bool:
        return number in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self.entries))


def _read_bytes_as_int(data: bytes, offset: int, length: int) -> int:
    """바이트 시퀀스를 big-endian 정수로 변환"""
    return int.from_bytes(data[offset:offset + length], 'big')


def _int_list(value, name: str) -> List[int]:
    if not isinstance(value, list):
        raise ValueError(f"XRef stream /{name} is not an array")
    numbers = [as_int(item) for item in value]
    if any(n is None or n < 0 for n in numbers):
        raise ValueError(f"XRef stream /{name} must hold non-negative integers")
    return numbers


def decode_xref_stream(stream: Stream) -> Tuple[Xref, Dictionary]:
    """
    XRef 스트림 디코딩

    W 배열: [타입 필드 크기, 값1 크기, 값2 크기]
    Index 배열: [시작1, 개수1, 시작2, 개수2, ...] (기본값 [0 Size])

    Raises:
        ValueError: 필수 키가 없거나 스트림 본문을 읽을 수 없을 때
    """
    trailer = stream.dictionary
    size = trailer.get_int(b'Size')
    if size is None:
        raise ValueError("XRef stream has no /Size")
    widths = _int_list(trailer.get(b'W'), 'W')
    if len(widths) < 3:
        raise ValueError(f"XRef stream /W needs 3 entries, got {len(widths)}")
    w0, w1, w2 = widths[:3]
    index = _int_list(trailer.get(b'Index', [0, size]), 'Index')

    try:
        data = StreamDecoder.decode(stream)
    except NotImplementedError as e:
        raise ValueError(f"cannot decode XRef stream: {e}") from e
    entry_size = w0 + w1 + w2
    if entry_size == 0:
        raise ValueError("XRef stream /W describes empty entries")

    xref = Xref(size=size)
    pos = 0
    for i in range(0, len(index) - 1, 2):
        start, count = index[i], index[i + 1]
        for j in range(count):
            if pos + entry_size > len(data):
                log.debug("XRef stream truncated after %d bytes", pos)
                return xref, trailer

            # 타입 필드가 없으면 1 (사용 중)
            kind = _read_bytes_as_int(data, pos, w0) if w0 > 0 else 1
            field1 = _read_bytes_as_int(data, pos + w0, w1)
            field2 = _read_bytes_as_int(data, pos + w0 + w1, w2)
            pos += entry_size

            if kind == 1:
                xref.insert(start + j, NormalEntry(offset=field1, generation=field2))
            elif kind == 2:
                xref.insert(start + j, CompressedEntry(container=field1, index=field2))
            # 0 (free) 및 알 수 없는 타입은 버린다

    return xref, trailer
