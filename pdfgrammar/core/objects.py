"""
PDF 객체 모델

Python 값과의 대응:
- Null        -> None
- Boolean     -> bool
- Integer     -> int
- Real        -> float
- String      -> PdfString (bytes + 형식)
- Name        -> Name (bytes)
- Array       -> list
- Dictionary  -> Dictionary (bytes 키)
- Stream      -> Stream
- Reference   -> Reference (ObjectId)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class StringFormat(Enum):
    """문자열 표기 형식"""
    LITERAL = "literal"              # (Hello)
    HEXADECIMAL = "hexadecimal"      # <48656C6C6F>


@dataclass(frozen=True)
class ObjectId:
    """간접 객체 식별자 (객체 번호, 세대 번호)"""
    number: int
    generation: int = 0

    def __post_init__(self):
        if not 0 <= self.number <= 0xFFFFFFFF:
            raise ValueError(f"object number out of range: {self.number}")
        if not 0 <= self.generation <= 0xFFFF:
            raise ValueError(f"generation number out of range: {self.generation}")

    def __repr__(self):
        return f"ObjectId({self.number} {self.generation})"


@dataclass(frozen=True)
class Reference:
    """객체 참조 (예: 1 0 R)"""
    id: ObjectId

    def __repr__(self):
        return f"Ref({self.id.number} {self.id.generation} R)"


@dataclass(frozen=True)
class Name:
    """Name 객체 (/Type) - '/'와 #XX 이스케이프는 제거된 값"""
    value: bytes

    def __repr__(self):
        return f"/{self.value.decode('latin-1')}"


@dataclass(frozen=True)
class PdfString:
    """문자열 객체"""
    value: bytes
    format: StringFormat = StringFormat.LITERAL

    def __repr__(self):
        if self.format is StringFormat.HEXADECIMAL:
            return f"<{self.value.hex()}>"
        return f"({self.value.decode('latin-1')})"


class Dictionary(dict):
    """Name(bytes) -> 객체 매핑. 같은 키는 나중 값이 이긴다"""

    def get_int(self, key: bytes) -> Optional[int]:
        """key의 값이 정수일 때만 반환"""
        return as_int(self.get(key))

    def get_name(self, key: bytes) -> Optional[bytes]:
        value = self.get(key)
        return value.value if isinstance(value, Name) else None


@dataclass
class Stream:
    """
    스트림 객체

    content가 있으면 길이를 알고 읽은 상태,
    없으면 start_position에서 데이터가 시작한다는 것만 기록한 상태 (deferred)
    """
    dictionary: Dictionary
    content: Optional[bytes] = None
    start_position: Optional[int] = None

    @property
    def is_deferred(self) -> bool:
        return self.content is None

    def set_content(self, content: bytes):
        """deferred 상태를 한 번만 확정"""
        if self.content is not None:
            raise ValueError("stream content is already resolved")
        self.content = bytes(content)

    def __repr__(self):
        if self.content is None:
            return f"Stream({self.dictionary!r}, deferred at {self.start_position})"
        return f"Stream({self.dictionary!r}, {len(self.content)} bytes)"


PdfObject = Union[None, bool, int, float, PdfString, Name, list, Dictionary, Stream, Reference]


def as_int(value: Any) -> Optional[int]:
    """Integer 객체면 int, 아니면 None (bool은 제외)"""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None
