"""
PDF Content Stream 문법

피연산자들 다음에 연산자 하나가 오는 연산(Operation)의 나열.

주요 연산자 예:
- BT/ET: 텍스트 블록 시작/끝
- Tf: 폰트 설정
- Td, TD, Tm, T*: 위치 이동
- Tj, TJ, ', ": 텍스트 출력

연산자 이름은 검사하지 않는다. 알파벳으로 된 토큰이면 모두 연산자로 받는다.
피연산자에는 참조(1 0 R)와 스트림이 올 수 없다.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .combinator import alt, eof, lazy, satisfy, seq, tag, take_while
from .lexer import (
    boolean, hexadecimal, hexadecimal_string, integer, literal, literal_string,
    name, null, real
)
from .objects import Dictionary, Name, PdfObject


# Content Stream 공백 (주석은 인식하지 않음)
CONTENT_WHITESPACE = b' \t\r\n\x0c\x00'
OPERATOR_PUNCTUATION = b"*'\""


@dataclass
class Operation:
    """연산자 하나와 그 피연산자들"""
    operator: str
    operands: List[PdfObject] = field(default_factory=list)


@dataclass
class Content:
    """파싱된 Content Stream - 순서는 원본 그대로"""
    operations: List[Operation] = field(default_factory=list)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def operators(self) -> List[str]:
        return [op.operator for op in self.operations]


def _is_operator_start(c: int) -> bool:
    return (0x41 <= c <= 0x5A) or (0x61 <= c <= 0x7A) or c in OPERATOR_PUNCTUATION


def _is_operator_char(c: int) -> bool:
    # d0, d1 처럼 첫 글자 뒤에는 숫자도 허용
    return _is_operator_start(c) or 0x30 <= c <= 0x39


content_space = take_while(lambda c: c in CONTENT_WHITESPACE).discard()

operator = (
    seq(satisfy(_is_operator_start, 'operator'), take_while(_is_operator_char))
    .recognize()
    .convert(lambda op: op.decode('ascii'))
)
operator.name = 'operator'

_operand = lazy(lambda: operand)

# 배열/딕셔너리 안에도 참조는 올 수 없다
content_array = (
    tag(b'[').then(content_space)
    .then(_operand.many())
    .skip(tag(b']'))
    .nested()
)

content_dictionary = (
    tag(b'<<').then(content_space)
    .then(seq(name.skip(content_space), _operand).many())
    .skip(tag(b'>>'))
    .map(Dictionary)
    .nested()
)

operand = alt(
    null,
    boolean,
    real,
    integer,
    name.map(Name),
    literal_string.map(literal),
    hexadecimal_string.map(hexadecimal),
    content_array,
    content_dictionary,
).skip(content_space)
operand.name = 'operand'

operation = (
    seq(operand.many(), operator.skip(content_space))
    .map(lambda parts: Operation(operator=parts[1], operands=parts[0]))
)
operation.name = 'operation'

content = (
    content_space
    .then(operation.many())
    .skip(eof())
    .map(lambda operations: Content(operations))
)
content.name = 'content'


def parse_content(data: bytes, max_depth: Optional[int] = None) -> Content:
    """
    Content Stream 전체 파싱

    Raises:
        ParseError: 연산자 없이 끝나는 피연산자 등, 끝까지 소비하지 못했을 때
    """
    result, _ = content.parse(data, 0, max_depth)
    return result
