"""
파서 컴비네이터

모든 문법 조각은 하나의 추상화로 작성된다:
    (source, pos) -> (value, new_pos)
실패하면 ParseError를 발생시키고, alternation은 위치를 되돌려 다음 대안을 시도한다.
FatalParseError는 되돌리지 않는다.
"""

from typing import Any, Callable, List, Optional, Tuple

from .. import settings
from .errors import (
    FatalParseError, Incomplete, Mismatch, NestingTooDeep, ParseError, PDFSyntaxError
)


Result = Tuple[Any, int]


class Source:
    """파싱 대상 바이트와 호출 단위의 중첩 카운터"""

    __slots__ = ('data', 'length', 'depth', 'max_depth')

    def __init__(self, data: bytes, max_depth: Optional[int] = None):
        self.data = bytes(data)
        self.length = len(self.data)
        self.depth = 0
        self.max_depth = settings.MAX_NESTING_DEPTH if max_depth is None else max_depth


class Parser:
    """문법 조각 하나를 감싸는 객체"""

    def __init__(self, fn: Callable[[Source, int], Result], name: str = ''):
        self.fn = fn
        self.name = name

    def __repr__(self):
        return f"Parser({self.name or self.fn.__name__})"

    def run(self, source: Source, pos: int) -> Result:
        return self.fn(source, pos)

    def parse(self, data, pos: int = 0, max_depth: Optional[int] = None) -> Result:
        """bytes(또는 Source)를 pos부터 파싱해서 (값, 끝 위치) 반환"""
        source = data if isinstance(data, Source) else Source(data, max_depth)
        return self.run(source, pos)

    def __or__(self, other: 'Parser') -> 'Parser':
        return alt(self, other)

    def map(self, fn: Callable[[Any], Any]) -> 'Parser':
        def _map(source, pos):
            value, pos = self.fn(source, pos)
            return fn(value), pos
        return Parser(_map, self.name)

    def convert(self, fn: Callable[[Any], Any]) -> 'Parser':
        """map과 같지만 fn의 ValueError / OverflowError를 Mismatch로 바꾼다"""
        def _convert(source, start):
            value, pos = self.fn(source, start)
            try:
                return fn(value), pos
            except PDFSyntaxError:
                raise
            except (ValueError, OverflowError) as e:
                raise Mismatch(f"cannot convert {self.name or 'value'}: {e}", start) from e
        return Parser(_convert, self.name)

    def then(self, other: 'Parser') -> 'Parser':
        """self 다음 other, other의 값만 남긴다"""
        def _then(source, pos):
            _, pos = self.fn(source, pos)
            return other.fn(source, pos)
        return Parser(_then, other.name)

    def skip(self, other: 'Parser') -> 'Parser':
        """self 다음 other, self의 값만 남긴다"""
        def _skip(source, pos):
            value, pos = self.fn(source, pos)
            _, pos = other.fn(source, pos)
            return value, pos
        return Parser(_skip, self.name)

    def bind(self, fn: Callable[[Any], 'Parser']) -> 'Parser':
        """값에 따라 다음 파서를 고른다"""
        def _bind(source, pos):
            value, pos = self.fn(source, pos)
            return fn(value).fn(source, pos)
        return Parser(_bind, self.name)

    def many(self, minimum: int = 0, maximum: Optional[int] = None) -> 'Parser':
        def _many(source, start):
            values: List[Any] = []
            pos = start
            while maximum is None or len(values) < maximum:
                try:
                    value, new_pos = self.fn(source, pos)
                except ParseError:
                    break
                values.append(value)
                if new_pos == pos:
                    # 아무것도 소비하지 않으면 무한 반복
                    break
                pos = new_pos
            if len(values) < minimum:
                raise Mismatch(f"expected at least {minimum} of {self.name or 'item'}", pos)
            return values, pos
        return Parser(_many, self.name)

    def optional(self, default: Any = None) -> 'Parser':
        def _optional(source, pos):
            try:
                return self.fn(source, pos)
            except ParseError:
                return default, pos
        return Parser(_optional, self.name)

    def expect(self, message: str) -> 'Parser':
        """실패를 FatalParseError로 확정"""
        def _expect(source, pos):
            try:
                return self.fn(source, pos)
            except ParseError as e:
                raise FatalParseError(f"expected {message}", e.position) from e
        return Parser(_expect, self.name)

    def nested(self) -> 'Parser':
        """재귀 깊이를 세고 한도를 넘으면 NestingTooDeep"""
        def _nested(source, pos):
            if source.depth >= source.max_depth:
                raise NestingTooDeep(f"nesting deeper than {source.max_depth}", pos)
            source.depth += 1
            try:
                return self.fn(source, pos)
            finally:
                source.depth -= 1
        return Parser(_nested, self.name)

    def discard(self) -> 'Parser':
        return self.map(lambda _: None)

    def recognize(self) -> 'Parser':
        """값 대신 소비한 바이트를 반환"""
        def _recognize(source, start):
            _, pos = self.fn(source, start)
            return source.data[start:pos], pos
        return Parser(_recognize, self.name)



# ---------------------------------------------------------------------------
# 기본 파서
# ---------------------------------------------------------------------------

def tag(literal: bytes) -> Parser:
    """정확히 literal과 일치"""
    size = len(literal)

    def _tag(source, pos):
        chunk = source.data[pos:pos + size]
        if chunk == literal:
            return literal, pos + size
        if len(chunk) < size and literal.startswith(chunk):
            raise Incomplete(f"expected {literal!r}", pos)
        raise Mismatch(f"expected {literal!r}", pos)
    return Parser(_tag, repr(literal))


def satisfy(predicate: Callable[[int], bool], description: str) -> Parser:
    """조건을 만족하는 바이트 하나 (int로 반환)"""
    def _satisfy(source, pos):
        if pos >= source.length:
            raise Incomplete(f"expected {description}", pos)
        ch = source.data[pos]
        if not predicate(ch):
            raise Mismatch(f"expected {description}", pos)
        return ch, pos + 1
    return Parser(_satisfy, description)


def one_of(chars: bytes) -> Parser:
    return satisfy(lambda c: c in chars, f"one of {chars!r}")


def none_of(chars: bytes) -> Parser:
    return satisfy(lambda c: c not in chars, f"none of {chars!r}")


def take(count: int) -> Parser:
    """정확히 count 바이트"""
    def _take(source, pos):
        end = pos + count
        if count < 0:
            raise Mismatch(f"cannot take {count} bytes", pos)
        if end > source.length:
            raise Incomplete(f"expected {count} bytes", pos)
        return source.data[pos:end], end
    return Parser(_take, f"take({count})")


def take_while(predicate: Callable[[int], bool], minimum: int = 0,
               maximum: Optional[int] = None, description: str = 'bytes') -> Parser:
    """조건을 만족하는 최대 길이 구간 (minimum..maximum 바이트)"""
    def _take_while(source, start):
        data = source.data
        limit = source.length if maximum is None else min(source.length, start + maximum)
        pos = start
        while pos < limit and predicate(data[pos]):
            pos += 1
        if pos - start < minimum:
            if pos == source.length:
                raise Incomplete(f"expected {description}", pos)
            raise Mismatch(f"expected {description}", pos)
        return data[start:pos], pos
    return Parser(_take_while, description)


def eof() -> Parser:
    def _eof(source, pos):
        if pos < source.length:
            raise Mismatch("expected end of input", pos)
        return None, pos
    return Parser(_eof, 'eof')


def position() -> Parser:
    """입력을 소비하지 않고 현재 위치를 반환"""
    return Parser(lambda source, pos: (pos, pos), 'position')


def success(value: Any) -> Parser:
    return Parser(lambda source, pos: (value, pos), 'success')


def fail(message: str) -> Parser:
    def _fail(source, pos):
        raise Mismatch(message, pos)
    return Parser(_fail, 'fail')


def lazy(factory: Callable[[], Parser]) -> Parser:
    """재귀 문법용 - 처음 호출될 때 파서를 만든다"""
    cache: List[Parser] = []

    def _lazy(source, pos):
        if not cache:
            cache.append(factory())
        return cache[0].fn(source, pos)
    return Parser(_lazy, 'lazy')


def seq(*parsers: Parser) -> Parser:
    """순서대로 파싱해서 값들의 튜플 반환"""
    def _seq(source, pos):
        values = []
        for parser in parsers:
            value, pos = parser.fn(source, pos)
            values.append(value)
        return tuple(values), pos
    return Parser(_seq, 'seq')


def alt(*parsers: Parser) -> Parser:
    """순서대로 시도해서 처음 성공한 결과 반환"""
    flat: List[Parser] = []
    for parser in parsers:
        flat.extend(getattr(parser, 'alternatives', [parser]))

    def _alt(source, pos):
        furthest: Optional[ParseError] = None
        for parser in flat:
            try:
                return parser.fn(source, pos)
            except ParseError as e:
                if furthest is None or e.position > furthest.position:
                    furthest = e
        if furthest is None:
            raise Mismatch("no alternatives", pos)
        raise furthest

    result = Parser(_alt, ' | '.join(p.name for p in flat if p.name))
    result.alternatives = flat
    return result
