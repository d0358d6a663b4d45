"""
PDF 어휘 규칙

공백/주석, 줄바꿈, 숫자, Name, 리터럴 문자열, 16진수 문자열, true/false/null.
모든 규칙은 combinator.Parser 인스턴스이며 parse(data, pos)로 직접 쓸 수 있다.
"""

from .combinator import Parser, alt, lazy, one_of, satisfy, seq, tag, take_while
from .objects import StringFormat, PdfString


# 구분자 문자
WHITESPACE = b' \t\n\r\x00\x0c'
DELIMITERS = b'()<>[]{}/%'
DIGITS = b'0123456789'
HEX_DIGITS = b'0123456789ABCDEFabcdef'
OCTAL_DIGITS = b'01234567'

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def is_whitespace(c: int) -> bool:
    return c in WHITESPACE


def is_delimiter(c: int) -> bool:
    return c in DELIMITERS


def is_regular(c: int) -> bool:
    return c not in WHITESPACE and c not in DELIMITERS


def is_digit(c: int) -> bool:
    return c in DIGITS


# ---------------------------------------------------------------------------
# 공백 / 줄바꿈 / 주석
# ---------------------------------------------------------------------------

# \r\n과 \n은 \n으로, 단독 \r은 \r 그대로
eol = alt(
    tag(b'\r\n').map(lambda _: b'\n'),
    tag(b'\n'),
    tag(b'\r'),
)

# % 부터 줄 끝까지 (줄바꿈이 있으면 함께 소비)
comment = seq(
    tag(b'%'),
    take_while(lambda c: c not in b'\r\n'),
    eol.optional(),
).discard()

# 공백 문자만 (16진수 문자열 내부용)
white_space = take_while(is_whitespace).discard()

# 공백과 주석이 섞인 구간 - 토큰 사이 어디서나
space = alt(
    take_while(is_whitespace, minimum=1, description='whitespace'),
    comment,
).many().discard()


# ---------------------------------------------------------------------------
# 숫자
# ---------------------------------------------------------------------------

def _to_int64(raw: bytes) -> int:
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise OverflowError(f"integer out of range: {raw!r}")
    return value


digits = take_while(is_digit, minimum=1, description='digits')
sign = one_of(b'+-').optional()

integer = seq(sign, digits).recognize().convert(_to_int64)
integer.name = 'integer'

# 부호 없는 정수 (객체 번호, 세대 번호)
unsigned = digits.convert(int)

# 소수점 필수, 한쪽 자릿수는 생략 가능: 10.  .5  -.12  0.12
real = seq(
    sign,
    alt(
        seq(digits, tag(b'.'), take_while(is_digit)),
        seq(tag(b'.'), digits),
    ),
).recognize().convert(float)
real.name = 'real'


# ---------------------------------------------------------------------------
# Name
# ---------------------------------------------------------------------------

hex_pair = take_while(lambda c: c in HEX_DIGITS, minimum=2, maximum=2,
                      description='two hex digits').convert(lambda h: int(h, 16))

# #XX 이스케이프, 아니면 일반 문자 하나 (단독 #도 그대로 포함)
_name_char = alt(
    tag(b'#').then(hex_pair),
    satisfy(is_regular, 'regular character'),
)

name = tag(b'/').then(_name_char.many()).map(bytes)
name.name = 'name'


# ---------------------------------------------------------------------------
# 리터럴 문자열
# ---------------------------------------------------------------------------

ESCAPES = {
    ord('n'): b'\n', ord('r'): b'\r', ord('t'): b'\t',
    ord('b'): b'\x08', ord('f'): b'\x0c',
    ord('('): b'(', ord(')'): b')', ord('\\'): b'\\',
}

_escape_body = alt(
    satisfy(lambda c: c in ESCAPES, 'escape character').map(ESCAPES.__getitem__),
    # 8진수 1~3자리, 넘치는 값은 하위 8비트만
    take_while(lambda c: c in OCTAL_DIGITS, minimum=1, maximum=3,
               description='octal digits').map(lambda o: bytes([int(o, 8) & 0xFF])),
    # 줄 연속: 백슬래시와 줄바꿈 모두 사라짐
    eol.map(lambda _: b''),
    # 알 수 없는 이스케이프는 백슬래시만 무시
    satisfy(lambda c: True, 'any byte').map(lambda c: bytes([c])),
)

escape_sequence = tag(b'\\').then(_escape_body)

_string_run = take_while(lambda c: c not in b'\\()', minimum=1).map(
    lambda run: run.replace(b'\r\n', b'\n'))

_string_body = lazy(lambda: alt(_string_run, escape_sequence, _nested_literal_string).many()
                    .map(b''.join))

# 균형 잡힌 내부 괄호는 괄호째로 결과에 포함
_nested_literal_string = (
    tag(b'(').then(_string_body).skip(tag(b')'))
    .map(lambda body: b'(' + body + b')')
    .nested()
)

literal_string = tag(b'(').then(_string_body).skip(tag(b')'))
literal_string.name = 'literal string'


# ---------------------------------------------------------------------------
# 16진수 문자열
# ---------------------------------------------------------------------------

def _decode_hex(raw: bytes) -> bytes:
    hex_str = bytes(c for c in raw if c not in WHITESPACE)
    # 홀수 길이면 0 추가
    if len(hex_str) % 2 == 1:
        hex_str += b'0'
    return bytes.fromhex(hex_str.decode('ascii'))


hexadecimal_string = (
    tag(b'<')
    .then(take_while(lambda c: c in HEX_DIGITS or c in WHITESPACE).map(_decode_hex))
    .skip(tag(b'>'))
)
hexadecimal_string.name = 'hexadecimal string'


# ---------------------------------------------------------------------------
# 키워드
# ---------------------------------------------------------------------------

boolean = alt(
    tag(b'true').map(lambda _: True),
    tag(b'false').map(lambda _: False),
)

null = tag(b'null').map(lambda _: None)


def literal(value: bytes) -> PdfString:
    return PdfString(value, StringFormat.LITERAL)


def hexadecimal(value: bytes) -> PdfString:
    return PdfString(value, StringFormat.HEXADECIMAL)
