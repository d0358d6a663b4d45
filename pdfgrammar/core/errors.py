"""
파서 예외 정의

- ParseError: 되돌아갈 수 있는 실패 (대안 문법을 시도)
- FatalParseError: 이미 위치가 확정된 뒤의 실패 (대안을 시도하지 않음)
"""


class PDFSyntaxError(ValueError):
    """모든 파싱 오류의 기본 클래스"""

    def __init__(self, message: str, position: int = 0):
        super().__init__(f"{message} at position {position}")
        self.message = message
        self.position = position


class ParseError(PDFSyntaxError):
    """대안 문법으로 넘어갈 수 있는 실패"""


class Mismatch(ParseError):
    """현재 위치의 입력이 문법과 맞지 않음"""


class Incomplete(ParseError):
    """판단하기 전에 입력이 끝남"""


class FatalParseError(PDFSyntaxError):
    """되돌릴 수 없는 실패 - alternation이 잡지 않는다"""


class NestingTooDeep(FatalParseError):
    """중첩 한도 초과"""
