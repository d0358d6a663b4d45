"""
pdfgrammar 설정값

파싱 전에 모듈 속성을 바꾸거나, 각 함수의 키워드 인자로 덮어쓸 수 있다.
"""

# 배열 / 딕셔너리 / 리터럴 문자열 중첩 한도
MAX_NESTING_DEPTH = 32

# Reader 안에서 재귀적으로 객체를 해석할 수 있는 깊이 (/Length 참조 등)
MAX_RESOLVE_DEPTH = 8

# True면 객체 헤더의 ID가 XRef 항목과 다를 때 예외 발생
STRICT = False
