"""
pdfgrammar CLI

사용법:
    pdfgrammar document.pdf
    pdfgrammar document.pdf --xref
    pdfgrammar document.pdf --object 3
    pdfgrammar document.pdf --content 4
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core import (
    CompressedEntry, DocumentReader, ObjectId, PDFSyntaxError, Stream,
    decode_stream, parse_content
)


def _print_info(doc: DocumentReader):
    print(f"버전: {doc.version}")
    print(f"XRef Size: {doc.xref.size}")
    print(f"사용 중인 객체: {len(doc.xref)}개")
    print("Trailer:")
    for key, value in doc.trailer.items():
        print(f"  /{key.decode('latin-1')}: {value!r}")


def _print_xref(doc: DocumentReader):
    for number in doc.xref:
        entry = doc.xref.get(number)
        if isinstance(entry, CompressedEntry):
            print(f"{number:>6}  compressed  stream={entry.container} index={entry.index}")
        else:
            print(f"{number:>6}  offset={entry.offset} gen={entry.generation}")


def _print_object(doc: DocumentReader, id: ObjectId) -> bool:
    obj = doc.get_object(id)
    if obj is None:
        print(f"오류: 객체를 찾을 수 없습니다: {id.number} {id.generation}", file=sys.stderr)
        return False
    if isinstance(obj, Stream):
        print(repr(obj.dictionary))
        print(f"stream: {len(obj.content or b'')} bytes")
    else:
        print(repr(obj))
    return True


def _print_content(doc: DocumentReader, id: ObjectId) -> bool:
    obj = doc.get_object(id)
    if not isinstance(obj, Stream):
        print(f"오류: 스트림 객체가 아닙니다: {id.number} {id.generation}", file=sys.stderr)
        return False
    content = parse_content(decode_stream(obj))
    for operation in content:
        operands = ' '.join(repr(operand) for operand in operation.operands)
        print(f"{operands} {operation.operator}".lstrip())
    return True


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='pdfgrammar',
        description='pdfgrammar - PDF 객체/구조 파서',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
예시:
  pdfgrammar document.pdf
  pdfgrammar document.pdf --xref
  pdfgrammar document.pdf --object 3 --generation 0
  pdfgrammar document.pdf --content 4
'''
    )

    parser.add_argument('file', help='PDF 파일 경로')
    parser.add_argument('--info', '-i', action='store_true', help='문서 정보 (기본)')
    parser.add_argument('--xref', '-x', action='store_true', help='XRef 항목 출력')
    parser.add_argument('--object', '-o', type=int, metavar='NUM', help='객체 하나 출력')
    parser.add_argument('--generation', '-g', type=int, default=0, metavar='GEN', help='세대 번호')
    parser.add_argument('--content', '-c', type=int, metavar='NUM', help='Content Stream 연산 출력')
    parser.add_argument('--strict', action='store_true', help='객체 ID 불일치 시 오류')
    parser.add_argument('--verbose', '-v', action='store_true', help='디버그 로그')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    filepath = Path(args.file)
    if not filepath.exists():
        print(f"오류: 파일을 찾을 수 없습니다: {filepath}", file=sys.stderr)
        return 1

    try:
        doc = DocumentReader.from_file(str(filepath), strict=args.strict or None)

        ok = True
        if args.xref:
            _print_xref(doc)
        elif args.object is not None:
            ok = _print_object(doc, ObjectId(args.object, args.generation))
        elif args.content is not None:
            ok = _print_content(doc, ObjectId(args.content, args.generation))
        else:
            _print_info(doc)
        return 0 if ok else 1

    except (PDFSyntaxError, ValueError, NotImplementedError) as e:
        print(f"오류: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
