"""
스트림 필터 디코딩

문법 자체는 스트림 본문을 해석하지 않는다. 이 모듈은 문법 바깥의 협력자
(XRef 스트림 디코더, Object Stream, CLI)가 본문을 풀 때 사용한다.

지원하는 필터:
1. FlateDecode (zlib) + Predictor
2. ASCIIHexDecode
"""

import logging
import zlib
from typing import List, Optional

from .objects import Dictionary, Name, Stream

log = logging.getLogger(__name__)


class StreamDecoder:
    """PDF 스트림 디코더"""

    @staticmethod
    def filters(stream: Stream) -> List[bytes]:
        """/Filter 값을 이름 리스트로"""
        value = stream.dictionary.get(b'Filter')
        if value is None:
            return []
        if isinstance(value, Name):
            return [value.value]
        return [item.value for item in value if isinstance(item, Name)]

    @staticmethod
    def params(stream: Stream) -> List[Optional[Dictionary]]:
        """/DecodeParms 값을 필터 수만큼의 리스트로"""
        count = len(StreamDecoder.filters(stream))
        value = stream.dictionary.get(b'DecodeParms')
        if isinstance(value, list):
            parms = [p if isinstance(p, Dictionary) else None for p in value]
        else:
            parms = [value if isinstance(value, Dictionary) else None]
        return (parms + [None] * count)[:count]

    @staticmethod
    def decode(stream: Stream) -> bytes:
        """
        필터 체인을 적용해서 스트림 본문 디코딩

        Raises:
            ValueError: 본문이 아직 deferred 상태
            NotImplementedError: 지원하지 않는 필터
        """
        if stream.content is None:
            raise ValueError(f"stream content is deferred at {stream.start_position}")

        result = stream.content
        for filter_name, parms in zip(StreamDecoder.filters(stream), StreamDecoder.params(stream)):
            if filter_name == b'FlateDecode':
                result = StreamDecoder.decode_flate(result, parms)
            elif filter_name == b'ASCIIHexDecode':
                result = StreamDecoder.decode_asciihex(result)
            else:
                raise NotImplementedError(f"Filter not implemented: {filter_name.decode('latin-1')}")
        return result

    @staticmethod
    def decode_flate(data: bytes, parms: Optional[Dictionary] = None) -> bytes:
        """FlateDecode (zlib) 압축 해제"""
        try:
            decompressed = zlib.decompress(data)
        except zlib.error:
            # 일부 PDF는 헤더 없이 raw deflate 사용
            log.debug("zlib header missing, retrying as raw deflate")
            try:
                decompressed = zlib.decompress(data, -15)
            except zlib.error as e:
                raise ValueError(f"FlateDecode failed: {e}") from e

        if parms:
            predictor = parms.get_int(b'Predictor') or 1
            if predictor > 1:
                decompressed = StreamDecoder.apply_predictor(
                    decompressed,
                    predictor,
                    parms.get_int(b'Columns') or 1,
                    parms.get_int(b'Colors') or 1,
                    parms.get_int(b'BitsPerComponent') or 8,
                )
        return decompressed

    @staticmethod
    def decode_asciihex(data: bytes) -> bytes:
        """ASCIIHex 디코딩"""
        data = bytes(b for b in data if b not in b' \t\n\r\x00\x0c')
        end = data.find(b'>')
        if end != -1:
            data = data[:end]
        # 홀수 길이면 0 추가
        if len(data) % 2 == 1:
            data = data + b'0'
        return bytes.fromhex(data.decode('ascii'))

    @staticmethod
    def apply_predictor(data: bytes, predictor: int, columns: int,
                        colors: int = 1, bits: int = 8) -> bytes:
        """Predictor 역변환 (TIFF 2, PNG 10~15)"""
        bytes_per_pixel = max(1, colors * bits // 8)
        row_size = (columns * colors * bits + 7) // 8

        if predictor == 2:
            result = bytearray()
            for row_start in range(0, len(data), row_size):
                row = bytearray(data[row_start:row_start + row_size])
                for i in range(bytes_per_pixel, len(row)):
                    row[i] = (row[i] + row[i - bytes_per_pixel]) & 0xFF
                result.extend(row)
            return bytes(result)

        if predictor < 10:
            raise NotImplementedError(f"Predictor not implemented: {predictor}")

        # PNG: 각 행 앞에 필터 타입 1바이트
        result = bytearray()
        prev_row = bytearray(row_size)
        for row_start in range(0, len(data), row_size + 1):
            filter_type = data[row_start]
            row = bytearray(data[row_start + 1:row_start + 1 + row_size])

            for j in range(len(row)):
                left = row[j - bytes_per_pixel] if j >= bytes_per_pixel else 0
                up = prev_row[j]
                up_left = prev_row[j - bytes_per_pixel] if j >= bytes_per_pixel else 0
                if filter_type == 1:
                    row[j] = (row[j] + left) & 0xFF
                elif filter_type == 2:
                    row[j] = (row[j] + up) & 0xFF
                elif filter_type == 3:
                    row[j] = (row[j] + (left + up) // 2) & 0xFF
                elif filter_type == 4:
                    row[j] = (row[j] + _paeth(left, up, up_left)) & 0xFF
                elif filter_type != 0:
                    raise ValueError(f"Invalid PNG filter type: {filter_type}")

            result.extend(row)
            prev_row = row + bytearray(row_size - len(row))
        return bytes(result)


def _paeth(a: int, b: int, c: int) -> int:
    p = a + b - c
    pa = abs(p - a)
    pb = abs(p - b)
    pc = abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def decode_stream(stream: Stream) -> bytes:
    """StreamDecoder.decode의 함수형 별칭"""
    return StreamDecoder.decode(stream)
