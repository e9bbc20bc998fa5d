"""Parsing of requested image references."""

import csv
import io

from ..exceptions import ParseError


def find_bare_quote(text: str) -> int | None:
    """Return the line of the first '"' inside an unquoted field, if any.

    The csv module keeps such quotes as literal text, so they are checked here.
    """
    line = 1
    quoted = False
    field_start = True
    escaped = False

    for index, char in enumerate(text):
        if escaped:
            escaped = False
            continue

        if quoted:
            if char == '"':
                if text[index + 1 : index + 2] == '"':
                    escaped = True
                else:
                    quoted = False
            elif char == "\n":
                line += 1
            continue

        if char == '"':
            if not field_start:
                return line
            quoted = True
        elif char in ",\n":
            if char == "\n":
                line += 1
            field_start = True
            continue

        field_start = False

    return None


def read_csv_rows(text: str) -> list[list[str]]:
    """Read every non-blank row of a CSV record.

    Args:
        text: CSV text, rows separated by newlines

    Returns:
        List of rows, each a list of field values

    Raises:
        ParseError: If the text is not valid CSV or rows differ in field count
    """
    bare_quote_line = find_bare_quote(text)
    if bare_quote_line is not None:
        raise ParseError(
            f'record on line {bare_quote_line}: bare " in non-quoted field'
        )

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    rows: list[list[str]] = []
    expected_fields: int | None = None

    try:
        for row in reader:
            if not row:
                continue

            if expected_fields is None:
                expected_fields = len(row)
            elif len(row) != expected_fields:
                raise ParseError(
                    f"record on line {reader.line_num}: wrong number of fields "
                    f"(expected {expected_fields}, got {len(row)})"
                )

            rows.append(row)
    except csv.Error as e:
        raise ParseError(f"record on line {reader.line_num}: {e}") from e

    return rows


def parse_repo_tags(text: str) -> list[str]:
    """CSV 레코드에서 요청된 이미지 참조 목록을 파싱합니다.

    모든 행의 필드를 순서대로 이어 붙이며, 빈 필드는 제외합니다.
    중복된 참조는 제거하지 않고 그대로 유지합니다.

    Args:
        text: 쉼표로 구분된 CSV 텍스트
            - 한 줄: "nginx:alpine,myapp:v1.0"
            - 여러 줄: "nginx:alpine,myapp:v1.0\\n,redis:7"
            - 따옴표 사용: '"registry.io/app:v1",nginx:latest'

    Returns:
        list[str]: 이미지 참조 목록 (예: ["nginx:alpine", "myapp:v1.0"])

    Raises:
        ParseError: 따옴표가 닫히지 않는 등 CSV 형식이 잘못된 경우

    Examples:
        # 여러 행에 걸친 참조 파싱
        refs = parse_repo_tags("repo/x:v1,repo/y:v1\\n,repo/z:v1")
        # 결과: ["repo/x:v1", "repo/y:v1", "repo/z:v1"]
    """
    return [field for row in read_csv_rows(text) for field in row if field]


def split_reference(reference: str) -> tuple[str, str]:
    """이미지 참조를 Docker pull API의 이미지명과 태그로 분리합니다.

    Args:
        reference: 이미지 참조 문자열
            - 예: "nginx:alpine", "localhost:5000/myapp:latest"
            - digest 참조: "nginx@sha256:abc123..."

    Returns:
        tuple[str, str]: (이미지명, 태그) 튜플. digest 참조는 태그가 빈 문자열입니다.

    Examples:
        # 기본 이미지 참조
        split_reference("nginx:alpine")
        # 결과: ("nginx", "alpine")

        # 레지스트리 포트는 태그로 취급하지 않음
        split_reference("localhost:5000/myapp")
        # 결과: ("localhost:5000/myapp", "latest")

        # digest 참조는 그대로 전달
        split_reference("nginx@sha256:abc123")
        # 결과: ("nginx@sha256:abc123", "")
    """
    if "@" in reference:
        return reference, ""

    # Only a ':' after the last '/' separates a tag; earlier ones are registry ports
    name_start = reference.rfind("/") + 1
    colon = reference.rfind(":")
    if colon >= name_start:
        repository, tag = reference[:colon], reference[colon + 1 :]
        return repository, tag or "latest"

    return reference, "latest"
