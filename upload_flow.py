from __future__ import annotations

import pathlib
from dataclasses import dataclass

SUPPORTED_SUFFIXES = {".csv", ".txt"}


@dataclass(frozen=True)
class ParsingError:
    code: str
    message: str
    source: str | None = None


class UploadValidationError(Exception):
    def __init__(self, errors: list[ParsingError]) -> None:
        super().__init__("Upload validation failed")
        self.errors = errors

    def user_messages(self) -> list[dict[str, str]]:
        return [
            {
                "code": error.code,
                "message": error.message,
                "source": error.source or "",
            }
            for error in self.errors
        ]


def decode_upload(file_bytes: bytes, original_filename: str, source: str) -> list[str]:
    """Return the text lines of an uploaded price or consumption export."""

    suffix = pathlib.PurePath(original_filename).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UploadValidationError(
            [
                ParsingError(
                    code="unsupported_format",
                    message="Only CSV exports are supported.",
                    source=source,
                )
            ]
        )

    try:
        text = file_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UploadValidationError(
            [
                ParsingError(
                    code="invalid_encoding",
                    message=f"File is not UTF-8 encoded (byte {exc.start}).",
                    source=source,
                )
            ]
        ) from exc

    lines = text.splitlines()
    if not any(line.strip() for line in lines):
        raise UploadValidationError(
            [
                ParsingError(
                    code="empty_file",
                    message="File contains no records.",
                    source=source,
                )
            ]
        )
    return lines
