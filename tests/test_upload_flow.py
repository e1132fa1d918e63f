from __future__ import annotations

import pytest

from upload_flow import UploadValidationError, decode_upload


def test_decode_upload_strips_bom_and_splits_lines():
    data = "\ufeff1.1.2024 00:00;10,0\r\n1.1.2024 01:00;2,0\r\n".encode("utf-8")

    assert decode_upload(data, "Kulutus.CSV", "consumption") == [
        "1.1.2024 00:00;10,0",
        "1.1.2024 01:00;2,0",
    ]


@pytest.mark.parametrize(
    ("data", "filename", "code"),
    [
        (b"1.1.2024 00:00;1,0", "report.xlsx", "unsupported_format"),
        (b"\xff\xfe\x00bad", "report.csv", "invalid_encoding"),
        (b"\n  \n", "report.csv", "empty_file"),
    ],
)
def test_decode_upload_rejects_unusable_files(data, filename, code):
    with pytest.raises(UploadValidationError) as excinfo:
        decode_upload(data, filename, "prices")

    messages = excinfo.value.user_messages()
    assert messages[0]["code"] == code
    assert messages[0]["source"] == "prices"
