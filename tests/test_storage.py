from __future__ import annotations

from pathlib import Path

import pytest

from mindcheck.core.config import AppSettings
from mindcheck.integrations import storage as storage_module
from mindcheck.integrations.storage import (
    LocalReportStorage,
    S3ReportStorage,
    build_report_sink,
)


@pytest.mark.asyncio
async def test_local_storage_writes_utf8_without_bom(tmp_path: Path) -> None:
    sink = LocalReportStorage(tmp_path / "nested")

    location = await sink.save("mental-health-report-2025-03-04.txt", "Key Quotes:\n- \"Ça va\"")

    target = tmp_path / "nested" / "mental-health-report-2025-03-04.txt"
    assert location == str(target)
    raw = target.read_bytes()
    assert not raw.startswith(b"\xef\xbb\xbf")
    assert raw.decode("utf-8").endswith('"Ça va"')


@pytest.mark.asyncio
async def test_s3_storage_skips_without_bucket() -> None:
    sink = S3ReportStorage(AppSettings())

    assert await sink.save("report.txt", "content") is None


@pytest.mark.asyncio
async def test_s3_storage_puts_object(monkeypatch: pytest.MonkeyPatch) -> None:
    uploads: list[dict[str, object]] = []

    class StubS3Client:
        async def __aenter__(self) -> StubS3Client:
            return self

        async def __aexit__(self, exc_type, exc, tb) -> None:
            return None

        async def put_object(self, **kwargs) -> None:
            uploads.append(kwargs)

    class StubSession:
        def client(self, service_name: str, **kwargs):
            assert service_name == "s3"
            return StubS3Client()

    monkeypatch.setattr(storage_module.aioboto3, "Session", lambda: StubSession())
    settings = AppSettings(S3_REPORTS_BUCKET="mindcheck-reports", S3_REPORTS_PREFIX="exports/")

    location = await S3ReportStorage(settings).save("report.txt", "Mood Score: 5/10")

    assert location == "s3://mindcheck-reports/exports/report.txt"
    assert uploads[0]["Key"] == "exports/report.txt"
    assert uploads[0]["Body"] == b"Mood Score: 5/10"


def test_build_report_sink_prefers_s3_when_configured(tmp_path: Path) -> None:
    assert isinstance(build_report_sink(AppSettings(S3_REPORTS_BUCKET="bucket")), S3ReportStorage)
    assert isinstance(build_report_sink(AppSettings(REPORTS_DIRECTORY=str(tmp_path))), LocalReportStorage)
