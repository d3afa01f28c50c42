from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import aioboto3

from mindcheck.core.config import AppSettings


logger = logging.getLogger(__name__)


class ReportSink:
    """Destination for exported report documents."""

    async def save(self, filename: str, content: str) -> str | None:
        raise NotImplementedError


class LocalReportStorage(ReportSink):
    """Write report documents to a local directory as UTF-8 text."""

    def __init__(self, directory: str | Path):
        self._directory = Path(directory)

    async def save(self, filename: str, content: str) -> str | None:
        target = self._directory / filename
        await asyncio.to_thread(self._write, target, content)
        logger.info("Saved report to %s", target)
        return str(target)

    def _write(self, target: Path, content: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content.encode("utf-8"))


class S3ReportStorage(ReportSink):
    """Persist report documents to the configured reports bucket."""

    def __init__(self, settings: AppSettings):
        self._settings = settings

    async def save(self, filename: str, content: str) -> str | None:
        bucket = self._settings.s3_reports_bucket
        if not bucket:
            logger.debug("S3 reports bucket absent; skipping report upload.")
            return None

        key_prefix = self._settings.s3_reports_prefix or "reports/"
        key = f"{key_prefix.rstrip('/')}/{filename}"

        client_kwargs: dict[str, Any] = {}
        if self._settings.aws_region:
            client_kwargs["region_name"] = self._settings.aws_region
        if self._settings.aws_access_key_id and self._settings.aws_secret_access_key:
            client_kwargs["aws_access_key_id"] = self._settings.aws_access_key_id.get_secret_value()
            client_kwargs["aws_secret_access_key"] = self._settings.aws_secret_access_key.get_secret_value()

        session = aioboto3.Session()
        async with session.client("s3", **client_kwargs) as client:
            await client.put_object(
                Bucket=bucket,
                Key=key,
                Body=content.encode("utf-8"),
                ContentType="text/plain; charset=utf-8",
            )
        logger.info("Persisted report to s3://%s/%s", bucket, key)
        return f"s3://{bucket}/{key}"


def build_report_sink(settings: AppSettings) -> ReportSink:
    if settings.s3_reports_bucket:
        return S3ReportStorage(settings)
    return LocalReportStorage(settings.reports_directory)
