"""Import orchestration: size and format checks, parsing, structural checks."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from .config import SUPPORTED_EXTENSIONS, ImportSettings
from .models import Dataset, ImportMessage, ImportResult, MessageKind
from .parsers.delimited import parse_csv, parse_tsv, parse_txt
from .parsers.json_parser import parse_json
from .progress import ProgressReporter

LOGGER = logging.getLogger("report_scanner.importer")

Parser = Callable[[str, str], Dataset]

PARSERS: Dict[str, Parser] = {
    "csv": parse_csv,
    "json": parse_json,
    "txt": parse_txt,
    "tsv": parse_tsv,
}

# checkpoints reported during one import
PROGRESS_STARTED = 10.0
PROGRESS_SIZE_CHECKED = 30.0
PROGRESS_PARSED = 80.0
PROGRESS_CHECKED = 95.0
PROGRESS_DONE = 100.0


def file_extension(file_name: str) -> str:
    return file_name.rsplit(".", 1)[-1].lower()


def _error(message: str) -> ImportMessage:
    return ImportMessage(kind=MessageKind.ERROR, message=message)


class ReportImporter:
    def __init__(
        self,
        settings: Optional[ImportSettings] = None,
        progress: Optional[ProgressReporter] = None,
    ) -> None:
        self.settings = settings or ImportSettings()
        self.progress = progress or ProgressReporter()

    def _size_error(self) -> ImportMessage:
        limit_mb = self.settings.max_file_size_bytes / (1024 * 1024)
        return _error(f"File size exceeds {limit_mb:g}MB limit")

    def _finish(self, result: ImportResult) -> ImportResult:
        if self.settings.progress_reset:
            self.progress.reset()
        return result

    def import_bytes(self, data: bytes, file_name: str) -> ImportResult:
        """Import raw file contents. Never raises; inspect ``success``."""
        result = ImportResult(success=False)
        self.progress.report(PROGRESS_STARTED)

        if len(data) > self.settings.max_file_size_bytes:
            LOGGER.warning("Rejected %s: %d bytes over the size limit", file_name, len(data))
            result.errors.append(self._size_error())
            return self._finish(result)

        self.progress.report(PROGRESS_SIZE_CHECKED)

        extension = file_extension(file_name)
        parser = PARSERS.get(extension)
        if parser is None:
            supported = ", ".join(ext.upper() for ext in SUPPORTED_EXTENSIONS)
            result.errors.append(
                _error(f"Unsupported file format: {extension}. Supported formats: {supported}")
            )
            LOGGER.warning("Rejected %s: unsupported format %r", file_name, extension)
            return self._finish(result)

        try:
            text = data.decode(self.settings.encoding, errors="replace")
            dataset = parser(text, file_name)
        except Exception as exc:
            LOGGER.exception("Failed to parse %s", file_name)
            result.errors.append(_error(f"Failed to parse file: {exc}"))
            return self._finish(result)

        self.progress.report(PROGRESS_PARSED)

        if not dataset.headers:
            result.errors.append(
                ImportMessage(kind=MessageKind.WARNING, message="No headers detected in the file")
            )
        if not dataset.rows:
            result.errors.append(_error("No data rows found in the file"))
            LOGGER.warning("Rejected %s: no data rows", file_name)
            return self._finish(result)

        self.progress.report(PROGRESS_CHECKED)

        result.success = True
        result.dataset = dataset
        LOGGER.info(
            "Imported %s as %s: rows=%d columns=%d",
            file_name,
            dataset.source_format.value,
            dataset.row_count,
            dataset.column_count,
        )
        self.progress.report(PROGRESS_DONE)
        return self._finish(result)

    async def import_file(self, path: Union[str, Path]) -> ImportResult:
        """Read a file without blocking the event loop, then import it."""
        file_path = Path(path)
        try:
            size = file_path.stat().st_size
            if size > self.settings.max_file_size_bytes:
                self.progress.report(PROGRESS_STARTED)
                LOGGER.warning("Rejected %s: %d bytes over the size limit", file_path.name, size)
                return self._finish(ImportResult(success=False, errors=[self._size_error()]))
            data = await asyncio.to_thread(file_path.read_bytes)
        except OSError as exc:
            LOGGER.warning("Failed to read %s: %s", file_path, exc)
            return ImportResult(success=False, errors=[_error(f"Failed to read file: {exc}")])
        return self.import_bytes(data, file_path.name)


def import_report(
    data: bytes,
    file_name: str,
    progress: Optional[ProgressReporter] = None,
) -> ImportResult:
    return ReportImporter(progress=progress).import_bytes(data, file_name)
