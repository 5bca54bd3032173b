from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass

from pptx2pptist.exceptions import PackageCorruptedError, PackageInvalidError


@dataclass(frozen=True)
class ZipBombLimits:
    """
    Heuristics for rejecting probable ZIP bombs.

    Presentations embed large media, so the size ceilings are generous; the
    compression ratios are what catch real bombs.
    """

    max_entries: int = 50_000
    max_total_uncompressed_bytes: int = 4 * 1024 * 1024 * 1024  # 4 GiB
    max_single_uncompressed_bytes: int = 1 * 1024 * 1024 * 1024  # 1 GiB
    max_total_compression_ratio: float = 200.0
    max_entry_compression_ratio: float = 500.0

    @classmethod
    def from_settings(cls, settings) -> "ZipBombLimits":
        total = settings.max_uncompressed_mb * 1024 * 1024
        return cls(
            max_entries=settings.max_zip_entries,
            max_total_uncompressed_bytes=total,
            max_single_uncompressed_bytes=min(
                total, cls.max_single_uncompressed_bytes
            ),
        )


DEFAULT_ZIP_BOMB_LIMITS = ZipBombLimits()


def _suffix(source: str | None) -> str:
    return f" [{source}]" if source else ""


def validate_zipfile(
    zf: zipfile.ZipFile,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> None:
    """
    Reject a ZIP container that shows high-confidence ZIP-bomb indicators.

    Raises PackageCorruptedError on the first violated limit.
    """
    infos = zf.infolist()

    if len(infos) > limits.max_entries:
        raise PackageCorruptedError(
            f"ZIP container has too many entries ({len(infos)} > {limits.max_entries})"
            + _suffix(source)
        )

    total_uncompressed = 0
    total_compressed = 0

    for info in infos:
        if info.is_dir():
            continue

        file_size = int(info.file_size or 0)
        compressed_size = int(info.compress_size or 0)

        if file_size > limits.max_single_uncompressed_bytes:
            raise PackageCorruptedError(
                f"ZIP entry too large ({file_size} bytes > {limits.max_single_uncompressed_bytes})"
                + _suffix(source)
            )

        if file_size > 0:
            if compressed_size <= 0:
                raise PackageCorruptedError(
                    "ZIP entry has zero compressed size but non-zero uncompressed size"
                    + _suffix(source)
                )
            ratio = file_size / compressed_size
            if ratio > limits.max_entry_compression_ratio:
                raise PackageCorruptedError(
                    f"ZIP entry compression ratio too high ({ratio:.1f} > {limits.max_entry_compression_ratio})"
                    + _suffix(source)
                )

        total_uncompressed += file_size
        total_compressed += compressed_size

        if total_uncompressed > limits.max_total_uncompressed_bytes:
            raise PackageCorruptedError(
                f"ZIP total uncompressed size too large ({total_uncompressed} bytes > {limits.max_total_uncompressed_bytes})"
                + _suffix(source)
            )

    if total_uncompressed > 0:
        if total_compressed <= 0:
            raise PackageCorruptedError(
                "ZIP container has non-zero uncompressed content but zero total compressed size"
                + _suffix(source)
            )
        total_ratio = total_uncompressed / total_compressed
        if total_ratio > limits.max_total_compression_ratio:
            raise PackageCorruptedError(
                f"ZIP total compression ratio too high ({total_ratio:.1f} > {limits.max_total_compression_ratio})"
                + _suffix(source)
            )


def open_zipfile(
    file_like: io.BytesIO,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> zipfile.ZipFile:
    """
    Open a ZIP file and validate it for ZIP-bomb indicators.

    Caller owns the returned ZipFile and must close it.
    """
    file_like.seek(0)
    try:
        zf = zipfile.ZipFile(file_like, "r")
    except zipfile.BadZipFile as exc:
        raise PackageInvalidError("Input is not a ZIP archive", cause=exc) from exc
    try:
        validate_zipfile(zf, limits=limits, source=source)
    except Exception:
        zf.close()
        raise
    return zf
