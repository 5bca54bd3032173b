import io
import types
import zipfile

import pytest

from pptx2pptist.config import Settings
from pptx2pptist.exceptions import PackageCorruptedError, PackageInvalidError
from pptx2pptist.ooxml.zip_bomb import ZipBombLimits, open_zipfile, validate_zipfile


def _make_zip_bytesio(files: dict[str, bytes]) -> io.BytesIO:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    buffer.seek(0)
    return buffer


def test_zip_bomb_detection_can_use_low_thresholds__compression_ratio() -> None:
    buffer = _make_zip_bytesio({"a.txt": b"A" * 10_000})

    with pytest.raises(PackageCorruptedError):
        open_zipfile(
            buffer,
            limits=ZipBombLimits(
                max_entry_compression_ratio=10.0,
                max_total_compression_ratio=10.0,
            ),
            source="test",
        )

    zf = open_zipfile(
        buffer,
        limits=ZipBombLimits(
            max_entry_compression_ratio=10_000.0,
            max_total_compression_ratio=10_000.0,
        ),
        source="test",
    )
    zf.close()


def test_zip_bomb_detection_can_use_low_thresholds__entry_count() -> None:
    buffer = _make_zip_bytesio(
        {
            "a.txt": b"a",
            "b.txt": b"b",
            "c.txt": b"c",
        }
    )

    with zipfile.ZipFile(buffer) as zf:
        with pytest.raises(PackageCorruptedError):
            validate_zipfile(zf, limits=ZipBombLimits(max_entries=2), source="test")
        validate_zipfile(zf, limits=ZipBombLimits(max_entries=3), source="test")


def test_zip_bomb_detection_can_use_low_thresholds__total_size() -> None:
    buffer = _make_zip_bytesio({"a.txt": b"abcdefgh" * 64, "b.txt": b"hgfedcba" * 64})

    with zipfile.ZipFile(buffer) as zf:
        with pytest.raises(PackageCorruptedError):
            validate_zipfile(zf, limits=ZipBombLimits(max_total_uncompressed_bytes=600))


def test_limits_follow_settings() -> None:
    limits = ZipBombLimits.from_settings(Settings(max_zip_entries=7, max_uncompressed_mb=1))

    assert limits.max_entries == 7
    assert limits.max_total_uncompressed_bytes == 1024 * 1024
    assert limits.max_single_uncompressed_bytes == 1024 * 1024


def test_non_zip_input_is_invalid() -> None:
    with pytest.raises(PackageInvalidError):
        open_zipfile(io.BytesIO(b"definitely not a zip"))


def test_zip_bomb_detection__zero_compressed_size() -> None:
    info = zipfile.ZipInfo("ppt/slides/slide1.xml")
    info.file_size = 4096
    info.compress_size = 0
    zf = types.SimpleNamespace(infolist=lambda: [info])

    with pytest.raises(PackageCorruptedError) as excinfo:
        validate_zipfile(zf, source="test")
    assert "zero compressed size" in str(excinfo.value)
