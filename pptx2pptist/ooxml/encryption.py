import io
import zipfile

import olefile

_ENCRYPTION_STREAMS = ("EncryptionInfo", "EncryptedPackage", "DataSpaces")


def _has_ole_encryption_stream(ole: olefile.OleFileIO) -> bool:
    for stream in _ENCRYPTION_STREAMS:
        if ole.exists(stream):
            return True
    return False


def is_ooxml_encrypted(file_like: io.BytesIO) -> bool:
    """
    Password-protected OOXML files are OLE compound documents wrapping an
    EncryptedPackage stream instead of a plain ZIP.
    """
    file_like.seek(0)
    if olefile.isOleFile(file_like):
        file_like.seek(0)
        with olefile.OleFileIO(file_like) as ole:
            encrypted = _has_ole_encryption_stream(ole)
        file_like.seek(0)
        return encrypted
    file_like.seek(0)
    return False


def has_encrypted_package_entry(zf: zipfile.ZipFile) -> bool:
    """Detect a partial or re-zipped upload that still carries the encrypted payload."""
    for name in zf.namelist():
        if name.rsplit("/", 1)[-1] in ("EncryptedPackage", "EncryptionInfo"):
            return True
    return False
