from .codec import (
    CsvFileError,
    DecodeError,
    EncodeError,
    decode,
    encode,
    load_table,
    save_table,
)

__all__ = [
    "CsvFileError",
    "DecodeError",
    "EncodeError",
    "decode",
    "encode",
    "load_table",
    "save_table",
]
