"""
Client encoding table.

PostgreSQL names client encodings its own way (UTF8, WIN1252, LATIN1...)
and accepts a number of aliases for them. This module maps those names to
the canonical server spelling and to the Python codec used to encode SQL
text and decode result cells.
"""

import re
from typing import Optional, Tuple

# Canonical PostgreSQL name -> Python codec
PG_TO_PYTHON = {
    "BIG5": "big5",
    "EUC_CN": "gb2312",
    "EUC_JIS_2004": "euc_jis_2004",
    "EUC_JP": "euc_jp",
    "EUC_KR": "euc_kr",
    "GB18030": "gb18030",
    "GBK": "gbk",
    "ISO_8859_5": "iso8859_5",
    "ISO_8859_6": "iso8859_6",
    "ISO_8859_7": "iso8859_7",
    "ISO_8859_8": "iso8859_8",
    "JOHAB": "johab",
    "KOI8R": "koi8_r",
    "KOI8U": "koi8_u",
    "LATIN1": "iso8859_1",
    "LATIN2": "iso8859_2",
    "LATIN3": "iso8859_3",
    "LATIN4": "iso8859_4",
    "LATIN5": "iso8859_9",
    "LATIN6": "iso8859_10",
    "LATIN7": "iso8859_13",
    "LATIN8": "iso8859_14",
    "LATIN9": "iso8859_15",
    "LATIN10": "iso8859_16",
    "SHIFT_JIS_2004": "shift_jis_2004",
    "SJIS": "shift_jis",
    "SQL_ASCII": "ascii",
    "UHC": "cp949",
    "UTF8": "utf-8",
    "WIN866": "cp866",
    "WIN874": "cp874",
    "WIN1250": "cp1250",
    "WIN1251": "cp1251",
    "WIN1252": "cp1252",
    "WIN1253": "cp1253",
    "WIN1254": "cp1254",
    "WIN1255": "cp1255",
    "WIN1256": "cp1256",
    "WIN1257": "cp1257",
    "WIN1258": "cp1258",
}

# Extra spellings the server accepts, keyed by cleaned name
ALIASES = {
    "unicode": "UTF8",
    "iso88591": "LATIN1",
    "iso88592": "LATIN2",
    "iso88593": "LATIN3",
    "iso88594": "LATIN4",
    "iso88599": "LATIN5",
    "iso885910": "LATIN6",
    "iso885913": "LATIN7",
    "iso885914": "LATIN8",
    "iso885915": "LATIN9",
    "iso885916": "LATIN10",
    "iso88595": "ISO_8859_5",
    "iso88596": "ISO_8859_6",
    "iso88597": "ISO_8859_7",
    "iso88598": "ISO_8859_8",
    "koi8": "KOI8R",
    "shiftjis": "SJIS",
    "mskanji": "SJIS",
    "win": "WIN1251",
    "alt": "WIN866",
    "tcvn": "WIN1258",
    "tcvn5712": "WIN1258",
    "vscii": "WIN1258",
    "abc": "WIN1258",
    "windows949": "UHC",
    "windows936": "GBK",
    "windows950": "BIG5",
}

_CLEAN = re.compile(r"[^a-z0-9]")


def clean_name(name: str) -> str:
    """Lower-case a name and drop everything but letters and digits."""
    return _CLEAN.sub("", name.lower())


_BY_CLEAN_NAME = {clean_name(pg_name): pg_name for pg_name in PG_TO_PYTHON}
_BY_CLEAN_NAME.update(ALIASES)


def resolve(name: str) -> Optional[Tuple[str, str]]:
    """
    Resolve an encoding name given by the caller or reported by the server.

    Args:
        name: Any spelling PostgreSQL accepts, e.g. "utf-8", "Latin1", "WIN1252"

    Returns:
        (canonical PostgreSQL name, Python codec) or None when the name is
        unknown or has no Python codec
    """
    pg_name = _BY_CLEAN_NAME.get(clean_name(name))
    if pg_name is None:
        return None
    return pg_name, PG_TO_PYTHON[pg_name]
