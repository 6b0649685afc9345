import random
import re
import time
from pathlib import PurePath

_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_RE = re.compile(r"[^a-z0-9._-]")


def _clean(text: str) -> str:
    return _UNSAFE_RE.sub("", _WHITESPACE_RE.sub("-", text.strip()).lower())


def sanitize_file_name(original_name: str) -> str:
    """Lower-case basename with whitespace runs collapsed to '-'.

    Anything outside ``[a-z0-9._-]`` is dropped, so the result is safe to
    use as a single path segment. The stem and the extension are cleaned
    separately so the extension survives a stem that cleans to nothing.
    """
    base = PurePath(original_name.replace("\\", "/")).name.strip()
    raw_ext = PurePath(base).suffix if base else ""
    stem = base[: -len(raw_ext)] if raw_ext else base
    return (_clean(stem).lstrip(".") or "file") + _clean(raw_ext)


def build_stored_name(original_name: str, now_ms: int | None = None) -> str:
    """``<epoch-ms>-<random>-<sanitized original name>``."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = random.randint(0, 10**9)
    return f"{now_ms}-{suffix}-{sanitize_file_name(original_name)}"


def extension_of(file_name: str) -> str:
    return PurePath(file_name).suffix.lower()


def has_allowed_extension(file_name: str, allowed: list[str]) -> bool:
    ext = extension_of(file_name)
    return bool(ext) and ext in {a.lower() for a in allowed}


def is_safe_stored_name(name: str) -> bool:
    return bool(name) and name not in {".", ".."} and "/" not in name and "\\" not in name
