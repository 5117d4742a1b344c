# core/formatting.py
# Display helpers shared by the upload and document views


SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")

# (substrings, icon): first match wins
_ICON_RULES = (
    (("pdf",), "FileText"),
    (("word", "document"), "FileText"),
    (("sheet", "excel"), "FileSpreadsheet"),
    (("presentation", "powerpoint"), "Presentation"),
    (("image",), "Image"),
    (("video",), "Video"),
    (("audio",), "Music"),
    (("zip", "rar", "7z"), "Archive"),
)


def format_file_size(size_bytes: int) -> str:
    """
    Human readable size, base 1024, at most two decimals.
    e.g. 2516582 -> "2.4 MB"
    """
    if size_bytes <= 0:
        return "0 Bytes"

    exponent = 0
    value = float(size_bytes)
    while value >= 1024 and exponent < len(SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1

    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[exponent]}"


def get_file_extension(filename: str) -> str:
    """Lowercased text after the last dot (the whole name when there is no dot)."""
    return filename.split(".")[-1].lower()


def get_file_icon(mime_type: str) -> str:
    for needles, icon in _ICON_RULES:
        if any(needle in mime_type for needle in needles):
            return icon
    return "File"


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def calculate_progress(current: float, total: float) -> float:
    if total == 0:
        return 0
    return min(100, max(0, (current / total) * 100))


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _to_int32(n: int) -> int:
    n &= 0xFFFFFFFF
    return n - (1 << 32) if n & 0x80000000 else n


def name_to_color(name: str) -> str:
    """
    Stable avatar colour for a name, as an hsl() string.
    The hash walks UTF-16 code units with 32-bit shifts so the
    web client derives the same hue for the same name.
    """
    data = name.encode("utf-16-le")
    hash_ = 0
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        hash_ = code + (_to_int32(_to_int32(hash_) << 5) - hash_)

    hue = abs(hash_) % 360
    return f"hsl({hue}, 70%, 50%)"


def format_number(num: float) -> str:
    """
    French grouping: narrow no-break space between thousands,
    decimal comma, at most three decimals. e.g. 1234.5 -> "1 234,5"
    """
    if isinstance(num, float):
        text = f"{num:,.3f}".rstrip("0").rstrip(".")
    else:
        text = f"{num:,}"
    return text.replace(",", "\u202f").replace(".", ",")
