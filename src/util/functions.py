from datetime import datetime, timezone
from urllib.parse import quote

DEFAULT_DOWNLOAD_FILENAME = "media-file"


def iso_timestamp(moment: datetime | None = None) -> str:
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec = "milliseconds").replace("+00:00", "Z")


def build_content_disposition(filename: str | None) -> str:
    name = (filename or "").strip() or DEFAULT_DOWNLOAD_FILENAME
    # quotes, backslashes and control chars would break out of the quoted-string
    quoted_name = "".join(c for c in name if c not in "\"\\" and c.isprintable())
    quoted_name = quoted_name or DEFAULT_DOWNLOAD_FILENAME
    try:
        quoted_name.encode("latin-1")
        return f"attachment; filename=\"{quoted_name}\""
    except UnicodeEncodeError:
        fallback_name = quoted_name.encode("ascii", "replace").decode("ascii")
        return f"attachment; filename=\"{fallback_name}\"; filename*=UTF-8''{quote(name, safe = '')}"
