import re

SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE)
UNSAFE_CHARS_RE = re.compile(r"[<>\"'&]")


def sanitize(value):
    """Strip script blocks and markup characters from a free-text field.

    Trims on both ends of the pipeline so that sanitize(sanitize(x)) equals
    sanitize(x). Non-strings pass through untouched.
    """
    if not isinstance(value, str):
        return value
    cleaned = SCRIPT_RE.sub("", value.strip())
    cleaned = UNSAFE_CHARS_RE.sub("", cleaned)
    return cleaned.strip()
