import re

# ============================================================
# UNICODE PUNCTUATION
# ============================================================
_DASHES = re.compile("[\u2012\u2013\u2014\u2015]")
_SINGLE_QUOTES = re.compile("[\u2018\u2019\u201A\u201B\u2032\u2035]")
_DOUBLE_QUOTES = re.compile("[\u201C\u201D\u201E\u201F\u2033\u2036]")
_NBSP = re.compile("\u00A0")


def normalize_text(text: str) -> str:
    """Map the unicode punctuation PDF/Word decoders emit onto ASCII."""
    text = _DASHES.sub("-", text or "")
    text = _SINGLE_QUOTES.sub("'", text)
    text = _DOUBLE_QUOTES.sub('"', text)
    return _NBSP.sub(" ", text)
