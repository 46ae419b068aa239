import re

_TAG_RE = re.compile(r'<[^>]*>')

def sanitize_string(v):
    if not isinstance(v, str):
        return v
    # Drop markup, then surrounding whitespace; "" is treated as missing downstream
    return _TAG_RE.sub('', v).strip()
