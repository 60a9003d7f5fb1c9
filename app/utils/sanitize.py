import html


def sanitize_text(value: str) -> str:
    """
    HTML-escape user text before it is stored.

    Escapes ``& < > " '`` and the backslash.
    """
    return html.escape(value, quote=True).replace("\\", "&#x5C;")
