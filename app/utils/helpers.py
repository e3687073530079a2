"""
Common utility functions and helpers.
"""
import re

# Characters XML 1.0 cannot carry (C0 controls other than tab, newline, carriage return)
_XML_ILLEGAL_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def clean_xml_text(text: str) -> str:
    """
    Remove characters that python-docx refuses to write.

    Args:
        text: Raw user text

    Returns:
        Text safe to place in a Word run
    """
    return _XML_ILLEGAL_RE.sub("", text)

