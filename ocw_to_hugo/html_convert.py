"""
html_convert.py - Generic HTML to markdown conversion

Scripts and styles are dropped, everything else goes through markdownify
with ATX headings. Links arrive here already rewritten. Iframes (the
inline media embeds) are kept as raw HTML, which Hugo passes through.
"""

import re

from bs4 import BeautifulSoup
from markdownify import MarkdownConverter

STRIP_TAGS = ["script", "style"]


class CourseMarkdownConverter(MarkdownConverter):
    """markdownify converter that leaves embeds in place"""

    def convert_iframe(self, el, text, *args, **kwargs):
        return str(el)


def html_to_markdown(html_text: str) -> str:
    if not html_text or not html_text.strip():
        return ""

    soup = BeautifulSoup(html_text, "lxml")
    for tag in soup.find_all(STRIP_TAGS):
        tag.decompose()

    body = soup.body or soup
    converter = CourseMarkdownConverter(heading_style="ATX", bullets="-")
    md_txt = converter.convert(body.decode_contents())

    # Normalise whitespace
    md_txt = re.sub(r"\n{3,}", "\n\n", md_txt).strip()
    return f"{md_txt}\n" if md_txt else ""
