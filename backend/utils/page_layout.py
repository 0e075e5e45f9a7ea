"""Mushaf page layout helpers for the per-page glyph fonts (QPC V2)."""
from schemas.quran import PageLine, VerseResponse
from utils.quran_data import validate_page_number


def font_face_for_page(page: int, version: str = "v2") -> str:
    validate_page_number(page)
    return f"p{page}-{version}"


def font_url_for_page(base_url: str, page: int) -> str:
    validate_page_number(page)
    return f"{base_url}/QCF_P{page:03d}.woff2"


def group_lines(verses: list[VerseResponse], default_page: int = 1) -> list[PageLine]:
    """Group every word of `verses` into (page, line) buckets, in reading order.

    Words without layout data land on line 1 of `default_page`.
    """
    lines: dict[tuple[int, int], PageLine] = {}
    for verse in verses:
        for word in verse.words:
            page = word.page_number or default_page
            line = word.line_number or 1
            bucket = lines.get((page, line))
            if bucket is None:
                bucket = lines[(page, line)] = PageLine(page_number=page, line_number=line, words=[])
            bucket.words.append(word)
    return [lines[k] for k in sorted(lines)]
