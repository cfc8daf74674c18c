"""HTML rendering."""

from __future__ import annotations

from html import escape

from img2brl.models.failures import ConversionFailure, FetchFailed, UnsupportedFormat
from img2brl.models.results import ConversionResult
from img2brl.rendering.base import ResultRenderer

_PAGE = """<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" lang="{lang}" dir="ltr">
<head>
<title>{title}</title>
<meta http-equiv="Content-Type" content="text/html; charset=UTF-8" />
<link rel="shortcut icon" href="favicon.png" />
<link rel="stylesheet" type="text/css" href="img2brl.css" />
</head>
<body>
{content}
<div class="center" id="footer">Processing time was \
<span class="timing" id="seconds">{seconds:.2f}</span> seconds \
(<span class="timing" id="microseconds">{microseconds}</span> microseconds)</div>
</body>
</html>
"""

_TITLE = "Tactile Image Viewer"
_FETCH_TITLE = "Error while fetching URL"


class MarkupRenderer(ResultRenderer):
    mode = "markup"
    media_type = "text/html; charset=UTF-8"

    def render_result(self, result: ConversionResult, elapsed: float) -> str:
        src = result.source
        lines = [
            f"{src.identifier_label}: {src.identifier}",
            f"Content type: {src.content_type}",
            f"Format: {result.format}",
        ]
        if result.label:
            lines.append(f"Label: {result.label}")
        lines.append(f"Width: {result.tactile.width_cells}")
        lines.append(f"Height: {result.tactile.height_cells}")
        header = "".join(escape(line, quote=False) + "\n" for line in lines)
        content = f'<pre id="result">\n{header}\n{escape(result.tactile.text, quote=False)}</pre>'
        return self._page(_TITLE, content, elapsed)

    def render_failure(self, failure: ConversionFailure, elapsed: float) -> str:
        if isinstance(failure, FetchFailed):
            content = (
                "<h1>An error occurred while fetching URL</h1>\n"
                f"<p>{escape(failure.message)}</p>\n"
                "<p>Please try again with a different URL.</p>"
            )
            return self._page(_FETCH_TITLE, content, elapsed)
        if isinstance(failure, UnsupportedFormat):
            heading = "Error: Image format not supported"
        else:
            heading = "Error: Conversion failed"
        content = f"<h1>{heading}</h1>\n<p>{escape(failure.message)}</p>"
        return self._page(_TITLE, content, elapsed)

    def render_landing(self, elapsed: float) -> str:
        content = (
            "<h1>img2brl &mdash; Convert images to Braille</h1>\n"
            '<p>Translate images from various <a class="internal" href="formats">formats</a> to '
            '<a href="http://en.wikipedia.org/wiki/Unicode_braille" lang="en">Unicode braille</a>.</p>'
        )
        return self._page(_TITLE, content, elapsed)

    def _page(self, title: str, content: str, elapsed: float) -> str:
        return _PAGE.format(
            lang=escape(self.language),
            title=escape(title),
            content=content,
            seconds=elapsed,
            microseconds=int(elapsed * 1_000_000),
        )
