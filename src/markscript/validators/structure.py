"""Document structure passes: doctype placement and the html/head/body skeleton.

These passes look at the markup tree only and do not need the shared
script walk.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.config import get_analysis_config
from markscript.diagnostics import Category

if TYPE_CHECKING:
    from markscript.diagnostics import DiagnosticCollector
    from markscript.nodes import Document, Tag


class DoctypeValidator:
    """The document must declare a doctype near the top.

    The allowed last line comes from ``AnalysisConfig.doctype_max_line``.

    """

    name = "doctype"

    def validate(self, document: Document, collector: DiagnosticCollector) -> None:
        doctype = document.doctype
        if doctype is None:
            collector.add(
                1,
                "Missing DOCTYPE declaration. Must be <!DOCTYPE html> at the beginning",
                Category.HTML_STRUCTURE,
            )
            return
        if doctype.lineno > get_analysis_config().doctype_max_line:
            collector.add(
                doctype.lineno,
                "DOCTYPE declaration must be at the very beginning of the document",
                Category.HTML_STRUCTURE,
            )


def find_html_tag(document: Document) -> Tag | None:
    """The document's ``html`` tag, falling back to a scan of top-level tags."""
    if document.root is not None:
        return document.root
    for child in document.children:
        if child.name.lower() == "html":
            return child
    return None


class SkeletonValidator:
    """``<html>`` must exist and directly contain ``<head>`` and ``<body>``."""

    name = "skeleton"

    def validate(self, document: Document, collector: DiagnosticCollector) -> None:
        html = find_html_tag(document)
        if html is None:
            collector.add(
                1,
                "Missing <html> tag. Required structure: <!DOCTYPE html> -> <html> -> <head> -> <body>",
                Category.HTML_STRUCTURE,
            )
            return

        names = {child.name.lower() for child in html.child_tags}
        if "head" not in names:
            collector.add(
                html.lineno,
                "Missing <head> tag. Required structure: <html> -> <head> -> <body>",
                Category.HTML_STRUCTURE,
            )
        if "body" not in names:
            collector.add(
                html.lineno,
                "Missing <body> tag. Required structure: <html> -> <head> -> <body>",
                Category.HTML_STRUCTURE,
            )
