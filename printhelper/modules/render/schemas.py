"""Render module schemas."""

import re
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from printhelper.shared.errors import ValidationError
from printhelper.shared.logging import get_logger

logger = get_logger(__name__)

# Paper formats understood by Chromium's PDF backend
PAGE_FORMATS = {
    "letter": "Letter",
    "legal": "Legal",
    "tabloid": "Tabloid",
    "ledger": "Ledger",
    "a0": "A0",
    "a1": "A1",
    "a2": "A2",
    "a3": "A3",
    "a4": "A4",
    "a5": "A5",
    "a6": "A6",
}

# Browser-style (camelCase) option names -> Playwright page.pdf() kwargs
PDF_OPTION_ALIASES = {
    "printBackground": "print_background",
    "preferCSSPageSize": "prefer_css_page_size",
    "displayHeaderFooter": "display_header_footer",
    "headerTemplate": "header_template",
    "footerTemplate": "footer_template",
    "pageRanges": "page_ranges",
}

# Keyword arguments accepted by Playwright's page.pdf()
PDF_OPTIONS = frozenset(
    {
        "scale",
        "display_header_footer",
        "header_template",
        "footer_template",
        "print_background",
        "landscape",
        "page_ranges",
        "format",
        "width",
        "height",
        "prefer_css_page_size",
        "margin",
        "outline",
        "tagged",
    }
)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def normalize_option_key(key: str) -> str:
    """Map a camelCase option name onto the renderer's snake_case name."""
    if key in PDF_OPTION_ALIASES:
        return PDF_OPTION_ALIASES[key]
    return _CAMEL_RE.sub("_", key).lower()


class Margins(BaseModel):
    """Page margins: CSS lengths, or bare numbers meaning pixels."""

    top: str | float = "10mm"
    right: str | float = "10mm"
    bottom: str | float = "10mm"
    left: str | float = "10mm"

    @classmethod
    def uniform(cls, value: str | float) -> "Margins":
        return cls(top=value, right=value, bottom=value, left=value)


class PageLayout(BaseModel):
    """
    Page options for one render.

    Explicit ``width``/``height`` win over ``format``. Keys in ``extra``
    that the engine knows are passed through and may override anything;
    unknown keys are dropped with a warning.
    """

    format: str | None = "A4"
    width: str | float | None = None
    height: str | float | None = None
    margin: Margins = Field(default_factory=Margins)
    print_background: bool = True
    landscape: bool = False
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_options(cls, options: dict[str, Any] | None) -> "PageLayout":
        """Build a layout from a free-form caller option dict."""
        remaining = {normalize_option_key(k): v for k, v in (options or {}).items()}
        fields: dict[str, Any] = {}
        for name in ("format", "width", "height", "print_background", "landscape"):
            if name in remaining:
                fields[name] = remaining.pop(name)
        # Output location is owned by the service, never by the caller
        remaining.pop("path", None)
        margin = remaining.pop("margin", None)
        try:
            if isinstance(margin, (str, int, float)) and not isinstance(margin, bool):
                fields["margin"] = Margins.uniform(margin)
            elif isinstance(margin, dict):
                fields["margin"] = Margins(**margin)
            elif margin is not None:
                raise ValidationError(
                    "Invalid page options: margin must be a length or an object",
                    details={"field": "margin"},
                )
            fields["extra"] = remaining
            return cls(**fields)
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ValidationError(f"Invalid page options: {problems}") from e

    def paper_format(self) -> str | None:
        if not self.format:
            return None
        return PAGE_FORMATS.get(self.format.lower(), self.format)

    def to_pdf_options(self) -> dict[str, Any]:
        """Translate into keyword arguments for Playwright's page.pdf()."""
        options: dict[str, Any] = {
            "margin": self.margin.model_dump(),
            "print_background": self.print_background,
        }
        if self.width and self.height:
            options["width"] = self.width
            options["height"] = self.height
        elif self.paper_format():
            options["format"] = self.paper_format()
        if self.landscape:
            options["landscape"] = True
        for key, value in self.extra.items():
            if key not in PDF_OPTIONS:
                logger.warning(f"Ignoring unsupported PDF option: {key}")
                continue
            options[key] = value
        return options


class RenderPdfRequest(BaseModel):
    """Request to render caller-supplied HTML to PDF."""

    html: str = Field(..., description="HTML content to render")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Page options: format, margin, printBackground, plus engine passthrough keys",
    )
