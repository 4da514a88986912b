"""Server-side rendering of the public site and its dynamic sections."""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel

from .config import BASE_DIR
from .constants import GALLERY_INTERVAL_MS, TESTIMONIAL_INTERVAL_MS
from .content import SectionContent, resolve_section_content

logger = logging.getLogger(__name__)

SECTION_LAYOUT_TEMPLATES: dict[str, str] = {
    "centered": "sections/centered.html",
    "grid": "sections/grid.html",
    "gallery": "sections/gallery.html",
    "text-image": "sections/text_image.html",
    "testimonials": "sections/testimonials.html",
}

CAROUSEL_INTERVALS: dict[str, int] = {
    "gallery": GALLERY_INTERVAL_MS,
    "testimonials": TESTIMONIAL_INTERVAL_MS,
}

_ENV = Environment(
    loader=FileSystemLoader(BASE_DIR / "templates"),
    autoescape=select_autoescape(["html", "xml"]),
    enable_async=False,
)


class Carousel:
    """Index bookkeeping for an auto-advancing slide carousel.

    ``timer_generation`` increments whenever the auto-advance timer has to be
    restarted. Manual navigation restarts the timer instead of pausing it;
    hovering pauses it until ``resume``.
    """

    def __init__(
        self, length: int, *, interval_ms: int, reduced_motion: bool = False
    ) -> None:
        self.length = max(0, length)
        self.interval_ms = interval_ms
        self.reduced_motion = reduced_motion
        self.active_index = 0
        self.paused = False
        self.timer_generation = 0

    @property
    def display_index(self) -> int:
        if self.length == 0:
            return 0
        return min(self.active_index, self.length - 1)

    @property
    def auto_advance(self) -> bool:
        return self.length > 1 and not self.reduced_motion and not self.paused

    def _restart_timer(self) -> None:
        self.timer_generation += 1

    def next(self) -> int:
        if self.length:
            self.active_index = (self.display_index + 1) % self.length
        self._restart_timer()
        return self.active_index

    def previous(self) -> int:
        if self.length:
            self.active_index = (self.display_index - 1 + self.length) % self.length
        self._restart_timer()
        return self.active_index

    def go_to(self, index: int) -> int:
        if self.length:
            self.active_index = index % self.length
        self._restart_timer()
        return self.active_index

    def tick(self) -> int:
        """Advance on timer expiry; a no-op whenever auto-advance is disabled."""
        if self.auto_advance:
            self.active_index = (self.display_index + 1) % self.length
        return self.active_index

    def resize(self, length: int) -> int:
        self.length = max(0, length)
        return self.display_index

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False
        self._restart_timer()


class ResolvedSection(BaseModel):
    id: Optional[int] = None
    section_key: str
    title: str
    nav_title: str
    subtitle: Optional[str] = None
    layout_type: str
    background_image: Optional[str] = None
    display_order: int = 0
    chapter: Optional[str] = None
    content: SectionContent


def _field(section: Any, name: str, default: Any = None) -> Any:
    if isinstance(section, dict):
        return section.get(name, default)
    return getattr(section, name, default)


def chapter_label(display_order: Any) -> Optional[str]:
    if isinstance(display_order, bool) or not isinstance(display_order, int):
        return None
    return f"{display_order + 2:02d}"


def resolve_section(section: Any) -> ResolvedSection:
    """Combine a stored section's chrome with its resolved content variant."""

    title = _field(section, "title") or ""
    display_order = _field(section, "display_order", 0)
    return ResolvedSection(
        id=_field(section, "id"),
        section_key=_field(section, "section_key") or "",
        title=title,
        nav_title=_field(section, "nav_title") or title,
        subtitle=_field(section, "subtitle") or None,
        layout_type=_field(section, "layout_type") or "centered",
        background_image=_field(section, "background_image") or None,
        display_order=display_order if isinstance(display_order, int) else 0,
        chapter=chapter_label(display_order),
        content=resolve_section_content(
            _field(section, "layout_type"), _field(section, "content")
        ),
    )


def build_carousel(section: ResolvedSection, *, reduced_motion: bool = False) -> Optional[Carousel]:
    content = section.content
    if content.kind == "gallery":
        length = len(content.slides)
    elif content.kind == "testimonials":
        length = len(content.quotes)
    else:
        return None
    return Carousel(
        length, interval_ms=CAROUSEL_INTERVALS[content.kind], reduced_motion=reduced_motion
    )


def render_section(section: ResolvedSection, *, reduced_motion: bool = False) -> str:
    """Render one resolved section inside the shared chrome wrapper."""

    template_name = SECTION_LAYOUT_TEMPLATES[section.content.kind]
    template = _ENV.get_template(template_name)
    return template.render(
        section=section,
        content=section.content,
        carousel=build_carousel(section, reduced_motion=reduced_motion),
    )


def render_sections(sections: Iterable[Any], *, reduced_motion: bool = False) -> List[str]:
    rendered: List[str] = []
    for section in sections:
        resolved = resolve_section(section)
        rendered.append(render_section(resolved, reduced_motion=reduced_motion))
    logger.debug("Rendered %d dynamic sections", len(rendered))
    return rendered


def render_landing_page(context: dict[str, Any]) -> str:
    template = _ENV.get_template("landing.html")
    return template.render(**context)
