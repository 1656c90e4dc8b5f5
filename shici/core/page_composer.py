"""Page Composer — substitutes the two SVG fragments into the HTML page template.

Invariants:
    - Template compiled once; compose() only renders
    - Exactly two slots: `content` and `author`; a missing slot value is an error
    - Raw substitution, no escaping (fragments are already serialized SVG)
    - Every Jinja2 failure surfaces as TemplateRenderError
"""

from importlib import resources

from jinja2 import Environment, StrictUndefined, TemplateError

from shici.core.errors import TemplateRenderError

PAGE_TEMPLATE = "page.html"


class PageComposer:
    """Compiled page template with `content` and `author` slots."""

    def __init__(self, template_source: str):
        env = Environment(autoescape=False, undefined=StrictUndefined)
        try:
            self._template = env.from_string(template_source)
        except TemplateError as e:
            raise TemplateRenderError(str(e)) from e

    @classmethod
    def from_package(cls, name: str = PAGE_TEMPLATE) -> "PageComposer":
        """Load a template bundled under shici/templates/."""
        source = (
            (resources.files("shici") / "templates" / name)
            .read_text(encoding="utf-8")
        )
        return cls(source)

    def compose(self, *, content: str, author: str) -> str:
        try:
            return self._template.render(content=content, author=author)
        except TemplateError as e:
            raise TemplateRenderError(str(e)) from e
