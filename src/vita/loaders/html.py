"""HTML page loader - turns a scraped article page into an entry draft."""

from pathlib import Path

from bs4 import BeautifulSoup
from markdownify import markdownify

from vita.exceptions import InvalidInputError
from vita.models import EntryDraft


class HTMLEntryLoader:
    """Extract a knowledge entry draft from article HTML.

    The article body is the ``.main`` element with its sidebar removed and,
    when it holds more than ``trailing_sections`` sections, the trailing
    ones (related links, references) dropped. The title comes from
    ``.page-title``. Pages without that markup fall back to ``<title>``
    and ``<body>``.
    """

    SUPPORTED_EXTENSIONS = {".html", ".htm"}

    # Tags to remove entirely (including their content)
    REMOVE_TAGS = ["script", "style", "nav", "footer", "header", "aside", "noscript"]

    def __init__(
        self,
        main_selector: str = ".main",
        title_selector: str = ".page-title",
        sidebar_selector: str = ".main .side",
        trailing_sections: int = 4,
    ) -> None:
        self.main_selector = main_selector
        self.title_selector = title_selector
        self.sidebar_selector = sidebar_selector
        self.trailing_sections = trailing_sections

    def supports(self, path: str) -> bool:
        """Check if this loader supports the given file."""
        return Path(path).suffix.lower() in self.SUPPORTED_EXTENSIONS

    def load(self, html: str, source_url: str = "") -> EntryDraft:
        """Build an EntryDraft from HTML text.

        Args:
            html: Page markup
            source_url: URL the page was fetched from (stored on the entry)

        Returns:
            EntryDraft with markdown content

        Raises:
            InvalidInputError: If no title or no content could be extracted
        """
        soup = BeautifulSoup(html, "html.parser")

        # Extract title before cleaning; the page title lives in <head>
        title = self._title(soup)

        for tag in soup.select(self.sidebar_selector):
            tag.decompose()

        main = soup.select_one(self.main_selector)
        if main is not None:
            sections = main.select("section")
            if len(sections) > self.trailing_sections:
                for section in sections[-self.trailing_sections :]:
                    section.decompose()
        else:
            main = soup.body or soup

        for tag in main(self.REMOVE_TAGS):
            tag.decompose()

        content = self._clean_markdown(markdownify(str(main), heading_style="ATX")).strip()

        if not title:
            raise InvalidInputError("Could not find a title in the page")
        if not content:
            raise InvalidInputError("Could not find any content in the page")
        return EntryDraft(title=title, content=content, source_url=source_url)

    def load_file(self, path: str | Path, source_url: str | None = None) -> EntryDraft:
        """Load a saved HTML page.

        Raises:
            FileNotFoundError: If file does not exist
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        html = file_path.read_text(encoding="utf-8")
        if source_url is None:
            source_url = file_path.resolve().as_uri()
        return self.load(html, source_url)

    def _title(self, soup: BeautifulSoup) -> str:
        node = soup.select_one(self.title_selector)
        if node is not None and node.get_text(strip=True):
            return " ".join(node.get_text(" ", strip=True).split())
        if soup.title is not None and soup.title.string:
            return soup.title.string.strip()
        return ""

    def _clean_markdown(self, text: str) -> str:
        """Collapse runs of blank lines and strip trailing spaces."""
        cleaned = []
        prev_blank = False

        for line in text.split("\n"):
            line = line.rstrip()
            is_blank = not line
            if is_blank and prev_blank:
                continue
            cleaned.append(line)
            prev_blank = is_blank

        return "\n".join(cleaned)
