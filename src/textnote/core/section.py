"""Section and content item model - no I/O dependencies."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContentItem:
    """One block of section text, optionally tagged with a dated header."""

    header: str = ""
    text: str = ""

    def __str__(self) -> str:
        if self.header:
            return f"{self.header}\n{self.text}"
        return self.text

    def is_blank(self) -> bool:
        """Headerless item whose text is nothing but newlines."""
        return not self.header and not self.text.replace("\n", "")


@dataclass
class Section:
    """A named, ordered list of content items."""

    name: str
    contents: list[ContentItem] = field(default_factory=list)

    def __setattr__(self, key, value):
        if key == "name" and "name" in self.__dict__:
            raise AttributeError("section name cannot be changed")
        super().__setattr__(key, value)

    def delete_contents(self) -> None:
        self.contents = []

    def sort_contents(self) -> None:
        """Stable sort by header; headerless items keep their relative order."""
        self.contents.sort(key=lambda item: item.header)

    def get_name_string(self, prefix: str, suffix: str) -> str:
        return f"{prefix}{self.name}{suffix}\n"

    def get_content_string(self) -> str:
        """Render contents in order, each item terminated by a newline."""
        parts = []
        for item in self.contents:
            txt = str(item)
            if not txt.endswith("\n"):
                txt += "\n"
            parts.append(txt)
        return "".join(parts)
