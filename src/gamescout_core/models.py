from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class SortBy(Enum):
    NAME = "name"
    METACRITIC = "metacritic"
    RELEASE_DATE = "release_date"
    RATING = "rating"


@dataclass(frozen=True)
class GameSummary:
    id: int
    name: str = ""
    metacritic: int | None = None
    released: date | None = None
    platforms: tuple[str, ...] = ()
    genres: tuple[str, ...] = ()
    image: str | None = None


@dataclass(frozen=True)
class SearchResult:
    items: tuple[GameSummary, ...]
    total: int


@dataclass(frozen=True)
class GameDetails:
    id: int
    name: str = ""
    description: str = ""
    screenshots: tuple[str, ...] = ()
    platforms: tuple[str, ...] = ()
    genres: tuple[str, ...] = ()
    metacritic: int | None = None


@dataclass(frozen=True)
class Deal:
    store: str
    price: Decimal
    normal_price: Decimal
    savings: Decimal
    url: str
    image: str | None = None
    title: str | None = None
    store_id: str = field(default="", compare=False)

    @property
    def label(self) -> str:
        """Display label for feed rows: 'Title | Store' when the title is known."""
        return f"{self.title} | {self.store}" if self.title else self.store
