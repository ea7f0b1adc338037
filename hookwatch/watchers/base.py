from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Article:
    id: str
    timestamp: float
    title: str
    body: str
    url: str
    subtitle: Optional[str] = None


class Watcher:
    name: str = "base"

    def fetch_latest(self) -> List[Article]:
        raise NotImplementedError
