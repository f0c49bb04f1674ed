# models.py
"""
Data model
----------
Plain records shared by the services and the API layer.

Graph nodes are a tagged union: a node is identified by the pair
(kind, id), so an article whose id happens to look like a keyword can
never collide with a keyword node. Only the JSON wire format flattens
that pair into a single "uid" string, and it tags both kinds.
"""

from dataclasses import dataclass, field
from typing import Optional

KEYWORD = "keyword"
ARTICLE = "article"


def _as_text(value) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class Article:
    id: str
    title: str = ""
    text: str = ""
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict, fallback_id: str = ""):
        """Build an Article from loosely typed JSON, coercing bad fields to empty."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            data = {}
        aid = data.get("id")
        url = data.get("url")
        return cls(
            id=str(aid) if aid not in (None, "") else fallback_id,
            title=_as_text(data.get("title")),
            text=_as_text(data.get("text")),
            url=url.strip() if isinstance(url, str) and url.strip() else None,
        )

    def to_dict(self):
        out = {"id": self.id, "title": self.title, "text": self.text}
        if self.url:
            out["url"] = self.url
        return out


@dataclass(frozen=True)
class KeywordStat:
    term: str
    df: int
    tfidf: float

    def to_dict(self):
        return {"term": self.term, "df": self.df, "tfidf": round(self.tfidf, 6)}


@dataclass(frozen=True)
class GraphNode:
    kind: str
    id: str
    label: str
    url: Optional[str] = None
    hits: Optional[int] = None

    @property
    def key(self):
        return (self.kind, self.id)

    @property
    def uid(self) -> str:
        return node_uid(self.key)

    def to_dict(self):
        out = {"uid": self.uid, "id": self.id, "kind": self.kind, "label": self.label}
        if self.url:
            out["url"] = self.url
        if self.hits is not None:
            out["hits"] = self.hits
        return out


@dataclass(frozen=True)
class GraphLink:
    source: tuple
    target: tuple
    weight: int

    def to_dict(self):
        return {
            "source": node_uid(self.source),
            "target": node_uid(self.target),
            "weight": self.weight,
        }


@dataclass
class Graph:
    nodes: list = field(default_factory=list)
    links: list = field(default_factory=list)

    def keyword_nodes(self):
        return [n for n in self.nodes if n.kind == KEYWORD]

    def article_nodes(self):
        return [n for n in self.nodes if n.kind == ARTICLE]

    def to_dict(self):
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }


def node_uid(key) -> str:
    kind, nid = key
    return f"{kind}:{nid}"
