"""
Quest -> book reference graph using igraph.

The set of referenced books answers "is this a quest book"; the graph itself
answers "which quests reference this book".
"""

import logging
from typing import Callable, Iterable, Iterator

import igraph as ig

from .records import BookRecord, QuestRecord

logger = logging.getLogger(__name__)

Resolver = Callable[[str | None], BookRecord | None]


class QuestBookIndex:
    """Books referenced by quest aliases, built once per run."""

    def __init__(self):
        self._books: set[str] = set()
        self._edges: set[tuple[str, str]] = set()
        self._graph: ig.Graph | None = None
        self._key_to_vertex: dict[str, int] = {}
        self._vertex_to_key: dict[int, str] = {}

    @classmethod
    def build(cls, quests: Iterable[QuestRecord], resolve_book: Resolver) -> "QuestBookIndex":
        """Resolve every alias reference of every quest and keep the books."""
        index = cls()
        quest_count = 0
        for quest in quests:
            quest_count += 1
            for alias in quest.aliases or ():
                refs = []
                if alias.object_ref is not None:
                    refs.append(alias.object_ref)
                if alias.items is not None:
                    refs.extend(alias.items)

                for ref in refs:
                    book = resolve_book(ref)
                    if book is None:
                        logger.debug("%s: reference %s is not a book", quest.form_key, ref)
                        continue
                    index.add(quest.form_key, book.form_key)

        logger.info("Scanned %d quests, found %d quest books", quest_count, len(index))
        return index

    def add(self, quest_key: str, book_key: str):
        self._books.add(book_key)
        self._edges.add((quest_key, book_key))
        self._graph = None

    def __contains__(self, book_key: object) -> bool:
        return book_key in self._books

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._books))

    def load(self):
        """Build the igraph graph from the collected edges."""
        keys = sorted({k for edge in self._edges for k in edge})
        self._key_to_vertex = {key: idx for idx, key in enumerate(keys)}
        self._vertex_to_key = {idx: key for key, idx in self._key_to_vertex.items()}

        vertex_edges = [
            (self._key_to_vertex[quest], self._key_to_vertex[book])
            for quest, book in sorted(self._edges)
        ]

        self._graph = ig.Graph(
            n=len(keys),
            edges=vertex_edges,
            directed=True
        )
        self._graph.vs['form_key'] = keys

    @property
    def graph(self) -> ig.Graph:
        """Get the igraph Graph object, loading if needed."""
        if self._graph is None:
            self.load()
        return self._graph

    def quests_for(self, book_key: str) -> list[str]:
        """Quests whose aliases reference the given book."""
        if book_key not in self._books:
            return []
        graph = self.graph
        vertex = self._key_to_vertex[book_key]
        return sorted(self._vertex_to_key[v] for v in set(graph.neighbors(vertex, mode='in')))
