# services/selection.py
"""
Keyword selection
-----------------
The ordered, duplicate-free list of keywords a user picked from the
ranking table, plus the lookup of which articles those keywords touch.
"""


class KeywordSelection:
    def __init__(self, terms=None):
        self._terms = []
        for t in terms or []:
            self.add(t)

    @staticmethod
    def _clean(term):
        if not isinstance(term, str):
            return ""
        return term.strip().lower()

    def add(self, term) -> bool:
        """Append a term; returns False if it was blank or already selected."""
        t = self._clean(term)
        if not t or t in self._terms:
            return False
        self._terms.append(t)
        return True

    def remove(self, term) -> bool:
        t = self._clean(term)
        if t not in self._terms:
            return False
        self._terms.remove(t)
        return True

    def reset(self):
        self._terms = []

    @property
    def terms(self):
        return list(self._terms)

    def __contains__(self, term):
        return self._clean(term) in self._terms

    def __iter__(self):
        return iter(list(self._terms))

    def __len__(self):
        return len(self._terms)

    def __repr__(self):
        return f"KeywordSelection({self._terms!r})"


def relevant_articles(articles, selected, doc_tfs):
    """
    Articles containing at least one selected term, in input order.
    An empty selection selects nothing.
    """
    terms = list(selected or [])
    if not terms:
        return []

    out = []
    for a in articles:
        tf = doc_tfs.get(a.id)
        if tf and any(t in tf for t in terms):
            out.append(a)
    return out
