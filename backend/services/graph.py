# services/graph.py
"""
Relevance Graph Service
-----------------------
Builds the bipartite keyword <-> article graph rendered by the
force-directed view.

- Keyword nodes: one per selected term, always present (even if linkless)
- Article nodes: only articles matching at least one selected term
- Links: keyword -> article, weight = TF(article, term), never 0

Nodes are keyed by (kind, id) so arbitrary article ids cannot clash
with keyword terms.

Complexity:
- Build: O(N * K) where N = articles, K = selected keywords.
"""

from backend.models import ARTICLE, KEYWORD, Graph, GraphLink, GraphNode
from backend.services.text import as_articles


def unique_terms(selected) -> list:
    """Drop blanks and repeats, keeping first-seen order."""
    seen = set()
    out = []
    for t in selected or []:
        if not isinstance(t, str) or not t or t in seen:
            continue
        seen.add(t)
        out.append(t)
    return out


def build_graph(articles, selected, doc_tfs) -> Graph:
    """
    Constructs the relevance graph for the selected keywords.

    Args:
        articles: list of Article records or dicts
        selected: selected terms (duplicates are ignored)
        doc_tfs: {article_id: {term: count}} from compute_tf_df

    Returns:
        Graph with keyword nodes first, then matching article nodes
    """
    terms = unique_terms(selected)
    doc_tfs = doc_tfs or {}

    keyword_nodes = [GraphNode(kind=KEYWORD, id=t, label=t) for t in terms]
    article_nodes = []
    links = []

    for a in as_articles(articles):
        tf = doc_tfs.get(a.id) or {}
        article_key = (ARTICLE, a.id)
        hits = 0

        for t in terms:
            weight = tf.get(t, 0)
            if weight > 0:
                hits += weight
                links.append(GraphLink(source=(KEYWORD, t), target=article_key, weight=weight))

        if hits > 0:
            article_nodes.append(GraphNode(
                kind=ARTICLE,
                id=a.id,
                label=a.title or a.id,
                url=a.url,
                hits=hits,
            ))

    return Graph(nodes=keyword_nodes + article_nodes, links=links)


def graph_to_tree(graph: Graph, root_name: str = "Keywords"):
    """
    Fold the graph into a keyword -> articles tree for the mindmap view.
    An article linked to several keywords appears under each of them.
    """
    articles_by_key = {n.key: n for n in graph.article_nodes()}
    children_by_keyword = {}
    for link in graph.links:
        node = articles_by_key.get(link.target)
        if node is not None:
            children_by_keyword.setdefault(link.source, []).append(node)

    children = []
    for kw in graph.keyword_nodes():
        children.append({
            "name": kw.label,
            "attributes": {"role": KEYWORD},
            "children": [
                {
                    "name": a.label,
                    "attributes": {"role": ARTICLE, "url": a.url or ""},
                    "children": [],
                }
                for a in children_by_keyword.get(kw.key, [])
            ],
        })

    return {"name": root_name, "children": children}
